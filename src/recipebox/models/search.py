"""Search request descriptors used as cache keys and proxy query builders."""

from __future__ import annotations

import json
from typing import Any, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PAGE_SIZE = 12


class SearchFilters(BaseModel):
    """Optional provider filters; blank values mean "any"."""

    cuisine: Optional[str] = Field(default=None)
    diet: Optional[str] = Field(default=None)
    intolerances: Optional[str] = Field(default=None)
    meal_type: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @field_validator("cuisine", "diet", "intolerances", "meal_type", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            cleaned = value.strip()
            return cleaned or None
        return value

    def as_query_params(self) -> list[tuple[str, str]]:
        """Return the non-empty filters using the provider parameter names."""

        params: list[tuple[str, str]] = []
        if self.cuisine:
            params.append(("cuisine", self.cuisine))
        if self.diet:
            params.append(("diet", self.diet))
        if self.intolerances:
            params.append(("intolerances", self.intolerances))
        if self.meal_type:
            params.append(("type", self.meal_type))
        return params


class SearchQueryDescriptor(BaseModel):
    """Canonical representation of one search request."""

    text: str = Field(default="")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE)
    filters: SearchFilters = Field(default_factory=SearchFilters)

    model_config = ConfigDict(frozen=True)

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("page_size", mode="before")
    @classmethod
    def coerce_page_size(cls, value: Any) -> int:
        if value is None or isinstance(value, bool):
            return DEFAULT_PAGE_SIZE
        try:
            parsed = int(str(value).strip())
        except ValueError:
            return DEFAULT_PAGE_SIZE
        return parsed if parsed > 0 else DEFAULT_PAGE_SIZE

    def cache_key(self) -> str:
        """Serialize with a fixed field order so equal searches share one key."""

        return json.dumps(
            [
                self.text,
                self.page_size,
                [
                    self.filters.cuisine,
                    self.filters.diet,
                    self.filters.intolerances,
                    self.filters.meal_type,
                ],
            ],
            separators=(",", ":"),
        )

    def to_query_string(self) -> str:
        """Build the proxy query string (``q``, ``number`` and any filters)."""

        params = [("q", self.text), ("number", str(self.page_size))]
        params.extend(self.filters.as_query_params())
        return urlencode(params)


__all__ = ["DEFAULT_PAGE_SIZE", "SearchFilters", "SearchQueryDescriptor"]
