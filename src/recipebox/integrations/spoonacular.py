"""Spoonacular HTTP client used by the proxy endpoints."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx

from recipebox.config import get_settings

logger = logging.getLogger(__name__)

COMPLEX_SEARCH_PATH = "recipes/complexSearch"
CREDENTIAL_NAME = "SPOONACULAR_KEY"


class MissingCredentialError(RuntimeError):
    """Raised when no Spoonacular API key is configured."""

    def __init__(self) -> None:
        super().__init__(f"Missing {CREDENTIAL_NAME}")


@dataclass(frozen=True)
class UpstreamResponse:
    """Status and raw body of one upstream call."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)


class SpoonacularClient:
    """Minimal client that injects the API key into every upstream request."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.spoonacular_key
        self._base_url = (base_url or settings.upstream_base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.upstream_timeout
        self._transport = transport

    @property
    def has_credentials(self) -> bool:
        return bool(self._api_key)

    async def get(self, path: str, params: Sequence[tuple[str, str]] = ()) -> UpstreamResponse:
        """GET ``{base_url}/{path}`` with the API key prepended to *params*."""

        if not self._api_key:
            raise MissingCredentialError()

        url = f"{self._base_url}/{path.lstrip('/')}"
        query = [("apiKey", self._api_key), *params]
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.get(url, params=query)
        logger.debug("Upstream GET %s status=%s", path, response.status_code)
        return UpstreamResponse(status_code=response.status_code, text=response.text)

    async def complex_search(self, params: Sequence[tuple[str, str]]) -> UpstreamResponse:
        return await self.get(COMPLEX_SEARCH_PATH, params)

    async def recipe_information(self, recipe_id: str) -> UpstreamResponse:
        path = f"recipes/{quote(str(recipe_id), safe='')}/information"
        return await self.get(path, [("includeNutrition", "false")])


__all__ = [
    "COMPLEX_SEARCH_PATH",
    "CREDENTIAL_NAME",
    "MissingCredentialError",
    "SpoonacularClient",
    "UpstreamResponse",
]
