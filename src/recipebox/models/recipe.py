"""Recipe data models parsed from upstream provider payloads."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


def _positive_int(value: Any) -> Optional[int]:
    """Return *value* as a positive integer, or ``None`` when absent or unusable."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer():
        return int(value) if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


def _text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


class RecipeSummary(BaseModel):
    """Search result card data."""

    id: int
    title: str = Field(default="")
    image: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_upstream(cls, payload: Any) -> Optional["RecipeSummary"]:
        """Build a summary from one upstream result entry; ``None`` when it has no usable id."""

        if not isinstance(payload, dict):
            return None
        recipe_id = payload.get("id")
        if isinstance(recipe_id, bool) or not isinstance(recipe_id, int):
            return None
        return cls(
            id=recipe_id,
            title=_text(payload.get("title")) or "",
            image=_text(payload.get("image")),
        )


def parse_summaries(payload: Any) -> list[RecipeSummary]:
    """Extract summaries from a ``{"results": [...]}`` list response.

    Raises ``ValueError`` when the payload does not have the list shape at all;
    individual malformed entries are skipped.
    """

    if not isinstance(payload, dict):
        raise ValueError("Expected a JSON object with a 'results' field")
    results = payload.get("results", [])
    if not isinstance(results, list):
        raise ValueError("'results' field is not a list")

    summaries: list[RecipeSummary] = []
    for entry in results:
        summary = RecipeSummary.from_upstream(entry)
        if summary is None:
            logger.debug("Skipping malformed search result entry=%r", entry)
            continue
        summaries.append(summary)
    return summaries


class Ingredient(BaseModel):
    """Ingredient line as written in the source recipe."""

    original: str

    model_config = ConfigDict(frozen=True)


class InstructionStep(BaseModel):
    """Single numbered preparation step."""

    step_number: int = Field(ge=1)
    text: str

    model_config = ConfigDict(frozen=True)


def _ingredients(entries: Any) -> list[Ingredient]:
    if not isinstance(entries, list):
        return []
    ingredients: list[Ingredient] = []
    for entry in entries:
        original = _text(entry.get("original")) if isinstance(entry, dict) else None
        if original:
            ingredients.append(Ingredient(original=original))
    return ingredients


def _instruction_steps(instructions: Any) -> list[InstructionStep]:
    """Use the first analyzed instruction block, numbering steps by position when needed."""

    if not isinstance(instructions, list) or not instructions:
        return []
    first = instructions[0]
    steps = first.get("steps") if isinstance(first, dict) else None
    if not isinstance(steps, list):
        return []

    parsed: list[InstructionStep] = []
    for entry in steps:
        if not isinstance(entry, dict):
            continue
        text = _text(entry.get("step"))
        if not text:
            continue
        number = _positive_int(entry.get("number")) or len(parsed) + 1
        parsed.append(InstructionStep(step_number=number, text=text))
    return parsed


class RecipeDetail(BaseModel):
    """Full recipe information shown in the detail dialog.

    Field fallbacks: missing or non-positive ``servings``/``ready_in_minutes``
    become ``None``; ingredients without an ``original`` line are dropped;
    instruction steps come from the first analyzed block only.
    """

    id: int
    title: str = Field(default="")
    image: Optional[str] = Field(default=None)
    servings: Optional[int] = Field(default=None)
    ready_in_minutes: Optional[int] = Field(default=None, alias="readyInMinutes")
    source_url: Optional[str] = Field(default=None, alias="sourceUrl")
    ingredients: list[Ingredient] = Field(default_factory=list)
    instruction_steps: list[InstructionStep] = Field(default_factory=list)
    summary: Optional[str] = Field(default=None)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_upstream(cls, payload: Any) -> "RecipeDetail":
        """Parse the upstream recipe information object.

        Raises ``ValueError`` when the payload is not an object carrying an integer id.
        """

        if not isinstance(payload, dict):
            raise ValueError("Expected a JSON object for recipe detail")
        recipe_id = payload.get("id")
        if isinstance(recipe_id, bool) or not isinstance(recipe_id, int):
            raise ValueError("Recipe detail is missing an integer id")

        try:
            return cls(
                id=recipe_id,
                title=_text(payload.get("title")) or "",
                image=_text(payload.get("image")),
                servings=_positive_int(payload.get("servings")),
                ready_in_minutes=_positive_int(payload.get("readyInMinutes")),
                source_url=_text(payload.get("sourceUrl")),
                ingredients=_ingredients(payload.get("extendedIngredients")),
                instruction_steps=_instruction_steps(payload.get("analyzedInstructions")),
                summary=_text(payload.get("summary")),
            )
        except ValidationError as exc:
            raise ValueError(f"Invalid recipe detail payload: {exc}") from exc

    def as_summary(self) -> RecipeSummary:
        return RecipeSummary(id=self.id, title=self.title, image=self.image)


def summaries_from_details(details: Iterable[RecipeDetail]) -> list[RecipeSummary]:
    return [detail.as_summary() for detail in details]


__all__ = [
    "Ingredient",
    "InstructionStep",
    "RecipeDetail",
    "RecipeSummary",
    "parse_summaries",
    "summaries_from_details",
]
