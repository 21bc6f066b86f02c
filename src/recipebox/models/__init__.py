"""Pydantic models defining shared data contracts."""

from recipebox.models.contact import ContactMessage
from recipebox.models.recipe import (
    Ingredient,
    InstructionStep,
    RecipeDetail,
    RecipeSummary,
    parse_summaries,
    summaries_from_details,
)
from recipebox.models.search import DEFAULT_PAGE_SIZE, SearchFilters, SearchQueryDescriptor

__all__ = [
    "ContactMessage",
    "DEFAULT_PAGE_SIZE",
    "Ingredient",
    "InstructionStep",
    "RecipeDetail",
    "RecipeSummary",
    "SearchFilters",
    "SearchQueryDescriptor",
    "parse_summaries",
    "summaries_from_details",
]
