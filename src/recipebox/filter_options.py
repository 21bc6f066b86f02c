"""Filter option definitions for recipe search (Spoonacular parameter values)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, MutableMapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class FilterOption:
    """A selectable value for one of the search filter menus."""

    value: str
    label: str


def _options(*labels: str) -> Tuple[FilterOption, ...]:
    return tuple(FilterOption(value=label.lower(), label=label) for label in labels)


def build_lookup(options: Sequence[FilterOption]) -> MutableMapping[str, FilterOption]:
    """Create a mapping of option values to their definitions."""

    return {option.value: option for option in options}


CUISINE_OPTIONS = _options(
    "African",
    "American",
    "British",
    "Cajun",
    "Caribbean",
    "Chinese",
    "Eastern European",
    "French",
    "German",
    "Greek",
    "Indian",
    "Irish",
    "Italian",
    "Japanese",
    "Korean",
    "Latin American",
    "Mediterranean",
    "Mexican",
    "Middle Eastern",
    "Nordic",
    "Southern",
    "Spanish",
    "Thai",
    "Vietnamese",
)

DIET_OPTIONS = _options(
    "Gluten Free",
    "Ketogenic",
    "Vegetarian",
    "Lacto-Vegetarian",
    "Ovo-Vegetarian",
    "Vegan",
    "Pescetarian",
    "Paleo",
    "Primal",
    "Whole30",
)

INTOLERANCE_OPTIONS = _options(
    "Dairy",
    "Egg",
    "Gluten",
    "Grain",
    "Peanut",
    "Seafood",
    "Sesame",
    "Shellfish",
    "Soy",
    "Sulfite",
    "Tree Nut",
    "Wheat",
)

MEAL_TYPE_OPTIONS = _options(
    "Main Course",
    "Side Dish",
    "Dessert",
    "Appetizer",
    "Salad",
    "Bread",
    "Breakfast",
    "Soup",
    "Beverage",
    "Sauce",
    "Marinade",
    "Fingerfood",
    "Snack",
    "Drink",
)

PAGE_SIZE_OPTIONS = (6, 12, 24, 48)

CUISINE_LOOKUP = build_lookup(CUISINE_OPTIONS)
DIET_LOOKUP = build_lookup(DIET_OPTIONS)
INTOLERANCE_LOOKUP = build_lookup(INTOLERANCE_OPTIONS)
MEAL_TYPE_LOOKUP = build_lookup(MEAL_TYPE_OPTIONS)


def normalize_choice(value: Optional[str], lookup: Mapping[str, FilterOption]) -> Optional[str]:
    """Return the canonical option value for *value*, or ``None`` when it is not offered."""

    if not value:
        return None
    cleaned = value.strip().lower()
    option = lookup.get(cleaned)
    return option.value if option else None
