"""Jinja2 templates shared by the server pages and the client renderer."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from recipebox.filter_options import (
    CUISINE_OPTIONS,
    DIET_OPTIONS,
    INTOLERANCE_OPTIONS,
    MEAL_TYPE_OPTIONS,
    PAGE_SIZE_OPTIONS,
)


@lru_cache
def environment() -> Environment:
    """Return the shared template environment with HTML autoescaping enabled."""

    return Environment(
        loader=PackageLoader("recipebox", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render(name: str, **context: Any) -> str:
    """Render the template *name* with *context*."""

    return environment().get_template(name).render(**context)


def render_page(name: str, *, page_title: str, default_page_size: int = 12, **context: Any) -> str:
    """Render a full page shell with the search filter menus available to it."""

    page_sizes = sorted(set(PAGE_SIZE_OPTIONS) | {default_page_size})
    return render(
        name,
        page_title=page_title,
        default_page_size=default_page_size,
        page_sizes=page_sizes,
        cuisine_options=CUISINE_OPTIONS,
        diet_options=DIET_OPTIONS,
        intolerance_options=INTOLERANCE_OPTIONS,
        meal_type_options=MEAL_TYPE_OPTIONS,
        **context,
    )
