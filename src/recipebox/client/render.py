"""Projection of recipe models into page content."""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from bs4 import BeautifulSoup, Tag

from recipebox.client.document import Document
from recipebox.client.favorites import FavoritesStore
from recipebox.models import RecipeDetail, RecipeSummary
from recipebox.templates import render

logger = logging.getLogger(__name__)

CARD_PLACEHOLDER = "/api/placeholder/300/200"
DETAIL_PLACEHOLDER = "/api/placeholder/400/300"
CARD_CONTAINERS = ("#recipes", "#featured-list")

_WHITESPACE = re.compile(r"\s+")


def summary_text(summary: Optional[str]) -> str:
    """Reduce the provider's HTML summary to plain text."""

    if not summary:
        return ""
    text = BeautifulSoup(summary, "html.parser").get_text()
    return _WHITESPACE.sub(" ", text).strip()


class Renderer:
    """Writes recipe cards, recipe details and status messages into a :class:`Document`.

    All upstream text goes through Jinja2 autoescaping, so titles, ingredient
    lines and links can never inject markup.
    """

    def __init__(self, document: Document, favorites: FavoritesStore) -> None:
        self._document = document
        self._favorites = favorites

    def card_container(self) -> Optional[Tag]:
        for selector in CARD_CONTAINERS:
            container = self._document.query(selector)
            if container is not None:
                return container
        return None

    def render_summaries(
        self,
        summaries: Sequence[RecipeSummary],
        container: Optional[Tag] = None,
    ) -> None:
        """Replace the card container's content with one card per summary."""

        target = container if container is not None else self.card_container()
        if target is None:
            logger.debug("No card container on page; skipping render of %s cards", len(summaries))
            return
        markup = render(
            "partials/recipe_cards.html",
            recipes=list(summaries),
            favorite_ids=set(self._favorites.ids),
            placeholder=CARD_PLACEHOLDER,
        )
        self._document.set_inner_html(target, markup)

    def render_detail(self, detail: RecipeDetail) -> str:
        """Return the modal body markup for *detail*."""

        return render(
            "partials/recipe_detail.html",
            recipe=detail,
            is_favorite=self._favorites.is_favorite(detail.id),
            summary_text=summary_text(detail.summary),
            placeholder=DETAIL_PLACEHOLDER,
        )

    def modal_loading(self) -> str:
        return render("partials/modal_loading.html")

    def modal_error(self, recipe_id: int, message: str) -> str:
        return render("partials/modal_error.html", recipe_id=recipe_id, message=message)

    def render_message(
        self,
        target: Tag,
        text: str,
        css_class: str,
        text_class: str = "",
    ) -> None:
        markup = render(
            "partials/message.html",
            text=text,
            css_class=css_class,
            text_class=text_class,
        )
        self._document.set_inner_html(target, markup)

    def update_favorite_badges(self, recipe_id: int, is_favorite: bool) -> int:
        """Refresh every rendered favorite toggle for *recipe_id* in place; return how many."""

        badges = self._document.query_all(f'.favorite-btn[data-id="{recipe_id}"]')
        for badge in badges:
            if is_favorite:
                self._document.add_class(badge, "favorited")
            else:
                self._document.remove_class(badge, "favorited")
            badge.string = "❤️" if is_favorite else "🤍"
            badge["aria-label"] = "Remove from favorites" if is_favorite else "Add to favorites"
        return len(badges)


__all__ = ["CARD_PLACEHOLDER", "DETAIL_PLACEHOLDER", "Renderer", "summary_text"]
