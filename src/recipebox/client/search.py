"""Search orchestration: read inputs, consult the cache, fetch and render."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from recipebox.client.cache import ResultCache
from recipebox.client.document import Document
from recipebox.client.favorites import FavoritesStore
from recipebox.client.fetch import FetchAdapter
from recipebox.client.render import Renderer
from recipebox.models import (
    DEFAULT_PAGE_SIZE,
    RecipeDetail,
    RecipeSummary,
    SearchFilters,
    SearchQueryDescriptor,
    summaries_from_details,
)

logger = logging.getLogger(__name__)

NO_RESULTS_FOR_QUERY = 'No recipes found for "{query}". Try "pasta" or "chicken"!'
NO_RESULTS = "No recipes found. Try searching for something delicious!"
NO_FAVORITES = "No favorites yet! Heart some recipes to see them here."
FEATURED_UNAVAILABLE = "Unable to load featured recipes."
SHOW_ALL_LABEL = "Show All Recipes"


class SearchController:
    """Drives the results area of the recipes page.

    Every render into the results area takes a new generation number; responses
    that come back after a newer search (or favorites view) was issued are
    cached but never rendered, so the page always reflects the latest request.
    """

    def __init__(
        self,
        document: Document,
        fetcher: FetchAdapter,
        cache: ResultCache,
        renderer: Renderer,
        favorites: FavoritesStore,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        favorites_batch_size: int = 5,
    ) -> None:
        self._document = document
        self._fetcher = fetcher
        self._cache = cache
        self._renderer = renderer
        self._favorites = favorites
        self._default_page_size = default_page_size
        self._favorites_batch_size = max(1, favorites_batch_size)
        self._generation = 0
        self.last_descriptor: Optional[SearchQueryDescriptor] = None

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def read_descriptor(self) -> SearchQueryDescriptor:
        """Build a descriptor from the search box, page size and filter menus."""

        value = self._document.value
        return SearchQueryDescriptor(
            text=value("#search"),
            page_size=value("#perpage") or self._default_page_size,
            filters=SearchFilters(
                cuisine=value("#cuisine-filter"),
                diet=value("#diet-filter"),
                intolerances=value("#intolerances-filter"),
                meal_type=value("#meal-type-filter"),
            ),
        )

    def apply_descriptor(self, descriptor: SearchQueryDescriptor) -> None:
        """Reflect *descriptor* in the page inputs."""

        set_value = self._document.set_value
        set_value("#search", descriptor.text)
        set_value("#perpage", str(descriptor.page_size))
        set_value("#cuisine-filter", descriptor.filters.cuisine or "")
        set_value("#diet-filter", descriptor.filters.diet or "")
        set_value("#intolerances-filter", descriptor.filters.intolerances or "")
        set_value("#meal-type-filter", descriptor.filters.meal_type or "")

    async def perform_search(
        self, descriptor: Optional[SearchQueryDescriptor] = None
    ) -> Optional[list[RecipeSummary]]:
        """Run one search and render it.

        Returns the rendered results, or ``None`` when the search failed or was
        superseded before its response arrived.
        """

        if descriptor is None:
            descriptor = self.read_descriptor()
        self.last_descriptor = descriptor
        generation = self._next_generation()

        loading = self._document.query("#loading")
        self._document.hide(self._document.query("#no-results"))
        self._document.hide(self._document.query("#error-state"))

        cached = self._cache.get(descriptor)
        if cached is not None:
            logger.debug("Search cache hit key=%s", descriptor.cache_key())
            self._document.hide(loading)
            self._present(descriptor, cached)
            return cached

        self._document.show(loading)
        try:
            results = await self._fetcher.fetch_list(descriptor.to_query_string())
            self._cache.put(descriptor, results)
            if not self._is_current(generation):
                logger.debug("Discarding stale search response key=%s", descriptor.cache_key())
                return None
            self._present(descriptor, results)
            return results
        except Exception as exc:
            if not self._is_current(generation):
                return None
            logger.exception("Search error for key=%s", descriptor.cache_key())
            self._show_error(str(exc) or exc.__class__.__name__)
            return None
        finally:
            if self._is_current(generation):
                self._document.hide(loading)

    async def retry(self) -> Optional[list[RecipeSummary]]:
        """Re-run the most recent search with the same descriptor."""

        return await self.perform_search(self.last_descriptor)

    async def clear_search(self) -> Optional[list[RecipeSummary]]:
        search_input = self._document.query("#search")
        if search_input is None:
            return None
        self._document.set_element_value(search_input, "")
        self._document.focus(search_input)
        return await self.perform_search()

    async def clear_filters(self) -> Optional[list[RecipeSummary]]:
        for select in self._document.query_all(".filter-select"):
            self._document.set_element_value(select, "")
        return await self.perform_search()

    def _present(self, descriptor: SearchQueryDescriptor, results: Sequence[RecipeSummary]) -> None:
        self._renderer.render_summaries(results)
        if results:
            return
        no_results = self._document.query("#no-results")
        if no_results is None:
            return
        self._document.show(no_results)
        message = self._document.query("p", no_results)
        if message is not None:
            text = NO_RESULTS_FOR_QUERY.format(query=descriptor.text) if descriptor.text else NO_RESULTS
            self._document.set_text(message, text)

    def _show_error(self, message: str) -> None:
        error_state = self._document.query("#error-state")
        if error_state is not None:
            self._document.show(error_state)
            error_message = self._document.query("#error-message")
            if error_message is not None:
                self._document.set_text(error_message, message)
            return
        container = self._renderer.card_container()
        if container is not None:
            self._renderer.render_message(container, message, "error-state", "error-message")

    @property
    def favorites_view_active(self) -> bool:
        button = self._document.query("#favorites-toggle")
        return button is not None and self._document.has_class(button, "active")

    def update_favorites_counter(self) -> None:
        button = self._document.query("#favorites-toggle")
        if button is not None and not self.favorites_view_active:
            self._document.set_text(button, f"My Favorites ({len(self._favorites)})")

    async def toggle_favorites_view(self) -> Optional[list[RecipeSummary]]:
        """Switch the results area between the favorites list and the last search."""

        button = self._document.query("#favorites-toggle")
        if button is None:
            return None
        if self._document.toggle_class(button, "active"):
            self._document.set_text(button, SHOW_ALL_LABEL)
            return await self.show_favorites()
        self.update_favorites_counter()
        return await self.perform_search()

    async def show_favorites(self) -> Optional[list[RecipeSummary]]:
        """Render cards for every favorite id, fetched in bounded batches."""

        generation = self._next_generation()
        container = self._renderer.card_container()
        loading = self._document.query("#loading")
        self._document.hide(self._document.query("#no-results"))
        self._document.hide(self._document.query("#error-state"))

        ids = self._favorites.ids
        try:
            if not ids:
                if container is not None:
                    self._renderer.render_message(container, NO_FAVORITES, "no-favorites")
                return []

            self._document.show(loading)
            details = await self.fetch_favorite_details(ids)
            if not self._is_current(generation):
                return None
            summaries = summaries_from_details(details)
            self._renderer.render_summaries(summaries)
            return summaries
        except Exception as exc:
            if not self._is_current(generation):
                return None
            logger.exception("Loading favorites failed")
            if container is not None:
                self._renderer.render_message(
                    container, f"Error loading favorites: {exc}", "error-state"
                )
            return None
        finally:
            if self._is_current(generation):
                self._document.hide(loading)

    async def fetch_favorite_details(self, ids: Sequence[int]) -> list[RecipeDetail]:
        """Fetch details in sequential chunks; a failed id is skipped, not fatal."""

        details: list[RecipeDetail] = []
        size = self._favorites_batch_size
        for start in range(0, len(ids), size):
            batch = list(ids[start : start + size])
            logger.debug("Fetching favorites batch ids=%s", batch)
            outcomes = await asyncio.gather(
                *(self._fetcher.fetch_detail(recipe_id) for recipe_id in batch),
                return_exceptions=True,
            )
            for recipe_id, outcome in zip(batch, outcomes):
                if isinstance(outcome, Exception):
                    logger.warning("Skipping favorite recipe_id=%s: %s", recipe_id, outcome)
                    continue
                if isinstance(outcome, BaseException):
                    raise outcome
                details.append(outcome)
        return details

    async def load_featured(self, count: int = 6) -> list[RecipeSummary]:
        """Fill the home page's featured list."""

        container = self._document.query("#featured-list")
        if container is None:
            return []
        descriptor = SearchQueryDescriptor(text="", page_size=count)
        try:
            results = await self._fetcher.fetch_list(descriptor.to_query_string())
            self._renderer.render_summaries(results, container)
        except Exception as exc:
            logger.warning("Featured list failed: %s", exc)
            self._renderer.render_message(
                container, FEATURED_UNAVAILABLE, "featured-error", "error-message"
            )
            return []
        return results


__all__ = [
    "FEATURED_UNAVAILABLE",
    "NO_FAVORITES",
    "NO_RESULTS",
    "NO_RESULTS_FOR_QUERY",
    "SearchController",
]
