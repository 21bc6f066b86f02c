"""Client application state and event dispatch for one page."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from bs4 import Tag

from recipebox.client.cache import ResultCache
from recipebox.client.contact import ContactFormController
from recipebox.client.debounce import Debouncer
from recipebox.client.document import Document, KeyEvent
from recipebox.client.favorites import FavoritesStore
from recipebox.client.fetch import FetchAdapter
from recipebox.client.modal import ModalController
from recipebox.client.render import Renderer
from recipebox.client.search import SearchController
from recipebox.client.theme import ThemeController
from recipebox.config import Settings, get_settings
from recipebox.db.kv_store import KeyValueStore
from recipebox.models import SearchQueryDescriptor
from recipebox.templates import render_page

logger = logging.getLogger(__name__)

PAGES = {
    "index": ("index.html", "Home"),
    "recipes": ("recipes.html", "Recipes"),
    "contact": ("contact.html", "Contact"),
}


def _recipe_id(element: Tag) -> Optional[int]:
    try:
        return int(element.get("data-id", ""))
    except (TypeError, ValueError):
        return None


class ClientApp:
    """Owns every client-side collaborator for a single page.

    The result cache, favorites, renderer and controllers are built once here
    and handed to each other explicitly. Event methods mirror what a browser
    page would receive: clicks, text input, select changes and key presses.
    """

    def __init__(
        self,
        document: Document,
        http_client: httpx.AsyncClient,
        store: KeyValueStore,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.document = document
        self.store = store
        self.cache = ResultCache()
        self.favorites = FavoritesStore(store)
        self.fetcher = FetchAdapter(http_client)
        self.renderer = Renderer(document, self.favorites)
        self.search = SearchController(
            document,
            self.fetcher,
            self.cache,
            self.renderer,
            self.favorites,
            default_page_size=settings.default_page_size,
            favorites_batch_size=settings.favorites_batch_size,
        )
        self.modal = ModalController(document, self.fetcher, self.renderer)
        self.theme = ThemeController(document, store)
        self.contact = ContactFormController(document, http_client)
        self.debounced_search = Debouncer(self.search.perform_search, settings.search_debounce_seconds)
        self._featured_count = settings.featured_count

    @classmethod
    def for_page(
        cls,
        page: str,
        http_client: httpx.AsyncClient,
        store: KeyValueStore,
        settings: Optional[Settings] = None,
    ) -> "ClientApp":
        """Build the client for one of the bundled pages (``index``, ``recipes``, ``contact``)."""

        settings = settings or get_settings()
        template, title = PAGES[page]
        markup = render_page(template, page_title=title, default_page_size=settings.default_page_size)
        return cls(Document(markup), http_client, store, settings)

    async def start(self, descriptor: Optional[SearchQueryDescriptor] = None) -> None:
        """Page bootstrap: theme, favorites counter, then the initial content.

        A *descriptor* pre-fills the search inputs and is used as-is for the
        first search instead of reading the inputs back.
        """

        self.theme.init()
        self.search.update_favorites_counter()
        if self.document.query("#recipes") is not None:
            if descriptor is not None:
                self.search.apply_descriptor(descriptor)
            await self.search.perform_search(descriptor)
        if self.document.query("#featured-list") is not None:
            await self.search.load_featured(self._featured_count)

    async def toggle_favorite(self, recipe_id: int) -> bool:
        is_favorite = self.favorites.toggle(recipe_id)
        self.renderer.update_favorite_badges(recipe_id, is_favorite)
        self.search.update_favorites_counter()
        if self.search.favorites_view_active:
            await self.search.show_favorites()
        return is_favorite

    async def click(self, target: Optional[Tag]) -> None:
        """Dispatch a click on *target* to the matching controller."""

        if target is None:
            return
        has_class = self.document.has_class
        if target is self.modal.dialog:
            self.modal.close()
            return

        self.document.focus(target)
        element_id = target.get("id")
        if has_class(target, "modal-close"):
            self.modal.close()
        elif has_class(target, "view-btn"):
            recipe_id = _recipe_id(target)
            if recipe_id is not None:
                await self.modal.open(recipe_id, trigger=target)
        elif has_class(target, "favorite-btn"):
            recipe_id = _recipe_id(target)
            if recipe_id is not None:
                await self.toggle_favorite(recipe_id)
        elif has_class(target, "modal-retry"):
            await self.modal.retry()
        elif has_class(target, "retry-btn"):
            await self.search.retry()
        elif element_id == "clear-search":
            await self.search.clear_search()
        elif element_id == "clear-filters":
            await self.search.clear_filters()
        elif element_id == "favorites-toggle":
            await self.search.toggle_favorites_view()
        elif element_id == "dark-mode-toggle":
            self.theme.toggle()
        elif target.get("type") == "submit" and target.find_parent(id="contact-form") is not None:
            await self.contact.submit()
        else:
            logger.debug("Unhandled click on <%s id=%s>", target.name, element_id)

    def input(self, selector: str, value: str) -> None:
        """Type *value* into a field; the search box triggers a debounced search.

        Must be called from a running event loop.
        """

        element = self.document.query(selector)
        if element is None:
            return
        self.document.set_element_value(element, value)
        self.document.focus(element)
        if element.get("id") == "search":
            self.debounced_search()

    async def change(self, selector: str, value: str) -> None:
        """Select a new value; page size and filter menus search immediately."""

        element = self.document.query(selector)
        if element is None:
            return
        self.document.set_element_value(element, value)
        if element.get("id") == "perpage" or self.document.has_class(element, "filter-select"):
            await self.search.perform_search()

    async def keydown(self, event: KeyEvent) -> None:
        target = event.target if event.target is not None else self.document.active_element

        if event.key == "Escape" and self.modal.is_open:
            self.modal.close()
            return

        if event.key == "Tab":
            self.modal.handle_tab(event)
            if not event.default_prevented:
                self.document.move_focus(backward=event.shift)
            return

        if event.key == "Enter" and target is not None:
            if target.get("id") == "search" or self.document.has_class(target, "filter-select"):
                await self.search.perform_search()


__all__ = ["ClientApp", "PAGES"]
