"""Recipe detail dialog lifecycle and keyboard focus trap."""

from __future__ import annotations

import enum
import logging
from typing import Optional

from bs4 import Tag

from recipebox.client.document import Document, KeyEvent, index_of
from recipebox.client.fetch import FetchAdapter, RecipeFetchError
from recipebox.client.render import Renderer
from recipebox.models import RecipeDetail

logger = logging.getLogger(__name__)


class ModalState(str, enum.Enum):
    CLOSED = "closed"
    OPEN_LOADING = "open-loading"
    OPEN_READY = "open-ready"
    OPEN_ERROR = "open-error"


class ModalController:
    """Single dialog instance showing one recipe's details.

    The element that triggered :meth:`open` is remembered and receives focus
    again on :meth:`close`. Each open takes a token; detail responses that
    arrive after the dialog was closed or reopened for another recipe are
    dropped.
    """

    def __init__(self, document: Document, fetcher: FetchAdapter, renderer: Renderer) -> None:
        self._document = document
        self._fetcher = fetcher
        self._renderer = renderer
        self.state = ModalState.CLOSED
        self.recipe_id: Optional[int] = None
        self._token = 0
        self._trigger: Optional[Tag] = None
        self._focusable: list[Tag] = []

    @property
    def is_open(self) -> bool:
        return self.state is not ModalState.CLOSED

    @property
    def dialog(self) -> Optional[Tag]:
        return self._document.query("#modal")

    @property
    def focusable_elements(self) -> list[Tag]:
        return list(self._focusable)

    async def open(self, recipe_id: int, trigger: Optional[Tag] = None) -> Optional[RecipeDetail]:
        """Show the dialog for *recipe_id* and load its details."""

        dialog = self.dialog
        body = self._document.query("#modal-body")
        if dialog is None or body is None:
            return None

        if not self.is_open:
            self._trigger = trigger if trigger is not None else self._document.active_element
        self._token += 1
        token = self._token
        self.recipe_id = recipe_id
        self.state = ModalState.OPEN_LOADING
        dialog["aria-hidden"] = "false"
        self._document.set_inner_html(body, self._renderer.modal_loading())
        self._document.lock_scroll()
        self._refresh_focus_trap()

        try:
            detail = await self._fetcher.fetch_detail(recipe_id)
        except RecipeFetchError as exc:
            if token != self._token:
                return None
            logger.info("Recipe %s failed to load: %s", recipe_id, exc)
            self.state = ModalState.OPEN_ERROR
            self._document.set_inner_html(body, self._renderer.modal_error(recipe_id, str(exc)))
            self._refresh_focus_trap()
            self._focus_initial()
            return None

        if token != self._token:
            logger.debug("Dropping detail response for recipe %s", recipe_id)
            return None
        self.state = ModalState.OPEN_READY
        self._document.set_inner_html(body, self._renderer.render_detail(detail))
        self._refresh_focus_trap()
        self._focus_initial()
        return detail

    async def retry(self) -> Optional[RecipeDetail]:
        if self.recipe_id is None or self.state is not ModalState.OPEN_ERROR:
            return None
        return await self.open(self.recipe_id)

    def close(self) -> None:
        """Hide the dialog, release the scroll lock and return focus to the trigger."""

        if not self.is_open:
            return
        self._token += 1
        self.state = ModalState.CLOSED
        dialog = self.dialog
        if dialog is not None:
            dialog["aria-hidden"] = "true"
        self._document.unlock_scroll()
        self._focusable = []

        trigger, self._trigger = self._trigger, None
        if self._document.contains(trigger):
            self._document.focus(trigger)
        else:
            self._document.blur()

    def handle_tab(self, event: KeyEvent) -> None:
        """Wrap Tab/Shift+Tab at the dialog's boundary focusable elements."""

        if not self.is_open or event.key != "Tab" or not self._focusable:
            return
        first, last = self._focusable[0], self._focusable[-1]
        active = self._document.active_element
        inside = index_of(self._focusable, active) != -1
        if event.shift:
            if active is first or not inside:
                self._document.focus(last)
                event.prevent_default()
        elif active is last or not inside:
            self._document.focus(first)
            event.prevent_default()

    def _refresh_focus_trap(self) -> None:
        dialog = self.dialog
        self._focusable = self._document.focusable_elements(dialog) if dialog is not None else []

    def _focus_initial(self) -> None:
        dialog = self.dialog
        close_button = self._document.query(".modal-close", dialog) if dialog is not None else None
        if close_button is not None:
            self._document.focus(close_button)
        elif self._focusable:
            self._document.focus(self._focusable[0])


__all__ = ["ModalController", "ModalState"]
