"""Dark-mode preference."""

from __future__ import annotations

from recipebox.client.document import Document
from recipebox.db.kv_store import KeyValueStore

DARK_MODE_KEY = "dark-mode"
DARK_CLASS = "dark-mode"


class ThemeController:
    """Applies and persists the light/dark page theme."""

    def __init__(self, document: Document, store: KeyValueStore) -> None:
        self._document = document
        self._store = store

    @property
    def is_dark(self) -> bool:
        return self._document.has_class(self._document.body, DARK_CLASS)

    def init(self) -> None:
        """Apply the stored preference; anything other than ``"true"`` means light."""

        if self._store.get_item(DARK_MODE_KEY) == "true":
            self._document.add_class(self._document.body, DARK_CLASS)
            self._sync_toggle(True)

    def toggle(self) -> bool:
        is_dark = self._document.toggle_class(self._document.body, DARK_CLASS)
        self._store.set_item(DARK_MODE_KEY, "true" if is_dark else "false")
        self._sync_toggle(is_dark)
        return is_dark

    def _sync_toggle(self, is_dark: bool) -> None:
        toggle = self._document.query("#dark-mode-toggle")
        if toggle is None:
            return
        toggle.string = "☀️" if is_dark else "🌙"
        toggle["aria-label"] = "Switch to light mode" if is_dark else "Switch to dark mode"
