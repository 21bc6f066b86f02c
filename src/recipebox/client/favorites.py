"""Favorite recipe ids persisted in the client key-value store."""

from __future__ import annotations

import json
import logging
from typing import Optional

from recipebox.db.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "recipe-favorites"


def _decode_ids(raw: Optional[str]) -> list[int]:
    """Decode the stored JSON array, dropping anything that is not an integer id."""

    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed favorites payload")
        return []
    if not isinstance(decoded, list):
        logger.warning("Ignoring favorites payload of type %s", type(decoded).__name__)
        return []

    ids: list[int] = []
    for value in decoded:
        if isinstance(value, bool) or not isinstance(value, int):
            continue
        if value not in ids:
            ids.append(value)
    return ids


class FavoritesStore:
    """Ordered, duplicate-free set of favorite recipe ids.

    The list is loaded once at construction and written back in full after every
    toggle. Removing an id remembers its position so that toggling the same id
    straight back restores the previous order and serialization exactly.
    """

    def __init__(self, store: KeyValueStore, key: str = FAVORITES_KEY) -> None:
        self._store = store
        self._key = key
        self._ids = _decode_ids(store.get_item(key))
        self._restore_slot: Optional[tuple[int, int]] = None

    @property
    def ids(self) -> list[int]:
        return list(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._ids

    def is_favorite(self, recipe_id: int) -> bool:
        return recipe_id in self._ids

    def toggle(self, recipe_id: int) -> bool:
        """Flip membership of *recipe_id*, persist, and return the new state."""

        if recipe_id in self._ids:
            position = self._ids.index(recipe_id)
            self._ids.pop(position)
            self._restore_slot = (recipe_id, position)
            is_favorite = False
        else:
            slot = self._restore_slot
            if slot is not None and slot[0] == recipe_id:
                self._ids.insert(min(slot[1], len(self._ids)), recipe_id)
            else:
                self._ids.append(recipe_id)
            self._restore_slot = None
            is_favorite = True

        self._persist()
        logger.debug("Favorite toggled recipe_id=%s favorite=%s", recipe_id, is_favorite)
        return is_favorite

    def serialize(self) -> str:
        return json.dumps(self._ids)

    def _persist(self) -> None:
        self._store.set_item(self._key, self.serialize())


__all__ = ["FAVORITES_KEY", "FavoritesStore"]
