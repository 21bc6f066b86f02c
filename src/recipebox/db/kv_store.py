"""Key-value storage backing client state that survives reloads."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from sqlalchemy import select

from .models import StoredItemORM
from .repository import session_scope

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """String key/value storage with ``localStorage``-like semantics."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryKeyValueStore:
    """Process-local store used for server-side page rendering and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SqliteKeyValueStore:
    """Store persisted in the ``client_storage`` SQLite table."""

    def get_item(self, key: str) -> Optional[str]:
        with session_scope() as session:
            row = session.execute(
                select(StoredItemORM).where(StoredItemORM.key == key)
            ).scalar_one_or_none()
            value = row.value if row is not None else None
        logger.debug("Loaded client storage key=%s present=%s", key, value is not None)
        return value

    def set_item(self, key: str, value: str) -> None:
        logger.debug("Persisting client storage key=%s", key)
        with session_scope() as session:
            session.merge(StoredItemORM(key=key, value=value))

    def remove_item(self, key: str) -> None:
        with session_scope() as session:
            row = session.get(StoredItemORM, key)
            if row is not None:
                session.delete(row)


__all__ = ["KeyValueStore", "MemoryKeyValueStore", "SqliteKeyValueStore"]
