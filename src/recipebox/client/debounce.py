"""Quiet-period debouncing for search-as-you-type."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Collapse rapid calls so only the last one runs after *wait* seconds of quiet.

    Each call cancels the pending timer and schedules a new one on the running
    event loop. There is no maximum wait: continuous input postpones the
    callback indefinitely. Coroutine callbacks are scheduled as tasks; the most
    recent one is exposed as :attr:`last_task`.
    """

    def __init__(self, callback: Callable[..., Any], wait: float = 0.3) -> None:
        self._callback = callback
        self._wait = max(0.0, wait)
        self._handle: Optional[asyncio.TimerHandle] = None
        self.last_task: Optional[asyncio.Task[Any]] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        if self._handle is not None:
            self._handle.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._wait, self._fire, args, kwargs)

    def _fire(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._handle = None
        result = self._callback(*args, **kwargs)
        if inspect.isawaitable(result):
            self.last_task = asyncio.ensure_future(result)
            self.last_task.add_done_callback(_log_task_failure)


def _log_task_failure(task: "asyncio.Task[Any]") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Debounced callback failed", exc_info=exc)


__all__ = ["Debouncer"]
