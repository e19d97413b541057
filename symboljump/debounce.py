"""Resettable one-shot timer on top of the event loop's ``call_later``."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


CallLater = Callable[..., TimerHandle]


class DebounceTimer:
    """Run only the most recent scheduled callback after ``delay`` seconds of quiet.

    ``call_later`` defaults to the running loop's; tests inject a manual clock.
    """

    def __init__(self, delay: float, call_later: CallLater | None = None) -> None:
        self.delay = max(0.0, delay)
        self._call_later = call_later
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        self.cancel()
        call_later = self._call_later or asyncio.get_running_loop().call_later
        self._handle = call_later(self.delay, self._fire, callback, args)

    def _fire(self, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self._handle = None
        callback(*args)

    def cancel(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()
