"""Minimal event channels with explicit subscription lifetimes."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Subscription:
    """Handle that detaches one callback when disposed."""

    def __init__(self, on_dispose: Callable[[], None] | None = None) -> None:
        self._on_dispose = on_dispose
        self.disposed = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        on_dispose = self._on_dispose
        self._on_dispose = None
        if on_dispose is not None:
            on_dispose()


class CompositeSubscription:
    """Group of subscriptions disposed together."""

    def __init__(self, *subscriptions: Subscription) -> None:
        self._subscriptions: list[Subscription] = list(subscriptions)
        self.disposed = False

    def add(self, *subscriptions: Subscription) -> None:
        if self.disposed:
            for subscription in subscriptions:
                subscription.dispose()
            return
        self._subscriptions.extend(subscriptions)

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.dispose()


class Emitter(Generic[T]):
    """Synchronous single-topic channel.

    Handlers run in subscription order on the emitting call stack. Handler
    exceptions propagate to the emitter.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Subscription:
        self._handlers.append(handler)

        def detach() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass

        return Subscription(detach)

    def emit(self, value: T) -> None:
        for handler in list(self._handlers):
            handler(value)

    def clear(self) -> None:
        self._handlers.clear()

    @property
    def handler_count(self) -> int:
        return len(self._handlers)
