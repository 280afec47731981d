"""Synchronous property-change notification.

Observers are called in registration order, on the caller's thread,
before the mutating method returns.
"""

from __future__ import annotations

from typing import Any, Callable

PropertyObserver = Callable[[Any, str], None]


class Observable:

    def __init__(self) -> None:
        self._observers: list[PropertyObserver] = []

    def subscribe(self, observer: PropertyObserver) -> Callable[[], None]:
        """Register *observer*; returns a callable that removes it again."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, *property_names: str) -> None:
        for name in property_names:
            for observer in list(self._observers):
                observer(self, name)
