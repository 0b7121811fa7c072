"""Import event broadcast.

Listeners are told, per trigger, which candidates were imported and which
were excluded. Delivery is synchronous and in registration order; a failing
listener aborts resolution.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AbstractSet, Iterable, List, Sequence


class ImportListener(ABC):
    @abstractmethod
    def on_event(self, configurations: Sequence[str], exclusions: AbstractSet[str]) -> None:
        ...


class EventNotifier:
    def __init__(self, listeners: Iterable[ImportListener] = ()) -> None:
        self._listeners: List[ImportListener] = list(listeners)

    def register(self, listener: ImportListener) -> None:
        self._listeners.append(listener)

    def fire(self, configurations: Sequence[str], exclusions: AbstractSet[str]) -> None:
        if not self._listeners:
            return
        configurations = tuple(configurations)
        exclusions = frozenset(exclusions)
        for listener in self._listeners:
            listener.on_event(configurations, exclusions)


__all__ = ["ImportListener", "EventNotifier"]
