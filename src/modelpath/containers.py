"""Capability interfaces the observed object graph must implement.

Path evaluation never inspects concrete model classes. Anything reached
through an attribute expression must be an ObservableFieldContainer, and
anything reached through an index expression must be an
ObservableOrderedContainer (or a plain list/tuple, which is readable but
not observable).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

STRUCTURE_EVENTS: tuple[str, ...] = ("add", "remove", "reset")


def field_event(name: str) -> str:
    """Event name fired when the named field of a container changes."""
    return f"change:{name}"


class ObservableFieldContainer(ABC):
    """A model: named fields, each observable via its field_event()."""

    @abstractmethod
    def get(self, name: str) -> object: ...

    @abstractmethod
    def set(self, name: str, value: object) -> None: ...

    @abstractmethod
    def on(self, event: str, callback: Callable[..., None]) -> Callable[[], None]: ...

    @abstractmethod
    def off(self, event: str, callback: Callable[..., None] | None = None) -> None: ...


class ObservableOrderedContainer(ABC):
    """A collection: positional access, structure observable via STRUCTURE_EVENTS."""

    @abstractmethod
    def at(self, index: int) -> object:
        """Item at index, or None when out of range."""

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def on(self, event: str, callback: Callable[..., None]) -> Callable[[], None]: ...

    @abstractmethod
    def off(self, event: str, callback: Callable[..., None] | None = None) -> None: ...
