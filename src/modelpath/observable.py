"""Observable models and collections: the object graph paths resolve against.

Model is a free-form attribute store that fires "change:<name>" when a
field changes. Collection is an ordered container that fires "add",
"remove" and "reset" when its structure changes, and optionally keeps
itself sorted by a comparator key.

Thread safety: call set_scheduler() once from the main thread. After that,
any mutation from a background thread is auto-marshaled. Main-thread
mutations remain synchronous.
"""

from __future__ import annotations

import bisect
import threading
from collections.abc import Mapping
from typing import Callable, Iterable, Iterator

from modelpath.containers import (
    ObservableFieldContainer,
    ObservableOrderedContainer,
    field_event,
)
from modelpath.events import Events

# ─── Auto-marshal ────────────────────────────────────────────────────────────
_scheduler = None
_scheduler_thread = None


def set_scheduler(scheduler) -> None:
    """Set the global thread scheduler for cross-thread model mutations.

    Call once from the main/UI thread:
        modelpath.set_scheduler(app.call_from_thread)

    After this, any Model or Collection mutation from a background thread
    is automatically marshaled. Main-thread mutations remain synchronous.
    Pass None to go back to unmarshaled mutations.
    """
    global _scheduler, _scheduler_thread
    _scheduler = scheduler
    _scheduler_thread = threading.current_thread() if scheduler is not None else None


def _dispatch(fn: Callable[[], None]) -> None:
    if _scheduler is not None and threading.current_thread() != _scheduler_thread:
        _scheduler(fn)
    else:
        fn()


_MISSING = object()


def _differs(old: object, new: object) -> bool:
    return old is not new and old != new


class Model(Events, ObservableFieldContainer):
    """A bag of named attributes with per-attribute change events.

    Usage:
        product = Model(name="Product 1")
        product.on("change:name", lambda model, value: print(value))
        product.set("name", "New Name!")       # prints "New Name!"
        product.set({"name": "Other", "code": "P1"})
    """

    def __init__(self, attributes: Mapping[str, object] | None = None, **kwargs) -> None:
        self._attributes: dict[str, object] = dict(attributes or {})
        self._attributes.update(kwargs)

    @property
    def attributes(self) -> dict[str, object]:
        """A shallow copy of the current attributes."""
        return dict(self._attributes)

    def get(self, name: str) -> object:
        return self._attributes.get(name)

    def has(self, name: str) -> bool:
        return self._attributes.get(name) is not None

    def set(self, name: str | Mapping[str, object], value: object = None) -> None:
        """Set one attribute, or several from a mapping.

        Fires "change:<name>" (model, value) for each attribute whose value
        actually changed, then "change" (model) once.
        """
        attrs = dict(name) if isinstance(name, Mapping) else {name: value}
        _dispatch(lambda: self._set_direct(attrs))

    def unset(self, name: str) -> None:
        """Remove an attribute. Fires "change:<name>" with None if it existed."""
        _dispatch(lambda: self._unset_direct(name))

    def _set_direct(self, attrs: dict[str, object]) -> None:
        changed = []
        for key, value in attrs.items():
            if _differs(self._attributes.get(key, _MISSING), value):
                self._attributes[key] = value
                changed.append((key, value))
        self._notify(changed)

    def _unset_direct(self, name: str) -> None:
        if name not in self._attributes:
            return
        del self._attributes[name]
        self._notify([(name, None)])

    def _notify(self, changed: list[tuple[str, object]]) -> None:
        for key, value in changed:
            self.trigger(field_event(key), self, value)
        if changed:
            self.trigger("change", self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"


class Collection(Events, ObservableOrderedContainer):
    """An ordered list of items with structural change events.

    Items are compared by identity: adding an item that is already present
    is a no-op, and remove() locates items with `is`.

    With a comparator (a key function), items stay sorted on add() and
    reset(). Without one, add() appends or inserts at the given position.

    Usage:
        reviews = Collection([r1, r2], comparator=lambda r: r.get("date"))
        reviews.on("add", lambda item, collection: ...)
        reviews.add(r3)            # inserted by date
        reviews.remove(r1)
    """

    def __init__(
        self,
        items: Iterable[object] | None = None,
        comparator: Callable[[object], object] | None = None,
    ) -> None:
        self._comparator = comparator
        self._items: list[object] = []
        self._load(items)

    @property
    def comparator(self) -> Callable[[object], object] | None:
        return self._comparator

    # --- Read operations ---

    def at(self, index: int) -> object:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def index_of(self, item: object) -> int:
        """Position of item (by identity), or -1."""
        for i, existing in enumerate(self._items):
            if existing is item:
                return i
        return -1

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[object]:
        return iter(list(self._items))

    def __contains__(self, item: object) -> bool:
        return self.index_of(item) >= 0

    def __bool__(self) -> bool:
        return bool(self._items)

    # --- Write operations (notify) ---

    def add(self, items: object, at: int | None = None) -> None:
        """Add one item or a list of items. Fires "add" (item, collection) per item."""
        batch = list(items) if isinstance(items, (list, tuple)) else [items]
        _dispatch(lambda: self._add_direct(batch, at))

    def remove(self, items: object) -> None:
        """Remove one item or a list of items.

        Fires "remove" (item, collection, index) per removed item.
        """
        batch = list(items) if isinstance(items, (list, tuple)) else [items]
        _dispatch(lambda: self._remove_direct(batch))

    def reset(self, items: Iterable[object] | None = None) -> None:
        """Replace every item at once. Fires a single "reset" (collection)."""
        batch = list(items) if items is not None else []
        _dispatch(lambda: self._reset_direct(batch))

    def sort(self) -> None:
        """Re-sort by the comparator, e.g. after item keys changed. Fires "reset"."""
        if self._comparator is None:
            raise ValueError("Cannot sort a collection without a comparator")
        _dispatch(lambda: self._reset_direct(list(self._items)))

    def _load(self, items: Iterable[object] | None) -> None:
        self._items = []
        for item in items or ():
            if item not in self:
                self._items.append(item)
        if self._comparator is not None:
            self._items.sort(key=self._comparator)

    def _add_direct(self, batch: list[object], at: int | None) -> None:
        for item in batch:
            if item in self:
                continue
            if self._comparator is not None:
                index = bisect.bisect_right(
                    self._items, self._comparator(item), key=self._comparator
                )
            elif at is not None:
                index = max(0, min(at, len(self._items)))
                at = index + 1
            else:
                index = len(self._items)
            self._items.insert(index, item)
            self.trigger("add", item, self)

    def _remove_direct(self, batch: list[object]) -> None:
        for item in batch:
            index = self.index_of(item)
            if index < 0:
                continue
            del self._items[index]
            self.trigger("remove", item, self, index)

    def _reset_direct(self, batch: list[object]) -> None:
        self._load(batch)
        self.trigger("reset", self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"
