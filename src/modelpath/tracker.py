"""Change trackers: live, deduplicated notifications for one path on one root.

A tracker subscribes its handler to every model and collection along the
path. Whenever any of them fires, the tracker re-reads the value, emits a
"change" event if the value differs from the last one seen, and then
rebinds: every subscription is torn down and the whole chain is
subscribed again against the current object graph. Any link may now
resolve to a different object, so the old subscription set is discarded
rather than patched.

Trackers are not cleaned up automatically. Call dispose() when done, or
the observed models keep a reference to the tracker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from modelpath.accessor import Accessor, SubscriptionRecord, accessor_for
from modelpath.events import Events

logger = logging.getLogger("modelpath.tracker")

T = TypeVar("T")


@dataclass(frozen=True)
class ChangeEvent(Generic[T]):
    """Payload of a tracker's "change" event."""

    value: T | None


class ChangeTracker(Events):
    """Tracks the value at accessor's path from root.

    Usage:
        tracker = change_tracker_for(product, "manufacturer.name")
        tracker.on("change", lambda event: print(event.value))

        product.get("manufacturer").set("name", "Acme")  # prints "Acme"
        product.set("manufacturer", other)               # prints other's name

        tracker.dispose()
    """

    def __init__(self, root, accessor: Accessor) -> None:
        self._root = root
        self._accessor = accessor
        self._records: list[SubscriptionRecord] = []
        self._rebinding = False
        self._disposed = False
        self._last_value = accessor.get(root)
        self._bind()

    @property
    def root(self):
        return self._root

    @property
    def accessor(self) -> Accessor:
        return self._accessor

    @property
    def path(self) -> str:
        return self._accessor.path

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def subscriptions(self) -> tuple[SubscriptionRecord, ...]:
        """The subscriptions currently held on the object graph."""
        return tuple(self._records)

    def get_value(self):
        """Read the current value through the chain (not the cache)."""
        self._check_alive()
        return self._accessor.get(self._root)

    def set_value(self, value) -> None:
        """Write through the leaf link. Raises UnsupportedOperationError for non-attribute paths."""
        self._check_alive()
        self._accessor.set(self._root, value)

    def has_value(self) -> bool:
        return self.get_value() is not None

    def dispose(self) -> None:
        """Remove every subscription and listener. The tracker becomes inert."""
        if self._disposed:
            return
        self._disposed = True
        self._unbind()
        self.off("change")
        logger.debug("Disposed tracker for %r", self.path)

    # --- Internals ---

    def _on_change(self, *args) -> None:
        """Handler attached to every observed object along the path."""
        if self._disposed or self._rebinding:
            return
        # rebind even when evaluation raises
        try:
            self._trigger_change()
        finally:
            if not self._disposed:
                self._rebind()

    def _trigger_change(self) -> None:
        value = self._accessor.get(self._root)
        previous = self._last_value
        self._last_value = value
        if value is not previous and value != previous:
            self.trigger("change", ChangeEvent(value))

    def _rebind(self) -> None:
        self._rebinding = True
        try:
            self._unbind()
            self._bind()
        finally:
            self._rebinding = False
        logger.debug(
            "Rebound tracker for %r: %d subscription(s)", self.path, len(self._records)
        )

    def _bind(self) -> None:
        self._records = self._accessor.records(self._root, self._on_change)

    def _unbind(self) -> None:
        records, self._records = self._records, []
        for record in records:
            record.cancel()

    def _check_alive(self) -> None:
        if self._disposed:
            raise RuntimeError(f"Change tracker for {self.path!r} has been disposed")

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"value={self._last_value!r}"
        return f"ChangeTracker({self.path!r}, {state})"


def change_tracker_for(root, path: str) -> ChangeTracker:
    """Build (or reuse) the accessor for path and track it from root."""
    return ChangeTracker(root, accessor_for(path))
