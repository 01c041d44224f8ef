"""Accessors: reusable chains of links that get, set and observe a path.

Each link holds its parent link and the expression node it realizes, never
a target object. Building "manufacturer.name" yields:

    RootAccessor                      -> the root itself
      AttributeAccessor(manufacturer) -> root.get("manufacturer")
        AttributeAccessor(name)       -> <manufacturer>.get("name")

get() resolves the parent first and short-circuits to None when anything
along the way is absent. subscribe() attaches to the object the *parent*
resolves to right now; callers re-subscribe whenever that may have changed.
"""

from __future__ import annotations

import functools
from typing import Callable, Iterable, Sequence

from modelpath.containers import (
    STRUCTURE_EVENTS,
    ObservableFieldContainer,
    ObservableOrderedContainer,
    field_event,
)
from modelpath.errors import TypeMismatchError, UnsupportedOperationError
from modelpath.parser import (
    AttributeAccess,
    CollectionItemAccess,
    ExpressionNode,
    parse,
)

Callback = Callable[..., None]
Unsubscribe = Callable[[], None]


class SubscriptionRecord:
    """One object observed on behalf of a link: which events, which callback."""

    __slots__ = ("target", "events", "callback")

    def __init__(self, target, events: Sequence[str], callback: Callback) -> None:
        self.target = target
        self.events = tuple(events)
        self.callback = callback
        for event in self.events:
            target.on(event, callback)

    def cancel(self) -> None:
        for event in self.events:
            self.target.off(event, self.callback)

    def __repr__(self) -> str:
        return f"SubscriptionRecord({type(self.target).__name__}, {self.events!r})"


class Accessor:
    """Base link. Subclasses override get/set/_observe."""

    __slots__ = ("parent", "node")

    def __init__(self, parent: Accessor | None = None, node: ExpressionNode | None = None) -> None:
        self.parent = parent
        self.node = node

    @property
    def path(self) -> str:
        """Source text of the chain up to and including this link."""
        if self.parent is None or self.node is None:
            return ""
        return self.parent.path + self.node.source_text

    def get(self, root):
        raise NotImplementedError

    def set(self, root, value) -> None:
        raise UnsupportedOperationError(self.path, "set")

    def records(self, root, on_change: Callback) -> list[SubscriptionRecord]:
        """Subscribe on_change along the whole chain, leaf first.

        Returns the records needed to reverse exactly what was attached.
        """
        records = []
        own = self._observe(root, on_change)
        if own is not None:
            records.append(own)
        if self.parent is not None:
            records.extend(self.parent.records(root, on_change))
        return records

    def subscribe(self, root, on_change: Callback) -> Unsubscribe:
        """Subscribe on_change along the chain. Returns a composite unsubscribe."""
        records = self.records(root, on_change)

        def _unsubscribe() -> None:
            for record in records:
                record.cancel()
            records.clear()

        return _unsubscribe

    def _observe(self, root, on_change: Callback) -> SubscriptionRecord | None:
        return None

    def _observed_parent(self, root):
        """The parent's value, or None when the parent cannot be evaluated.

        A mismatch further up the chain means nothing below it can be
        observed; get() reports the mismatch, records() just stops attaching.
        """
        try:
            return self.parent.get(root)
        except TypeMismatchError:
            return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class RootAccessor(Accessor):
    """The start of every chain: the root object itself."""

    __slots__ = ()

    def get(self, root):
        return root


class AttributeAccessor(Accessor):
    """A named field of the model resolved by the parent link."""

    __slots__ = ()

    node: AttributeAccess

    def _model(self, root) -> ObservableFieldContainer | None:
        model = self.parent.get(root)
        if model is None or isinstance(model, ObservableFieldContainer):
            return model
        raise TypeMismatchError(self.path, "a model", model)

    def get(self, root):
        model = self._model(root)
        if model is None:
            return None
        return model.get(self.node.name)

    def set(self, root, value) -> None:
        model = self._model(root)
        if model is None:
            raise TypeMismatchError(self.path, "a model", model)
        model.set(self.node.name, value)

    def _observe(self, root, on_change: Callback) -> SubscriptionRecord | None:
        model = self._observed_parent(root)
        if isinstance(model, ObservableFieldContainer):
            return SubscriptionRecord(model, [field_event(self.node.name)], on_change)
        return None


class CollectionItemAccessor(Accessor):
    """The item at a fixed position of the collection resolved by the parent link.

    Items cannot be assigned through a path: a collection owns its order
    (comparator or insertion), so set() is unsupported.
    """

    __slots__ = ()

    node: CollectionItemAccess

    def get(self, root):
        collection = self.parent.get(root)
        if collection is None:
            return None
        index = self.node.index
        if isinstance(collection, ObservableOrderedContainer):
            return collection.at(index)
        if isinstance(collection, (list, tuple)):
            return collection[index] if index < len(collection) else None
        raise TypeMismatchError(self.path, "a collection or list", collection)

    def _observe(self, root, on_change: Callback) -> SubscriptionRecord | None:
        collection = self._observed_parent(root)
        # add/remove/reset can change which item sits at this position
        if isinstance(collection, ObservableOrderedContainer):
            return SubscriptionRecord(collection, STRUCTURE_EVENTS, on_change)
        return None


_LINK_TYPES: dict[type, type[Accessor]] = {
    AttributeAccess: AttributeAccessor,
    CollectionItemAccess: CollectionItemAccessor,
}


def build(nodes: Iterable[ExpressionNode]) -> Accessor:
    """Fold expression nodes into an accessor chain, starting from the root."""
    accessor: Accessor = RootAccessor()
    for node in nodes:
        link_type = _LINK_TYPES.get(type(node))
        if link_type is None:
            raise TypeError(f"No accessor for expression node {node!r}")
        accessor = link_type(accessor, node)
    return accessor


@functools.lru_cache(maxsize=512)
def accessor_for(path: str) -> Accessor:
    """Parse path and build its accessor. Chains are shared per path string.

    Usage:
        accessor = accessor_for("manufacturer.name")
        accessor.get(product)            # "Manufacturer 1"
        accessor.set(product, "Acme")
    """
    return build(parse(path))
