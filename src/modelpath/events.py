"""Named events: the notification primitive shared by models, collections
and change trackers.

Listeners are kept per event name in registration order. trigger()
dispatches over a snapshot, so listeners may subscribe or unsubscribe
while a dispatch is in progress. A listener removed earlier in the same
dispatch is skipped; a listener added during the dispatch first runs on
the next trigger.
"""

from __future__ import annotations

from typing import Callable

Callback = Callable[..., None]
Disposer = Callable[[], None]


class Events:
    """Mixin: on/off/trigger over named events."""

    _event_listeners: dict[str, list[Callback]] | None = None

    def _listeners(self) -> dict[str, list[Callback]]:
        if self._event_listeners is None:
            self._event_listeners = {}
        return self._event_listeners

    def on(self, event: str, callback: Callback) -> Disposer:
        """Register callback for event. Returns a function that removes it."""
        self._listeners().setdefault(event, []).append(callback)

        def _unsubscribe() -> None:
            self.off(event, callback)

        return _unsubscribe

    def off(self, event: str, callback: Callback | None = None) -> None:
        """Remove one registration of callback, or every listener of event."""
        listeners = self._listeners()
        if callback is None:
            listeners.pop(event, None)
            return
        callbacks = listeners.get(event)
        if not callbacks:
            return
        try:
            callbacks.remove(callback)
        except ValueError:
            pass  # already removed
        if not callbacks:
            del listeners[event]

    def trigger(self, event: str, *args) -> None:
        """Call every listener of event with args."""
        callbacks = self._listeners().get(event)
        if not callbacks:
            return
        for callback in list(callbacks):
            if callback in self._listeners().get(event, ()):
                callback(*args)

    def listener_count(self, event: str) -> int:
        return len(self._listeners().get(event, ()))
