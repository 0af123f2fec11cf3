"""
In-process publish/subscribe for watcher events.

Handlers are called synchronously, in registration order, with the payload
of the event kind they subscribed to.
"""

import logging
from collections.abc import Callable
from typing import Any, Literal, overload

from dirpoll.models import BaseError, Entry, EventKind, FileChange, WatcherEvent

logger = logging.getLogger(__name__)

ReadyHandler = Callable[[], Any]
ErrorHandler = Callable[[BaseError], Any]
AddHandler = Callable[[Entry], Any]
ChangeHandler = Callable[[FileChange], Any]


class EventChannel:
    """Typed event dispatcher keyed by ``EventKind``."""

    def __init__(self):
        self._handlers: dict[EventKind, list[Callable[..., Any]]] = {kind: [] for kind in EventKind}

    @overload
    def subscribe(self, kind: Literal[EventKind.READY, "ready"], handler: ReadyHandler) -> None: ...

    @overload
    def subscribe(self, kind: Literal[EventKind.ERROR, "error"], handler: ErrorHandler) -> None: ...

    @overload
    def subscribe(self, kind: Literal[EventKind.ADD, "add"], handler: AddHandler) -> None: ...

    @overload
    def subscribe(self, kind: Literal[EventKind.CHANGE, "change"], handler: ChangeHandler) -> None: ...

    def subscribe(self, kind: EventKind | str, handler: Callable[..., Any]) -> None:
        """
        Register a handler for an event kind.

        Args:
            kind: Event kind, as the enum or its string value
            handler: Callable invoked with the kind's payload

        Raises:
            ValueError: If ``kind`` is not a known event kind
        """
        self._handlers[EventKind(kind)].append(handler)

    def unsubscribe(self, kind: EventKind | str, handler: Callable[..., Any]) -> bool:
        """Remove a handler; returns False if it was not registered."""
        handlers = self._handlers[EventKind(kind)]
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def has_subscribers(self, kind: EventKind | str) -> bool:
        """Check whether any handler is registered for ``kind``."""
        return bool(self._handlers[EventKind(kind)])

    def publish(self, event: WatcherEvent) -> None:
        """
        Dispatch an event to every handler of its kind.

        A handler that raises is logged and does not stop the others.

        Args:
            event: Event to dispatch
        """
        payload = event.payload()
        for handler in list(self._handlers[event.kind]):
            try:
                handler(*payload)
            except Exception as e:
                logger.exception("Error in %s handler %r: %s", event.kind.value, handler, e)
