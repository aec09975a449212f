"""
Per-node event listener registry and synchronous dispatch.

There is no capture or bubbling: a dispatch on a node only runs the
listeners registered for that exact node and event type.
"""

import logging
import time
import weakref
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from ..utils.config import Config
from ..utils.logging import log_exception
from .errors import DispatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """Immutable description of one dispatch, handed to every handler."""
    type: str
    target: Any
    payload: Any = None
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Any, Event], Any]


class EventBus:
    """
    Listener registry keyed by node and event type.

    Handlers are called as ``handler(node, event)``. Nodes are held weakly,
    so registering a listener does not keep a removed node alive. The
    failure history in ``errors`` is bounded and never stores the node.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the event bus.

        Args:
            config: Configuration; ``events.raise_handler_errors`` decides
                whether handler failures are raised after a dispatch and
                ``events.max_errors`` how many failures ``errors`` keeps
        """
        self.config = config or Config()
        self._listeners: 'weakref.WeakKeyDictionary[Any, Dict[str, List[Handler]]]' = weakref.WeakKeyDictionary()
        # Most recent handler failures as (event_type, handler, exception)
        self.errors: Deque[Tuple[str, Handler, Exception]] = deque(
            maxlen=self.config.get("events.max_errors", 100))

    def add_listener(self, node: Any, event_type: str, handler: Handler) -> None:
        """
        Add an event listener for a specific event type on a node.

        Registering the same handler twice for the same pair has no effect.

        Args:
            node: The node to listen on
            event_type: The type of event to listen for
            handler: Callable taking ``(node, event)``
        """
        if not callable(handler):
            raise TypeError(f"Event handler must be callable, got {handler!r}")

        handlers = self._listeners.setdefault(node, {}).setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Added {event_type!r} listener on {node!r}")

    def remove_listener(self, node: Any, event_type: str, handler: Handler) -> None:
        """Remove a listener; does nothing when it is not registered."""
        by_type = self._listeners.get(node)
        if not by_type or handler not in by_type.get(event_type, ()):
            return

        by_type[event_type].remove(handler)
        if not by_type[event_type]:
            del by_type[event_type]
        if not by_type:
            del self._listeners[node]

    def has_listeners(self, node: Any, event_type: Optional[str] = None) -> bool:
        by_type = self._listeners.get(node)
        if not by_type:
            return False
        return event_type is None or bool(by_type.get(event_type))

    def listeners(self, node: Any, event_type: str) -> List[Handler]:
        """A snapshot of the handlers for ``(node, event_type)`` in registration order."""
        return list(self._listeners.get(node, {}).get(event_type, ()))

    def clear(self, node: Any = None) -> None:
        """Remove all listeners of ``node``, or of every node when None."""
        if node is None:
            self._listeners.clear()
        else:
            self._listeners.pop(node, None)

    def dispatch(self, node: Any, event_type: str, payload: Any = None) -> int:
        """
        Synchronously run every handler registered for ``(node, event_type)``.

        Handlers run in registration order; the handler list is taken when the
        dispatch starts. A failing handler does not stop the ones after it.

        Args:
            node: The target node
            event_type: The event type
            payload: Opaque value passed along in ``event.payload``

        Returns:
            The number of handlers that were run

        Raises:
            DispatchError: If any handler raised and ``events.raise_handler_errors`` is set
        """
        handlers = self.listeners(node, event_type)
        if not handlers:
            return 0

        event = Event(type=event_type, target=node, payload=payload)
        failures: List[Tuple[Handler, Exception]] = []

        for handler in handlers:
            try:
                handler(node, event)
            except Exception as e:
                log_exception(logger, e, f"Event listener error in {event_type!r} handler on {node!r}")
                # The traceback is in the log; its frames would pin the node
                e.with_traceback(None)
                failures.append((handler, e))
                self.errors.append((event_type, handler, e))

        if failures and self.config.get("events.raise_handler_errors", True):
            raise DispatchError(event_type, failures) from failures[0][1]

        return len(handlers)
