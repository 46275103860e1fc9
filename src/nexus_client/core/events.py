"""
Application events emitted by a node.

Consumers subscribe to a :class:`NodeEvent` on an :class:`EventEmitter`; the
node and its message handlers are the only producers.
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Set, Tuple

_LOGGER = logging.getLogger(__name__)

Listener = Callable[..., Any]


class NodeEvent(str, Enum):
    """Names of the events emitted to listeners."""

    NODE_CREATE = "nodeCreate"
    NODE_CONNECT = "nodeConnect"
    NODE_DISCONNECT = "nodeDisconnect"
    NODE_RECONNECT = "nodeReconnect"
    NODE_ERROR = "nodeError"
    NODE_DESTROY = "nodeDestroy"
    NODE_HELLO = "nodeHello"
    NODE_UNKNOWN_OPCODE = "nodeUnknownOpcode"
    NODE_UNKNOWN_EVENT = "nodeUnknownEvent"
    READY = "ready"
    VOICE_READY = "voiceReady"
    VOICE_ERROR = "voiceError"
    AUDIO_PLAYER_ERROR = "audioPlayerError"
    TRACK_START = "trackStart"
    TRACK_END = "trackEnd"
    TRACK_ERROR = "trackError"
    QUEUE_END = "queueEnd"


class EventEmitter:
    """
    Ordered fan-out of node events to subscribed listeners.

    Plain callables run inline in registration order. Coroutine functions are
    scheduled as tasks on the running loop. A failing listener is logged and
    the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: Dict[NodeEvent, List[Listener]] = {}
        self._once: Set[Tuple[NodeEvent, int]] = set()
        self._tasks: Set[asyncio.Task] = set()

    def on(self, event: NodeEvent, listener: Listener) -> Listener:
        """Subscribe ``listener`` to ``event``. Returns the listener."""
        self._listeners.setdefault(NodeEvent(event), []).append(listener)
        return listener

    def once(self, event: NodeEvent, listener: Listener) -> Listener:
        """Subscribe ``listener`` for a single emission of ``event``."""
        self.on(event, listener)
        self._once.add((NodeEvent(event), id(listener)))
        return listener

    def off(self, event: NodeEvent, listener: Listener) -> None:
        """Unsubscribe ``listener``; unknown listeners are ignored."""
        event = NodeEvent(event)
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)
        self._once.discard((event, id(listener)))

    def listener_count(self, event: NodeEvent) -> int:
        return len(self._listeners.get(NodeEvent(event), []))

    def emit(self, event: NodeEvent, *args: Any) -> bool:
        """
        Emit ``event`` with ``args`` to every listener.

        Returns:
            True if the event had listeners
        """
        event = NodeEvent(event)
        listeners = list(self._listeners.get(event, []))

        for listener in listeners:
            if (event, id(listener)) in self._once:
                self.off(event, listener)

            if inspect.iscoroutinefunction(listener):
                self._schedule(event, listener(*args))
                continue

            try:
                listener(*args)
            except Exception:
                _LOGGER.exception(f"Error in listener for event {event.value}")

        return bool(listeners)

    def _schedule(self, event: NodeEvent, coro: Any) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)

        def _done(finished: asyncio.Task) -> None:
            self._tasks.discard(finished)
            if not finished.cancelled() and finished.exception() is not None:
                _LOGGER.error(
                    f"Error in async listener for event {event.value}",
                    exc_info=finished.exception(),
                )

        task.add_done_callback(_done)
