"""
Client-side event message handler.

Handles frames carrying an event name. Session and voice events are emitted
directly; everything else is a track event.
"""

import logging
from typing import TYPE_CHECKING

from nexus_client.core.events import NodeEvent
from nexus_client.core.types import WSEvent

from .track_event import TrackEventHandler
from .utils import Payload

if TYPE_CHECKING:
    from ..node import Node

# VOICE_CONNECTION_ERROR and VOICE_CONNECTION_DISCONNECT share one event
DIRECT_EVENTS = {
    WSEvent.VOICE_CONNECTION_READY: NodeEvent.VOICE_READY,
    WSEvent.VOICE_CONNECTION_ERROR: NodeEvent.VOICE_ERROR,
    WSEvent.VOICE_CONNECTION_DISCONNECT: NodeEvent.VOICE_ERROR,
    WSEvent.AUDIO_PLAYER_ERROR: NodeEvent.AUDIO_PLAYER_ERROR,
}


class EventMessageHandler:
    """Handles event-name frames for a node."""

    def __init__(self, node: "Node", logger: logging.Logger) -> None:
        self.node = node
        self.logger: logging.Logger = logger
        self.track_handler: TrackEventHandler = TrackEventHandler(node, logger)

    async def process_event_message(self, payload: Payload) -> None:
        """Route a frame by its event name."""
        events = self.node.manager.events

        if payload.t == WSEvent.READY:
            self._handle_ready(payload)
        elif payload.t in DIRECT_EVENTS:
            events.emit(DIRECT_EVENTS[WSEvent(payload.t)], payload)
        else:
            await self.track_handler.process_track_event(payload)

    def _handle_ready(self, payload: Payload) -> None:
        data = payload.d if isinstance(payload.d, dict) else {}
        self.node.manager.access_token = data.get("access_token")
        self.logger.info(f"[{self.node.name}] Session ready")
        self.node.manager.events.emit(NodeEvent.READY, payload)
