"""
Track lifecycle handling.

When the node reports that a track finished (``QUEUE_END``) or failed
(``TRACK_ERROR``), the handler decides whether to replay the current track,
advance the queue, recycle the finished track to the tail, or end the queue.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from nexus_client.core.events import NodeEvent
from nexus_client.core.protocols import Player
from nexus_client.core.types import WSEvent

from .utils import Payload

if TYPE_CHECKING:
    from ..node import Node


class TrackEventHandler:
    """Drives a player's queue from the node's track events."""

    def __init__(self, node: "Node", logger: logging.Logger) -> None:
        self.node = node
        self.logger: logging.Logger = logger

    @property
    def events(self):
        return self.node.manager.events

    async def process_track_event(self, payload: Payload) -> None:
        """Handle a track event. Events for guilds without a player are dropped."""
        player: Optional[Player] = self.node.manager.players.get(payload.guild_id)
        if player is None:
            return

        track = player.queue.current

        if payload.t == WSEvent.TRACK_START:
            player.playing = True
            player.paused = False
            self.events.emit(NodeEvent.TRACK_START, player, track, payload)
        elif payload.t == WSEvent.QUEUE_END:
            await self.track_end(player, track, payload)
        elif payload.t == WSEvent.TRACK_ERROR:
            self.logger.warning(
                f"[{self.node.name}] Track error in guild {payload.guild_id}: {payload.d}"
            )
            self.events.emit(NodeEvent.TRACK_ERROR, payload)
            await self.track_end(player, track, payload)
        else:
            self.events.emit(NodeEvent.NODE_UNKNOWN_EVENT, payload)

    async def track_end(self, player: Player, track: Any, payload: Payload) -> None:
        """Advance ``player`` past the track that just finished."""
        queue = player.queue

        if not len(queue):
            self.queue_end(player, payload)
            return

        if track is not None and player.track_repeat:
            if queue.current is None:
                self.queue_end(player, payload)
                return
            self.events.emit(NodeEvent.TRACK_END, player, track)
            await player.play()
            return

        queue.previous = queue.current
        queue.current = queue.shift()

        # The queue can drain between the length check and the shift
        if queue.current is None:
            self.queue_end(player, payload)
            return

        if track is not None and player.queue_repeat:
            queue.add(queue.previous)
            self.events.emit(NodeEvent.TRACK_END, player, track)
            await player.play()
            return

        if len(queue):
            self.events.emit(NodeEvent.TRACK_END, player, track)
            await player.play()

    def queue_end(self, player: Player, payload: Payload) -> None:
        self.logger.debug(f"[{self.node.name}] Queue ended in guild {player.guild_id}")
        self.events.emit(NodeEvent.QUEUE_END, player, payload)
