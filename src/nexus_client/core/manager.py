"""
Registry owning the node, the players and the session token.

The manager is passed explicitly to every node it owns; nothing looks it up
globally.
"""

import inspect
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from nexus_client.config.settings import NodeOptions
from nexus_client.infrastructure.exceptions import ConfigurationError

from .events import EventEmitter, NodeEvent
from .protocols import Player, VoiceDispatch

if TYPE_CHECKING:
    from nexus_client.websockets.client.node import Node


class NodeManager:
    """Holds the active node, the per-guild players and the access token."""

    def __init__(
        self,
        client_id: str,
        send: VoiceDispatch,
        events: Optional[EventEmitter] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialize the manager.

        Args:
            client_id: Bot user id sent to the node on connect
            send: Sink relaying voice-state updates to the Discord gateway
            events: Event emitter shared with consumers
            logger: Logger instance

        Raises:
            ConfigurationError: If the client id or the voice sink is missing
        """
        if not client_id:
            raise ConfigurationError("client_id cannot be empty")
        if not callable(send):
            raise ConfigurationError("send must be a callable voice-dispatch sink")

        self.client_id: str = str(client_id)
        self.send: VoiceDispatch = send
        self.events: EventEmitter = events or EventEmitter()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

        self.players: Dict[str, Player] = {}
        self.node: Optional["Node"] = None
        self.access_token: Optional[str] = None

    def create_node(self, options: Optional[NodeOptions] = None) -> "Node":
        """Return the active node, creating it from ``options`` if there is none."""
        if self.node is not None:
            return self.node

        from nexus_client.websockets.client.node import Node

        node = Node(self, options, logger=self.logger)
        self.node = node
        self.logger.info(f"Created node {node.name}")
        self.events.emit(NodeEvent.NODE_CREATE, node)
        return node

    def destroy_node(self, node: Optional["Node"] = None) -> None:
        """Clear the node slot (only if it still holds ``node`` when given)."""
        if node is not None and self.node is not node:
            return
        self.node = None
        self.access_token = None

    async def send_voice_update(self, guild_id: str, data: Dict[str, Any]) -> None:
        """Relay a voice-state update through the configured sink."""
        result = self.send(guild_id, data)
        if inspect.isawaitable(result):
            await result
