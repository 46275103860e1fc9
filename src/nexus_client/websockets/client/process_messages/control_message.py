"""
Client-side control message handler.

This module handles opcode frames (handshake and voice-state relay) from the
node.
"""

import logging
from typing import TYPE_CHECKING

from nexus_client.core.events import NodeEvent
from nexus_client.core.types import OpCode

from .utils import Payload

if TYPE_CHECKING:
    from ..node import Node


class ControlMessageHandler:
    """Handles opcode frames for a node."""

    def __init__(self, node: "Node", logger: logging.Logger) -> None:
        """
        Initialize the control message handler.

        Args:
            node: Node the frames arrived on
            logger: Logger instance
        """
        self.node = node
        self.logger: logging.Logger = logger

    async def process_control_message(self, payload: Payload) -> None:
        """Route a frame by its opcode."""
        if payload.op == OpCode.HELLO:
            await self._handle_hello()
        elif payload.op == OpCode.VOICE_STATE_UPDATE:
            await self._handle_voice_state_update(payload)
        else:
            self.logger.debug(f"[{self.node.name}] Unknown opcode: {payload.op}")
            self.node.manager.events.emit(NodeEvent.NODE_UNKNOWN_OPCODE, payload)

    async def _handle_hello(self) -> None:
        """Answer the node's hello with an identify frame."""
        self.logger.debug(f"[{self.node.name}] Received hello, identifying")
        self.node.manager.events.emit(NodeEvent.NODE_HELLO, self.node)
        await self.node.send({"op": int(OpCode.IDENTIFY)})

    async def _handle_voice_state_update(self, payload: Payload) -> None:
        """Relay a voice-state update to the host application's gateway."""
        data = payload.d if isinstance(payload.d, dict) else {}
        inner = data.get("d") if isinstance(data.get("d"), dict) else {}
        guild_id = inner.get("guild_id")

        if guild_id is None:
            self.logger.warning(
                f"[{self.node.name}] Voice state update without guild id: {payload.raw}"
            )
            return

        await self.node.manager.send_voice_update(guild_id, data)
