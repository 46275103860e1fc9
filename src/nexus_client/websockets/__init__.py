"""WebSocket communication with Nexus nodes."""

from .client import Node, ReconnectTimer

__all__ = ["Node", "ReconnectTimer"]
