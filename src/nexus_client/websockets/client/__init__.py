"""
WebSocket client components for the Nexus client.

This module provides the node connection and its reconnect timer.
"""

from .node import Node
from .reconnect import ReconnectTimer

__all__ = ["Node", "ReconnectTimer"]
