"""
Core components for the Nexus client.

This package contains the protocol constants, the event emitter, the
collaborator interfaces and the manager that owns the node.
"""

from .events import EventEmitter, NodeEvent
from .manager import NodeManager
from .protocols import Player, Queue, VoiceDispatch
from .types import OpCode, WSEvent

__all__ = [
    "EventEmitter",
    "NodeEvent",
    "NodeManager",
    "Player",
    "Queue",
    "VoiceDispatch",
    "OpCode",
    "WSEvent",
]
