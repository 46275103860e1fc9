"""
Nexus client - connection manager for Nexus audio nodes.

This package connects a Discord bot to a Nexus audio-processing node over a
websocket and keeps per-guild playback moving from the node's events.

Key Features:
- Websocket session with automatic reconnection
- Opcode and event dispatch to typed application events
- Queue advancement with track and queue repeat
- Voice-state relay through discord.py

Architecture:
- Core: protocol constants, events, manager
- WebSockets: node connection and message processing
- Voice: Discord voice-state sink
- Config: node options
- Infrastructure: logging, exceptions
"""

__version__ = "1.0.0"

# Core components
from .core.events import EventEmitter, NodeEvent
from .core.manager import NodeManager
from .core.types import OpCode, WSEvent

# Networking components
from .websockets.client import Node, ReconnectTimer
from .websockets.client.process_messages import Payload

# Voice
from .voice import DiscordVoiceDispatcher

# Configuration
from .config import NodeOptions, NodeConfigManager, config_manager

# Infrastructure
from .infrastructure.logging_manager import setup_logging, get_logger
from .infrastructure.exceptions import (
    NexusClientError,
    ConfigurationError,
    NetworkError,
    WebSocketError,
    PayloadDecodeError,
    InvalidPayloadError,
    NodeSendError,
    RetriesExhaustedError,
    NodeRequestError,
)

__all__ = [
    "__version__",
    # Core components
    "EventEmitter",
    "NodeEvent",
    "NodeManager",
    "OpCode",
    "WSEvent",
    # Networking components
    "Node",
    "ReconnectTimer",
    "Payload",
    # Voice
    "DiscordVoiceDispatcher",
    # Configuration
    "NodeOptions",
    "NodeConfigManager",
    "config_manager",
    # Infrastructure
    "setup_logging",
    "get_logger",
    "NexusClientError",
    "ConfigurationError",
    "NetworkError",
    "WebSocketError",
    "PayloadDecodeError",
    "InvalidPayloadError",
    "NodeSendError",
    "RetriesExhaustedError",
    "NodeRequestError",
]
