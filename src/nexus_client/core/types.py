"""
Protocol constants for the Nexus node websocket.

This module centralizes the opcodes, event names and close codes exchanged
with the node to avoid hardcoding throughout the codebase.
"""

from enum import Enum, IntEnum
from typing import Final


class OpCode(IntEnum):
    """Control-plane opcodes."""

    HELLO = 0
    VOICE_STATE_UPDATE = 1
    IDENTIFY = 10


class WSEvent(str, Enum):
    """Data-plane event names carried in the ``t`` field."""

    READY = "READY"
    TRACK_ADD = "TRACK_ADD"
    TRACKS_ADD = "TRACKS_ADD"
    TRACK_START = "TRACK_START"
    TRACK_FINISH = "TRACK_FINISH"
    TRACK_ERROR = "TRACK_ERROR"
    QUEUE_END = "QUEUE_END"
    QUEUE_STATE_UPDATE = "QUEUE_STATE_UPDATE"
    VOICE_CONNECTION_READY = "VOICE_CONNECTION_READY"
    VOICE_CONNECTION_ERROR = "VOICE_CONNECTION_ERROR"
    VOICE_CONNECTION_DISCONNECT = "VOICE_CONNECTION_DISCONNECT"
    AUDIO_PLAYER_ERROR = "AUDIO_PLAYER_ERROR"
    AUDIO_PLAYER_STATUS = "AUDIO_PLAYER_STATUS"


# WebSocket close codes
WS_CLOSE_NORMAL: Final[int] = 1000
WS_CLOSE_ABNORMAL: Final[int] = 1006

# Reason sent with the close frame of an explicit destroy
WS_DESTROY_REASON: Final[str] = "destroy"

# Handshake headers
HEADER_AUTHORIZATION: Final[str] = "Authorization"
HEADER_CLIENT_ID: Final[str] = "client-id"

# Initial value of a node's reconnect-attempt counter
RECONNECT_ATTEMPTS_INITIAL: Final[int] = 1
