"""
Client-side message processing modules.

This package contains the handlers for frames received from the node:
opcode frames, event frames and the track events among them.
"""

from .control_message import ControlMessageHandler
from .event_message import EventMessageHandler
from .track_event import TrackEventHandler
from .utils import Payload, decode_payload, normalize_frame

__all__ = [
    "ControlMessageHandler",
    "EventMessageHandler",
    "TrackEventHandler",
    "Payload",
    "decode_payload",
    "normalize_frame",
]
