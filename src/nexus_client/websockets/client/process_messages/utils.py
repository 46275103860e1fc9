"""
Inbound frame decoding.

Frames arrive as text, a single binary buffer, or a list of binary chunks and
always carry a JSON object ``{op?, t?, d?}``.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Union

from nexus_client.infrastructure.exceptions import PayloadDecodeError

RawFrame = Union[str, bytes, bytearray, memoryview, Sequence[bytes]]


@dataclass
class Payload:
    """A decoded inbound message."""

    op: Optional[int] = None
    t: Optional[str] = None
    d: Any = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def guild_id(self) -> Optional[str]:
        """Guild the event data refers to, if any."""
        if isinstance(self.d, dict):
            return self.d.get("guild_id")
        return None


def normalize_frame(raw: RawFrame) -> Union[str, bytes]:
    """Collapse chunked or buffer-like frames into one str/bytes value."""
    if isinstance(raw, (str, bytes)):
        return raw
    if isinstance(raw, (bytearray, memoryview)):
        return bytes(raw)
    if isinstance(raw, (list, tuple)):
        return b"".join(bytes(chunk) for chunk in raw)
    raise PayloadDecodeError(f"Unsupported frame type: {type(raw).__name__}")


def decode_payload(raw: RawFrame) -> Payload:
    """
    Decode an inbound frame.

    Raises:
        PayloadDecodeError: If the frame is not a JSON object
    """
    data = normalize_frame(raw)
    try:
        message = json.loads(data)
    except ValueError as e:
        raise PayloadDecodeError(f"Malformed frame: {e}") from e

    if not isinstance(message, dict):
        raise PayloadDecodeError(
            f"Expected a JSON object frame, got {type(message).__name__}"
        )

    return Payload(
        op=message.get("op"),
        t=message.get("t"),
        d=message.get("d"),
        raw=message,
    )
