"""
Interfaces of the collaborators a node drives but does not own.

The host application supplies players (and their queues) and the sink that
relays voice-state updates to its own Discord gateway connection.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, runtime_checkable

Track = Any


@runtime_checkable
class Queue(Protocol):
    """Ordered sequence of upcoming tracks with current/previous slots."""

    current: Optional[Track]
    previous: Optional[Track]

    def shift(self) -> Optional[Track]:
        """Remove and return the head of the queue, or None when empty."""
        ...

    def add(self, track: Track) -> None:
        """Append ``track`` to the tail of the queue."""
        ...

    def __len__(self) -> int:
        ...


@runtime_checkable
class Player(Protocol):
    """Per-guild playback state."""

    guild_id: str
    node: Any
    queue: Queue
    playing: bool
    paused: bool
    track_repeat: bool
    queue_repeat: bool

    async def play(self) -> Any:
        ...

    async def destroy(self) -> Any:
        ...


# Called as sink(guild_id, data); may return an awaitable
VoiceDispatch = Callable[[str, Dict[str, Any]], Optional[Awaitable[None]]]
