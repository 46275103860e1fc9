"""
Pytest configuration and shared fixtures for the Nexus client test suite.

This module provides a fake websocket, fake players and queues, and an event
recorder shared by all tests.
"""

import asyncio
import functools
from typing import Any, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from websockets.protocol import State

from nexus_client.config.settings import NodeOptions
from nexus_client.core.events import EventEmitter, NodeEvent
from nexus_client.core.manager import NodeManager

_CLOSED = object()


class FakeSocket:
    """In-memory stand-in for a websockets client connection."""

    def __init__(self) -> None:
        self.state = State.OPEN
        self.sent: List[str] = []
        self.close_code: Optional[int] = None
        self.close_reason: Optional[str] = None
        self.send_error: Optional[BaseException] = None
        self._incoming: asyncio.Queue = asyncio.Queue()

    def feed(self, message: Any) -> None:
        """Queue a frame for the reader."""
        self._incoming.put_nowait(message)

    def drop(self, code: int, reason: str = "") -> None:
        """Close from the server side."""
        self.close_code = code
        self.close_reason = reason
        self.state = State.CLOSED
        self._incoming.put_nowait(_CLOSED)

    async def send(self, message: str) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(message)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        if self.state is State.OPEN:
            self.close_code = code
            self.close_reason = reason
        self.state = State.CLOSED
        self._incoming.put_nowait(_CLOSED)

    def __aiter__(self):
        return self

    async def __anext__(self) -> Any:
        message = await self._incoming.get()
        if message is _CLOSED:
            raise StopAsyncIteration
        return message


class FakeQueue:
    """List-backed queue with current/previous slots."""

    def __init__(self, tracks=None, current=None, previous=None) -> None:
        self.tracks = list(tracks or [])
        self.current = current
        self.previous = previous

    def shift(self):
        return self.tracks.pop(0) if self.tracks else None

    def add(self, track) -> None:
        self.tracks.append(track)

    def __len__(self) -> int:
        return len(self.tracks)


class FakePlayer:
    """Player bound to a node, with mocked play/destroy."""

    def __init__(self, guild_id: str, node=None, queue: Optional[FakeQueue] = None) -> None:
        self.guild_id = guild_id
        self.node = node
        self.queue = queue if queue is not None else FakeQueue()
        self.playing = False
        self.paused = True
        self.track_repeat = False
        self.queue_repeat = False
        self.play = AsyncMock()
        self.destroy = AsyncMock()


class EventRecorder:
    """Records every node event emitted on an emitter."""

    def __init__(self, events: EventEmitter) -> None:
        self.calls: List[Tuple[NodeEvent, tuple]] = []
        for event in NodeEvent:
            events.on(event, functools.partial(self._record, event))

    def _record(self, event: NodeEvent, *args: Any) -> None:
        self.calls.append((event, args))

    def names(self) -> List[NodeEvent]:
        return [event for event, _ in self.calls]

    def args(self, event: NodeEvent) -> List[tuple]:
        return [args for recorded, args in self.calls if recorded == event]

    async def wait_for(self, event: NodeEvent, count: int = 1, timeout: float = 1.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while len(self.args(event)) < count:
            if loop.time() > deadline:
                raise AssertionError(f"Timed out waiting for {event.value} x{count}")
            await asyncio.sleep(0.001)


@pytest.fixture
def voice_sink():
    """Voice-dispatch sink."""
    return MagicMock()


@pytest.fixture
def manager(voice_sink):
    """Manager with a fresh event emitter."""
    return NodeManager(client_id="123456789", send=voice_sink)


@pytest.fixture
def recorder(manager):
    """Recorder subscribed to every event of the manager."""
    return EventRecorder(manager.events)


@pytest.fixture
def node_options():
    """Options for a local node with a long retry delay."""
    return NodeOptions(
        host="localhost",
        port=3000,
        password="secret",
        retry_amount=3,
        retry_delay=30.0,
    )


@pytest.fixture
def node(manager, node_options):
    """Node registered with the manager."""
    return manager.create_node(node_options)


@pytest.fixture
def sockets():
    """Fake sockets handed out by the patched websocket connect."""
    return []


@pytest.fixture
def mock_connect(sockets):
    """Patch the websocket connect so each call yields a new FakeSocket."""

    async def _connect(url, **kwargs):
        socket = FakeSocket()
        sockets.append(socket)
        return socket

    with patch(
        "nexus_client.websockets.client.node.connect", new=AsyncMock(side_effect=_connect)
    ) as mocked:
        yield mocked


@pytest.fixture
def make_player(manager):
    """Factory registering a FakePlayer with the manager."""

    def _make(guild_id: str = "guild-1", node=None, tracks=None, current=None) -> FakePlayer:
        player = FakePlayer(
            guild_id, node=node, queue=FakeQueue(tracks=tracks, current=current)
        )
        manager.players[guild_id] = player
        return player

    return _make


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
