"""
Connection to a Nexus audio node.

A :class:`Node` owns one websocket session to the node: it connects,
dispatches inbound frames in arrival order, reconnects after unexpected
closes, and tears everything down on :meth:`Node.destroy`.
"""

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import aiohttp
import websockets.exceptions
from websockets.asyncio.client import ClientConnection, connect
from websockets.protocol import State

from nexus_client.config.settings import NodeOptions
from nexus_client.core.events import NodeEvent
from nexus_client.core.types import (
    HEADER_AUTHORIZATION,
    HEADER_CLIENT_ID,
    RECONNECT_ATTEMPTS_INITIAL,
    WS_CLOSE_ABNORMAL,
    WS_CLOSE_NORMAL,
    WS_DESTROY_REASON,
)
from nexus_client.infrastructure.exceptions import (
    ConfigurationError,
    InvalidPayloadError,
    NodeRequestError,
    NodeSendError,
    PayloadDecodeError,
    RetriesExhaustedError,
)

from .process_messages import (
    ControlMessageHandler,
    EventMessageHandler,
    decode_payload,
)
from .process_messages.utils import RawFrame
from .reconnect import ReconnectTimer

if TYPE_CHECKING:
    from nexus_client.core.manager import NodeManager


class Node:
    """
    Websocket session with a Nexus node.

    The node reports everything it observes through ``manager.events``;
    socket-level failures are emitted, never raised to the caller.
    """

    def __init__(
        self,
        manager: "NodeManager",
        options: Optional[NodeOptions] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialize the node.

        Args:
            manager: Registry owning this node, its players and session token
            options: Connection options (defaults to a local node)
            logger: Logger instance

        Raises:
            ConfigurationError: If no manager is given
        """
        if manager is None:
            raise ConfigurationError("A node requires an owning manager")

        self.manager: "NodeManager" = manager
        self.options: NodeOptions = options or NodeOptions()
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

        # WebSocket connection
        self.socket: Optional[ClientConnection] = None
        self._reader_task: Optional[asyncio.Task[None]] = None
        self._connecting: bool = False
        # True from connect() until destroy()
        self._active: bool = False

        # Reconnect policy
        self.reconnect_attempts: int = RECONNECT_ATTEMPTS_INITIAL
        self.reconnect_timer: ReconnectTimer = ReconnectTimer(
            self.options.retry_delay, self._reconnect, logger=self.logger
        )

        # Message processing handlers
        self.control_handler: ControlMessageHandler = ControlMessageHandler(
            self, self.logger
        )
        self.event_handler: EventMessageHandler = EventMessageHandler(
            self, self.logger
        )

    @property
    def name(self) -> str:
        return self.options.name

    @property
    def connected(self) -> bool:
        """True if the socket exists and is open."""
        return self.socket is not None and self.socket.state is State.OPEN

    async def connect(self) -> None:
        """Open the websocket session unless one is already open."""
        if self.connected or self._connecting:
            return

        self._active = True
        self._strip_socket()

        url = self.options.socket_url
        headers = {
            HEADER_AUTHORIZATION: self.options.password,
            HEADER_CLIENT_ID: str(self.manager.client_id),
        }

        self.logger.info(f"[{self.name}] Connecting to {url}")
        self._connecting = True
        try:
            socket = await connect(url, additional_headers=headers)
        except (
            OSError,
            asyncio.TimeoutError,
            websockets.exceptions.WebSocketException,
        ) as e:
            self.logger.error(f"[{self.name}] Connection failed: {e}")
            if not self._active:
                # Destroyed while the handshake was in flight
                return
            self.handle_error(e)
            self.handle_close(WS_CLOSE_ABNORMAL, str(e))
            return
        finally:
            self._connecting = False

        if not self._active:
            # Destroyed while the handshake was in flight
            await socket.close(WS_CLOSE_NORMAL, WS_DESTROY_REASON)
            return

        self.socket = socket
        self._reader_task = asyncio.create_task(self._listen(socket))
        self.handle_open()

    async def destroy(self) -> None:
        """Destroy the node and every player bound to it."""
        if not self._active:
            return

        self._active = False
        self.reconnect_timer.cancel()
        self.logger.info(f"[{self.name}] Destroying node")

        for player in list(self.manager.players.values()):
            if player.node is self:
                try:
                    await player.destroy()
                except Exception as e:
                    self.logger.error(
                        f"[{self.name}] Error destroying player {player.guild_id}: {e}",
                        exc_info=True,
                    )

        socket = self.socket
        self._strip_socket()
        if socket is not None:
            try:
                await socket.close(WS_CLOSE_NORMAL, WS_DESTROY_REASON)
            except Exception as e:
                self.logger.error(
                    f"[{self.name}] Error closing socket: {e}", exc_info=True
                )

        self.reconnect_attempts = RECONNECT_ATTEMPTS_INITIAL
        self.reconnect_timer.cancel()

        self.manager.events.emit(NodeEvent.NODE_DESTROY, self)
        self.manager.destroy_node(self)

    def _strip_socket(self) -> None:
        """Detach the reader from the current socket and drop the handle."""
        task = self._reader_task
        if task is not None and task is not asyncio.current_task():
            task.cancel()
        self._reader_task = None
        self.socket = None

    def reconnect(self) -> None:
        """Schedule a reconnect after the configured delay."""
        if not self._active:
            return

        self.logger.info(
            f"[{self.name}] Reconnecting in {self.options.retry_delay:.1f}s "
            f"(attempt {self.reconnect_attempts}/{self.options.retry_amount})"
        )
        self.reconnect_timer.arm()

    async def _reconnect(self) -> None:
        if not self._active:
            return

        if self.reconnect_attempts >= self.options.retry_amount:
            error = RetriesExhaustedError(self.options.retry_amount)
            self.logger.error(f"[{self.name}] {error}")
            self.manager.events.emit(NodeEvent.NODE_ERROR, self, error)
            await self.destroy()
            return

        self._strip_socket()
        self.manager.events.emit(NodeEvent.NODE_RECONNECT, self)
        self.reconnect_attempts += 1
        await self.connect()

    def handle_open(self) -> None:
        """Called once the handshake completes."""
        self.reconnect_timer.cancel()
        self.logger.info(f"[{self.name}] Connected")
        self.manager.events.emit(NodeEvent.NODE_CONNECT, self)

    def handle_close(self, code: int, reason: str) -> None:
        """Called when the socket closes; anything but a destroy reconnects."""
        self.logger.warning(f"[{self.name}] Disconnected ({code}): {reason}")
        self.manager.events.emit(
            NodeEvent.NODE_DISCONNECT, self, {"code": code, "reason": reason}
        )
        if code != WS_CLOSE_NORMAL or reason != WS_DESTROY_REASON:
            self.reconnect()

    def handle_error(self, error: Optional[BaseException]) -> None:
        if error is None:
            return
        self.manager.events.emit(NodeEvent.NODE_ERROR, self, error)

    async def _listen(self, socket: ClientConnection) -> None:
        """Process frames from ``socket`` one at a time until it closes."""
        try:
            async for message in socket:
                await self._process_frame(message)
        except websockets.exceptions.ConnectionClosed:
            pass

        if self.socket is socket:
            self.handle_close(
                socket.close_code or WS_CLOSE_ABNORMAL, socket.close_reason or ""
            )

    async def _process_frame(self, message: RawFrame) -> None:
        try:
            await self.handle_message(message)
        except PayloadDecodeError as e:
            self.logger.error(f"[{self.name}] Dropping malformed frame: {e}")
            self.handle_error(e)
        except Exception as e:
            self.logger.error(
                f"[{self.name}] Error processing message: {e}", exc_info=True
            )
            self.handle_error(e)

    async def handle_message(self, raw: RawFrame) -> None:
        """
        Decode and dispatch one inbound frame.

        Raises:
            PayloadDecodeError: If the frame is not a JSON object
        """
        payload = decode_payload(raw)

        if payload.op is not None:
            await self.control_handler.process_control_message(payload)

        if payload.t is not None:
            await self.event_handler.process_event_message(payload)

    async def send(self, data: Any) -> bool:
        """
        Send a payload to the node.

        Args:
            data: JSON-serializable object, e.g. ``{"op": 10}``

        Returns:
            True once written, False if the node is not connected

        Raises:
            InvalidPayloadError: If ``data`` does not serialize to a JSON object
            NodeSendError: If the transport fails to write the frame
        """
        if not self.connected:
            return False

        try:
            stringified = json.dumps(data)
        except (TypeError, ValueError) as e:
            raise InvalidPayloadError(f"Payload is not serializable: {e}") from e

        if not data or not stringified.startswith("{"):
            raise InvalidPayloadError("Improper data sent to send in the WS.")

        try:
            await self.socket.send(stringified)
        except (websockets.exceptions.WebSocketException, OSError) as e:
            raise NodeSendError(f"[{self.name}] Failed to send payload: {e}") from e

        return True

    async def make_request(
        self, method: str, path: str, body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Make a request to the node's REST API.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: Path relative to the node root
            body: JSON body (an empty object when omitted)

        Returns:
            Decoded JSON response body, or None if the body is empty

        Raises:
            NodeRequestError: On transport failures and error statuses
        """
        url = f"{self.options.rest_url}{path.lstrip('/')}"
        headers = {
            HEADER_AUTHORIZATION: self.manager.access_token or "",
            "Content-Type": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self.options.request_timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(
                    method, url, data=json.dumps(body or {}), headers=headers
                ) as response:
                    text = await response.text()
                    if response.status >= 400:
                        raise NodeRequestError(
                            f"{method} {url} failed: {response.status} - {text}",
                            status=response.status,
                        )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NodeRequestError(f"{method} {url} failed: {e}") from e

        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            raise NodeRequestError(
                f"{method} {url} returned invalid JSON", status=response.status
            ) from e

    def get_status(self) -> Dict[str, Any]:
        """Get node connection information."""
        return {
            "name": self.name,
            "url": self.options.socket_url,
            "connected": self.connected,
            "reconnect_attempts": self.reconnect_attempts,
            "reconnect_pending": self.reconnect_timer.armed,
        }
