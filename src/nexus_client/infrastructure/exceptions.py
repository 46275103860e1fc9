"""
Custom exceptions for the Nexus client.

This module defines all custom exceptions used throughout the client,
providing clear error categorization and handling.
"""

from typing import Optional


class NexusClientError(Exception):
    """Base exception for all Nexus client related errors."""

    pass


class ConfigurationError(NexusClientError):
    """Raised when there are configuration-related errors."""

    pass


class NetworkError(NexusClientError):
    """Raised when there are network communication errors."""

    pass


class WebSocketError(NetworkError):
    """Raised when there are WebSocket communication errors."""

    pass


class PayloadDecodeError(WebSocketError):
    """Raised when an inbound frame cannot be decoded into a payload."""

    pass


class InvalidPayloadError(WebSocketError):
    """Raised when an outbound payload is not an object-shaped JSON frame."""

    pass


class NodeSendError(WebSocketError):
    """Raised when the transport fails to write an outbound frame."""

    pass


class RetriesExhaustedError(WebSocketError):
    """Raised when a node gives up reconnecting."""

    def __init__(self, attempts: int):
        super().__init__(f"Unable to connect after {attempts} attempts.")
        self.attempts = attempts


class NodeRequestError(NetworkError):
    """Raised when a REST request to the node fails."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
