"""
Infrastructure components for the Nexus client.

This package contains infrastructure concerns including:
- Environment-aware logging configuration
- Custom exception definitions
"""

from .logging_manager import (
    LoggingManager,
    Environment,
    setup_logging,
    get_logger,
    is_production,
    get_environment,
)
from .exceptions import (
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
    # Logging
    "LoggingManager",
    "Environment",
    "setup_logging",
    "get_logger",
    "is_production",
    "get_environment",
    # Exceptions
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
