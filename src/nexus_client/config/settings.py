"""
Configuration management for the Nexus client.

Node options are a plain dataclass; :class:`NodeConfigManager` builds them
from environment variables, optionally loaded from a ``.env`` file.
"""

import logging
import os
import secrets
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from nexus_client.infrastructure.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PASSWORD_ALPHABET = "abcdefghijklmnopqrstuvwxyz123456789"
PASSWORD_LENGTH = 22


def generate_password() -> str:
    """Generate a random password for a node that was not given one."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(PASSWORD_LENGTH))


@dataclass
class NodeOptions:
    """Connection options for a Nexus node."""

    host: str = "localhost"
    port: int = 3000
    password: str = field(default_factory=generate_password)
    secure: bool = False
    identifier: Optional[str] = None

    # Reconnect policy
    retry_amount: int = 5
    retry_delay: float = 30.0

    # REST request timeout, seconds
    request_timeout: float = 15.0

    def __post_init__(self):
        """Validate option values."""
        if not self.host:
            raise ConfigurationError("Node host cannot be empty")
        if self.port <= 0:
            raise ConfigurationError(f"Invalid node port: {self.port}")
        if self.retry_amount < 0:
            raise ConfigurationError(f"Invalid retry amount: {self.retry_amount}")
        if self.retry_delay < 0:
            raise ConfigurationError(f"Invalid retry delay: {self.retry_delay}")

    @property
    def socket_url(self) -> str:
        return f"ws{'s' if self.secure else ''}://{self.host}:{self.port}/"

    @property
    def rest_url(self) -> str:
        return f"http{'s' if self.secure else ''}://{self.host}:{self.port}/"

    @property
    def name(self) -> str:
        """Identifier used in log lines."""
        return self.identifier or f"{self.host}:{self.port}"


class NodeConfigManager:
    """Reads node options from the environment."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to environment file
        """
        self.env_file_path = env_file_path
        self._load_environment()

    def _load_environment(self):
        """Load environment variables from file."""
        if os.path.exists(self.env_file_path):
            load_dotenv(dotenv_path=self.env_file_path)
            logger.info(f"Loaded environment from {self.env_file_path}")
        else:
            logger.debug(f"Environment file {self.env_file_path} not found")

    def _get_required_env(self, key: str) -> str:
        """
        Get required environment variable.

        Raises:
            ConfigurationError: If environment variable is not set
        """
        value = os.getenv(key)
        if not value:
            raise ConfigurationError(f"Required environment variable {key} is not set")
        return value

    def _get_optional_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(key, default)

    def _get_int_env(self, key: str, default: int) -> int:
        value = self._get_optional_env(key)
        if value is None or value == "":
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {value!r}") from None

    def _get_float_env(self, key: str, default: float) -> float:
        value = self._get_optional_env(key)
        if value is None or value == "":
            return default
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got {value!r}") from None

    def _get_bool_env(self, key: str, default: bool) -> bool:
        value = self._get_optional_env(key)
        if value is None or value == "":
            return default
        return value.strip().lower() in ("1", "true", "yes", "on")

    def get_client_id(self) -> str:
        """Get the bot's client id sent in the handshake headers."""
        return self._get_required_env("NEXUS_CLIENT_ID")

    def get_options(self) -> NodeOptions:
        """
        Build node options from the environment.

        Returns:
            NodeOptions: Node connection options

        Raises:
            ConfigurationError: If a value is malformed
        """
        defaults = NodeOptions(password="")
        password = self._get_optional_env("NEXUS_PASSWORD")

        options = NodeOptions(
            host=self._get_optional_env("NEXUS_HOST", defaults.host),
            port=self._get_int_env("NEXUS_PORT", defaults.port),
            password=password or generate_password(),
            secure=self._get_bool_env("NEXUS_SECURE", defaults.secure),
            identifier=self._get_optional_env("NEXUS_IDENTIFIER"),
            retry_amount=self._get_int_env("NEXUS_RETRY_AMOUNT", defaults.retry_amount),
            retry_delay=self._get_float_env("NEXUS_RETRY_DELAY", defaults.retry_delay),
            request_timeout=self._get_float_env(
                "NEXUS_REQUEST_TIMEOUT", defaults.request_timeout
            ),
        )

        logger.info(f"Node options loaded for {options.name}")
        return options


# Global configuration manager instance
config_manager = NodeConfigManager()
