"""
Environment-aware logging management for the Nexus client.

Log levels follow the deployment environment (``ENVIRONMENT`` variable):

- Development: DEBUG and above
- Staging: INFO and above
- Production: WARNING and above

A YAML file (``logging.yaml`` next to the package) is applied with
``logging.config.dictConfig`` when present; otherwise a console handler is
attached to the component logger.
"""

import logging
import logging.config
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Third-party loggers that stay at WARNING regardless of environment
NOISY_LOGGERS = (
    "websockets",
    "websockets.client",
    "aiohttp.client",
    "aiohttp.internal",
    "discord.gateway",
    "discord.client",
)


class Environment(Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


ENVIRONMENT_LOG_LEVELS = {
    Environment.DEVELOPMENT: "DEBUG",
    Environment.STAGING: "INFO",
    Environment.PRODUCTION: "WARNING",
}


class LoggingManager:
    """Applies the YAML logging configuration with per-environment levels."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize logging manager.

        Args:
            config_path: Path to YAML configuration file. If None, uses the
                ``logging.yaml`` shipped with the package.
        """
        if config_path is None:
            config_path = Path(__file__).parent.parent / "logging.yaml"

        self.config_path = config_path
        self._config_cache: Optional[Dict[str, Any]] = None
        self._environment = self._detect_environment()

    def _detect_environment(self) -> Environment:
        """Detect current environment from environment variables."""
        env = os.getenv("ENVIRONMENT", "development").lower()

        if env in ("prod", "production"):
            return Environment.PRODUCTION
        elif env in ("staging", "stage"):
            return Environment.STAGING
        return Environment.DEVELOPMENT

    def _load_yaml_config(self) -> Optional[Dict[str, Any]]:
        """Load and cache the YAML logging configuration."""
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            return None

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            logging.getLogger(__name__).warning(
                f"Failed to load YAML logging config {self.config_path}: {e}"
            )
            return None

        self._config_cache = config
        return config

    def _apply_environment_levels(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Lower or raise application logger levels to the environment level."""
        if self._environment is Environment.DEVELOPMENT:
            return config

        level = ENVIRONMENT_LOG_LEVELS[self._environment]

        if "root" in config:
            config["root"]["level"] = level

        for logger_name, logger_config in config.get("loggers", {}).items():
            if logger_name in NOISY_LOGGERS:
                continue
            logger_config["level"] = level

        return config

    def setup_logging(
        self, component_name: str, log_level: Optional[str] = None
    ) -> logging.Logger:
        """
        Set up logging for a component.

        Args:
            component_name: Logger name of the component
            log_level: Override log level (defaults to the environment level)

        Returns:
            Configured logger instance
        """
        if log_level is None:
            log_level = ENVIRONMENT_LOG_LEVELS[self._environment]

        config = self._load_yaml_config()
        if config:
            logging.config.dictConfig(self._apply_environment_levels(config))
            logger = logging.getLogger(component_name)
        else:
            logger = self._setup_basic_logging(component_name)

        logger.setLevel(getattr(logging, log_level.upper()))
        self._suppress_noisy_loggers()
        return logger

    def _setup_basic_logging(self, component_name: str) -> logging.Logger:
        """Attach a console handler when no YAML config is available."""
        logger = logging.getLogger(component_name)
        logger.handlers.clear()

        if self._environment is Environment.PRODUCTION:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def _suppress_noisy_loggers(self) -> None:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    def get_environment(self) -> Environment:
        """Get current environment."""
        return self._environment

    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self._environment is Environment.PRODUCTION


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(component_name: str, log_level: Optional[str] = None) -> logging.Logger:
    """Set up logging for a component (convenience function)."""
    return _logging_manager.setup_logging(component_name, log_level)


def get_logger(component_name: str) -> logging.Logger:
    """Get a logger for a component."""
    return logging.getLogger(component_name)


def is_production() -> bool:
    """Check if running in production mode."""
    return _logging_manager.is_production()


def get_environment() -> Environment:
    """Get current environment."""
    return _logging_manager.get_environment()
