"""
Unit tests for environment-aware logging.
"""

import logging

import pytest

from nexus_client.infrastructure.logging_manager import Environment, LoggingManager


class TestLoggingManager:
    """Test cases for LoggingManager."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("production", Environment.PRODUCTION),
            ("prod", Environment.PRODUCTION),
            ("stage", Environment.STAGING),
            ("anything", Environment.DEVELOPMENT),
        ],
    )
    def test_environment_detection(self, monkeypatch, value, expected):
        """Test the ENVIRONMENT variable selects the environment."""
        monkeypatch.setenv("ENVIRONMENT", value)

        assert LoggingManager().get_environment() is expected

    @pytest.mark.unit
    def test_yaml_config_applied(self, monkeypatch):
        """Test the packaged YAML config is applied with the environment level."""
        monkeypatch.setenv("ENVIRONMENT", "staging")
        manager = LoggingManager()

        logger = manager.setup_logging("nexus_client.tests")

        assert manager.config_path.exists()
        assert logger.level == logging.INFO
        assert logging.getLogger("websockets").level == logging.WARNING

    @pytest.mark.unit
    def test_basic_logging_without_yaml(self, tmp_path, monkeypatch):
        """Test a console handler is attached when the YAML file is missing."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        manager = LoggingManager(config_path=tmp_path / "missing.yaml")

        logger = manager.setup_logging("nexus_client.tests.basic", log_level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert manager.is_production() is True
