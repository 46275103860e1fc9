"""
Configuration management for the Nexus client.

This package provides node options and environment variable loading.
"""

from .settings import NodeOptions, NodeConfigManager, config_manager, generate_password

__all__ = [
    "NodeOptions",
    "NodeConfigManager",
    "config_manager",
    "generate_password",
]
