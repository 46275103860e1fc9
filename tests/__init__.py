"""
Test suite for the Nexus client.

Unit tests are organized by package under ``tests/unit``.
"""
