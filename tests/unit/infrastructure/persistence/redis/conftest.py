"""
Pytest configuration for Redis adapter tests.

Provides a mocked Redis client so these tests never touch a server.
"""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def client():
    """Mocked redis.Redis client (decode_responses semantics: str values)."""
    return MagicMock()
