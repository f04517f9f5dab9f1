"""
Pytest configuration for Automata onboarding core tests.

Sets up test environment and global fixtures.
"""
import os
import pytest

# Disable config validation during tests
# This allows tests to run without requiring a real .env file
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from automata.services.storage import InMemoryStore  # noqa: E402

# 2026-01-01T00:00:00Z in epoch milliseconds
START_MS = 1767225600000
DAY_MS = 24 * 60 * 60 * 1000


class FakeClock:
    """Manually advanced clock returning epoch milliseconds."""

    def __init__(self, start_ms: int = START_MS):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int = 0, days: float = 0) -> None:
        self.now_ms += ms + int(days * DAY_MS)


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def clock():
    """Fake clock starting at START_MS."""
    return FakeClock()
