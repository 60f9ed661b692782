"""
Shared pytest fixtures and configuration for NeuroNet tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add the project root to path so ``src`` imports resolve
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils.clock import Clock
from src.utils.persistence import InMemoryProgressStore, JsonFileProgressStore
from src.utils.randomness import RandomSource


class FrozenClock(Clock):
    """Clock pinned to a settable instant."""

    def __init__(self, moment: datetime):
        super().__init__(timezone.utc)
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, **delta) -> None:
        self.moment += timedelta(**delta)


@pytest.fixture
def frozen_clock():
    """
    Fixture providing a clock frozen at 2024-03-15 12:00 UTC.

    Returns:
        FrozenClock: Call ``advance(days=1)`` to move it forward
    """
    return FrozenClock(datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def rng():
    """Fixture providing a seeded random source for reproducible quizzes."""
    return RandomSource(seed=1234)


@pytest.fixture
def memory_store(frozen_clock):
    """In-memory progress store sharing the frozen clock."""
    return InMemoryProgressStore(clock=frozen_clock)


@pytest.fixture
def file_store(tmp_path, frozen_clock):
    """
    JSON file progress store in a temporary directory.

    Args:
        tmp_path: pytest's tmp_path fixture

    Returns:
        JsonFileProgressStore: Store writing under ``tmp_path / "data"``
    """
    return JsonFileProgressStore(data_dir=tmp_path / "data", clock=frozen_clock)


@pytest.fixture
def valid_profile_dict():
    """
    Fixture providing a valid persisted profile.

    Returns:
        dict: A profile that passes all validation
    """
    return {
        "name": "Ada",
        "avatar_index": 2,
        "xp": 40,
        "level": 3,
        "streak": 4,
        "last_active": "2024-03-14",
        "badges": [
            {
                "badge_id": "first_quiz",
                "name": "First Steps",
                "icon": "star.fill",
                "description": "Complete your first quiz",
                "is_unlocked": True,
                "unlocked_at": "2024-03-01T09:30:00+00:00",
            }
        ],
        "completed_modules": ["binary-basics"],
    }


@pytest.fixture
def temp_schema_file(tmp_path):
    """
    Fixture providing a temporary schema file for testing.

    Args:
        tmp_path: pytest's tmp_path fixture

    Returns:
        Path: Path to temporary schema file
    """
    import json

    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {"test": {"type": "string"}, "count": {"type": "integer"}},
        "required": ["test"],
        "additionalProperties": False,
    }

    schema_file = tmp_path / "test.schema.json"
    with open(schema_file, "w") as f:
        json.dump(schema, f)

    return schema_file


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests in unit/ directory as unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Mark tests in integration/ directory as integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
