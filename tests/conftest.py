"""
Shared pytest fixtures for Streak Agent tests.
"""

import json
import random
import pytest
import sys
from pathlib import Path
from datetime import date
from unittest.mock import MagicMock

# Add parent directory to path so we can import streak_agent
sys.path.insert(0, str(Path(__file__).parent.parent))

from streak_agent.models import HistoryEntry, UserRecord
from streak_agent.responses import ResponseSelector
from streak_agent.storage import JsonUserStore

USER = "whatsapp:+15551234567"


@pytest.fixture
def today():
    """Fixed 'today' for engine and reminder tests."""
    return date(2026, 1, 15)


@pytest.fixture
def users_file(tmp_path):
    return tmp_path / "users.json"


@pytest.fixture
def store(users_file):
    """Store backed by a temp users.json."""
    return JsonUserStore(users_file)


@pytest.fixture
def sender():
    """Recording sender that always succeeds."""
    return MagicMock(return_value=True)


@pytest.fixture
def selector():
    """Selector with a seeded RNG so phrase choice is repeatable."""
    return ResponseSelector(rng=random.Random(42))


@pytest.fixture
def sample_record():
    """User two days into a streak, last completed 2026-01-14."""
    return UserRecord(
        goal="I want to read daily",
        created_at=date(2026, 1, 12),
        streak=2,
        last_completed=date(2026, 1, 14),
        history=[
            HistoryEntry(date(2026, 1, 13), True),
            HistoryEntry(date(2026, 1, 14), True),
        ],
    )


@pytest.fixture
def legacy_users_json():
    """users.json as written by the original bot."""
    return {
        "whatsapp:+919876543210": {
            "goal": "I want to work out 30 mins daily",
            "createdAt": "2026-01-10",
            "streak": 1,
            "lastCompleted": "2026-01-14",
            "history": [
                {"date": "2026-01-12", "completed": False},
                {"date": "2026-01-14", "completed": True},
            ],
        }
    }


@pytest.fixture
def write_users(users_file):
    """Write a raw users.json payload."""
    def _write(data):
        with open(users_file, "w") as f:
            json.dump(data, f)
    return _write
