"""
Utility functions for Streak Agent.
"""

from datetime import date, datetime, timedelta

from streak_agent.config import LOCAL_TZ, DATA_DIR


def now_local() -> datetime:
    """Get current time in the configured timezone."""
    return datetime.now(LOCAL_TZ)


def today_local() -> date:
    """Calendar date in the configured timezone. Read once per invocation."""
    return now_local().date()


def yesterday(today: date) -> date:
    return today - timedelta(days=1)


def parse_date(value):
    """Parse an ISO YYYY-MM-DD string. None passes through."""
    if value is None:
        return None
    return date.fromisoformat(value)


def plural_days(count: int) -> str:
    return "day" if count == 1 else "days"


def ensure_directories():
    """Create data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
