"""Storage for per-user streak records."""

from streak_agent.storage.users import JsonUserStore

__all__ = [
    "JsonUserStore",
]
