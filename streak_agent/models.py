"""
Data model: user records, classified intents and engine outcomes.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from streak_agent.utils import parse_date


@dataclass(frozen=True)
class HistoryEntry:
    date: date
    completed: bool

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "completed": self.completed}

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        return cls(date=parse_date(data["date"]), completed=bool(data["completed"]))


@dataclass
class UserRecord:
    """
    Persisted per-user state.

    Serialized with the camelCase keys used by users.json
    (createdAt, lastCompleted) so existing files load unchanged.
    """
    goal: str
    created_at: date
    streak: int = 0
    last_completed: Optional[date] = None
    history: List[HistoryEntry] = field(default_factory=list)
    name: Optional[str] = None

    def has_entry_for(self, day: date) -> bool:
        return any(entry.date == day for entry in self.history)

    def to_dict(self) -> dict:
        data = {
            "goal": self.goal,
            "createdAt": self.created_at.isoformat(),
            "streak": self.streak,
            "lastCompleted": self.last_completed.isoformat() if self.last_completed else None,
            "history": [entry.to_dict() for entry in self.history],
        }
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UserRecord":
        return cls(
            goal=data["goal"],
            created_at=parse_date(data["createdAt"]),
            streak=int(data.get("streak", 0)),
            last_completed=parse_date(data.get("lastCompleted")),
            history=[HistoryEntry.from_dict(h) for h in data.get("history", [])],
            name=data.get("name"),
        )


class IntentKind(str, Enum):
    SET_GOAL = "set_goal"
    MARK_DONE = "mark_done"
    MARK_SKIP = "mark_skip"
    MARK_PARTIAL = "mark_partial"
    STATUS = "status"
    HELP = "help"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    text: str = ""  # original-cased message, used for goal text and echoing


class OutcomeKind(str, Enum):
    GOAL_SET = "goal_set"
    COMPLETED = "completed"
    PARTIAL_COMPLETED = "partial_completed"
    SKIPPED = "skipped"
    ALREADY_LOGGED_TODAY = "already_logged_today"
    NO_GOAL_YET = "no_goal_yet"
    NO_GOAL_YET_FOR_STATUS = "no_goal_yet_for_status"
    STATUS_REPORT = "status_report"
    HELP_REQUESTED = "help_requested"
    UNKNOWN_COMMAND = "unknown_command"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    streak: int = 0
    goal: Optional[str] = None
    text: Optional[str] = None
    created_at: Optional[date] = None
    last_completed: Optional[date] = None
