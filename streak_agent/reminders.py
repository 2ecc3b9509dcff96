"""
Daily reminder scan.

find_due_reminders() is the only place that decides who gets a reminder;
both the scheduled job and the manual trigger go through it.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional

from streak_agent.config import logger
from streak_agent.errors import StoreUnavailable
from streak_agent.handler import deliver

REMINDER_TEMPLATE = "How's the {goal}? Did you do it? 📚"


@dataclass(frozen=True)
class ReminderDue:
    user_id: str
    goal: str

    @property
    def text(self) -> str:
        return REMINDER_TEMPLATE.format(goal=self.goal)


@dataclass
class ReminderRun:
    sent: int = 0
    failed: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def summary(self) -> str:
        return f"Reminders sent to {self.sent} users"

    def to_dict(self) -> dict:
        return {"message": self.summary, "sent": self.sent, "failed": self.failed, "error": self.error}


def find_due_reminders(store, today: date, only_pending: bool = True) -> List[ReminderDue]:
    """
    Scan all records and return who should be reminded.

    Args:
        only_pending: skip users who already have a history entry for today
    """
    due = []
    for user_id, record in store.list():
        if only_pending and record.has_entry_for(today):
            continue
        due.append(ReminderDue(user_id=user_id, goal=record.goal))
    return due


def send_reminders(store, today: date, send: Callable[[str, str], bool], only_pending: bool = True) -> ReminderRun:
    """Send reminders to every due user. One user's failure never stops the rest."""
    run = ReminderRun()

    try:
        due = find_due_reminders(store, today, only_pending=only_pending)
    except StoreUnavailable as e:
        logger.error(f"Reminder scan aborted: {e}")
        run.error = str(e)
        return run

    logger.info(f"{len(due)} reminder(s) due for {today.isoformat()}")

    for reminder in due:
        if deliver(send, reminder.user_id, reminder.text):
            run.sent += 1
        else:
            run.failed.append(reminder.user_id)

    logger.info(run.summary)
    return run
