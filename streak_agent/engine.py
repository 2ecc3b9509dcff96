"""
Streak state machine.

apply() is pure: it takes the current record (or None), a classified intent
and the calendar date to treat as today, and returns the new record plus an
Outcome describing what happened. Nothing here reads the clock or the store.
"""

from dataclasses import replace
from datetime import date
from typing import Optional, Tuple

from streak_agent.models import (
    HistoryEntry,
    Intent,
    IntentKind,
    Outcome,
    OutcomeKind,
    UserRecord,
)
from streak_agent.utils import yesterday


def _set_goal(record, intent, today):
    fresh = UserRecord(goal=intent.text, created_at=today)
    return fresh, Outcome(OutcomeKind.GOAL_SET, goal=fresh.goal)


def _complete(record, intent, today):
    if record is None:
        return None, Outcome(OutcomeKind.NO_GOAL_YET)

    if record.has_entry_for(today):
        return record, Outcome(OutcomeKind.ALREADY_LOGGED_TODAY, streak=record.streak, goal=record.goal)

    if record.last_completed == yesterday(today):
        streak = record.streak + 1
    else:
        streak = 1

    updated = replace(
        record,
        streak=streak,
        last_completed=today,
        history=record.history + [HistoryEntry(today, True)],
    )

    if intent.kind == IntentKind.MARK_PARTIAL:
        return updated, Outcome(OutcomeKind.PARTIAL_COMPLETED, streak=streak, goal=record.goal, text=intent.text)
    return updated, Outcome(OutcomeKind.COMPLETED, streak=streak, goal=record.goal)


def _skip(record, intent, today):
    if record is None:
        return None, Outcome(OutcomeKind.NO_GOAL_YET)

    # No same-day guard here: a repeated skip appends another entry.
    updated = replace(
        record,
        streak=0,
        history=record.history + [HistoryEntry(today, False)],
    )
    return updated, Outcome(OutcomeKind.SKIPPED, goal=record.goal)


def _status(record, intent, today):
    if record is None:
        return None, Outcome(OutcomeKind.NO_GOAL_YET_FOR_STATUS)
    return record, Outcome(
        OutcomeKind.STATUS_REPORT,
        streak=record.streak,
        goal=record.goal,
        created_at=record.created_at,
        last_completed=record.last_completed,
    )


def _help(record, intent, today):
    return record, Outcome(OutcomeKind.HELP_REQUESTED)


def _unknown(record, intent, today):
    return record, Outcome(OutcomeKind.UNKNOWN_COMMAND)


TRANSITIONS = {
    IntentKind.SET_GOAL: _set_goal,
    IntentKind.MARK_DONE: _complete,
    IntentKind.MARK_PARTIAL: _complete,
    IntentKind.MARK_SKIP: _skip,
    IntentKind.STATUS: _status,
    IntentKind.HELP: _help,
    IntentKind.UNKNOWN: _unknown,
}

# Intents whose transition never looks at the stored record
RECORD_INDEPENDENT = frozenset({IntentKind.SET_GOAL, IntentKind.HELP, IntentKind.UNKNOWN})


def apply(record: Optional[UserRecord], intent: Intent, today: date) -> Tuple[Optional[UserRecord], Outcome]:
    """Apply an intent to a user's record for the given day."""
    return TRANSITIONS[intent.kind](record, intent, today)
