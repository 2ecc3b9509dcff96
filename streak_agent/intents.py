"""
Keyword/pattern intent classification for inbound messages.

Rules are evaluated in order and the first match wins, so a message like
"I want to do 30 mins" is a goal, not a partial completion.
"""

import re
from typing import Callable, List, Optional, Tuple

from streak_agent.models import Intent, IntentKind

DURATION_PATTERN = re.compile(r"\d+\s*(min|mins|minutes|hour|hours|hrs)")


def _contains(*words: str) -> Callable[[str], bool]:
    return lambda text: any(word in text for word in words)


def _equals(*words: str) -> Callable[[str], bool]:
    return lambda text: text in words


def _has_duration(text: str) -> bool:
    return DURATION_PATTERN.search(text) is not None


RULES: List[Tuple[Callable[[str], bool], IntentKind]] = [
    (_contains("want", "goal"), IntentKind.SET_GOAL),
    (_equals("done", "yes"), IntentKind.MARK_DONE),
    (_equals("nope", "no", "not today"), IntentKind.MARK_SKIP),
    (_has_duration, IntentKind.MARK_PARTIAL),
    (_equals("help", "info"), IntentKind.HELP),
    (_equals("status", "streak"), IntentKind.STATUS),
]


def classify(raw_text: Optional[str]) -> Intent:
    """Map raw message text to an Intent. Matching is case-insensitive."""
    original = (raw_text or "").strip()
    text = original.lower()

    for matches, kind in RULES:
        if matches(text):
            return Intent(kind=kind, text=original)

    return Intent(kind=IntentKind.UNKNOWN, text=original)
