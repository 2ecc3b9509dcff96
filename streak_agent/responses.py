"""
Outcome → reply text.

Static phrase tables are always available. An optional generator (see
streak_agent.claude.phrasing) may replace the phrase for the celebratory
outcome kinds; any failure falls back to the static table.
"""

import random
from typing import Callable, Optional

from streak_agent.config import logger
from streak_agent.models import Outcome, OutcomeKind
from streak_agent.utils import plural_days

SET_GOAL_HINT = "Text: 'I want to [your goal]'"

DONE_PHRASES = [
    "YES! 🔥 Streak: {streak} {days}! 💪",
    "I KNEW you'd do it! 🔥 Streak: {streak} {days}! 💪",
    "Crushing it! 🔥 Streak: {streak} {days}! See you tomorrow! 💪",
]

SKIP_PHRASES = [
    "No worries! Tomorrow's a fresh start. You got this! 💙",
    "It happens! You're still here. That matters! 🚀",
    "All good! Every day is a new chance. Let's go! 💙",
]

PARTIAL_PHRASES = [
    "{text}?! Still crushing it! 💪",
    "That counts! Effort matters! ✨",
    "Progress is progress! Keep going! 🚀",
]

STREAK_SUFFIX = "🔥 Streak: {streak} {days}!"

GOAL_SET_TEXT = "🎯 Locked in! I'll remind you daily. Let's go! 💪"
NO_GOAL_YET_TEXT = f"Hey! Set a goal first. {SET_GOAL_HINT}"
NO_GOAL_YET_FOR_STATUS_TEXT = f"You haven't set a goal yet! {SET_GOAL_HINT}"
ALREADY_LOGGED_TEXT = "You already logged today! See you tomorrow! 🎉"

HELP_TEXT = """I track your goals! 📊

• Set goal: "I want to [goal]"
• Log completion: "done"
• Log skip: "nope"
• Check status: "status"

I'll remind you daily at 8 AM! Let's go! 🚀"""

UNKNOWN_TEXT = """Not sure what you meant! 🤔

Try:
• "I want to [goal]" - set goal
• "done" - mark complete
• "nope" - mark incomplete
• "help" - get info"""

STATUS_TEMPLATE = """📊 Your Status:

Goal: {goal}
🔥 Streak: {streak} {days}
Started: {created_at}
Last completed: {last_completed}

Keep crushing it! 💪"""

# Outcome kinds an external generator is allowed to phrase
GENERATED_KINDS = frozenset({
    OutcomeKind.GOAL_SET,
    OutcomeKind.COMPLETED,
    OutcomeKind.SKIPPED,
    OutcomeKind.PARTIAL_COMPLETED,
})

PhraseGenerator = Callable[[OutcomeKind, dict], str]


def outcome_context(outcome: Outcome) -> dict:
    """Fields handed to a phrase generator."""
    return {
        "goal": outcome.goal,
        "streak": outcome.streak,
        "text": outcome.text,
    }


def streak_suffix(streak: int) -> str:
    return STREAK_SUFFIX.format(streak=streak, days=plural_days(streak))


class ResponseSelector:
    """
    Renders Outcomes to user-facing text.

    Args:
        rng: source of randomness for picking among phrase variants.
            Pass a seeded random.Random for deterministic output.
        generator: optional callable (kind, context) -> str
    """

    def __init__(self, rng: Optional[random.Random] = None, generator: Optional[PhraseGenerator] = None):
        self.rng = rng or random.Random()
        self.generator = generator

    def render(self, outcome: Outcome) -> str:
        if self.generator is not None and outcome.kind in GENERATED_KINDS:
            generated = self._generate(outcome)
            if generated:
                return generated
        return self.render_static(outcome)

    def _generate(self, outcome: Outcome) -> Optional[str]:
        try:
            text = self.generator(outcome.kind, outcome_context(outcome))
        except Exception as e:
            logger.warning(f"Phrase generator failed for {outcome.kind.value}, using static phrase: {e}")
            return None

        text = (text or "").strip()
        if not text:
            logger.warning(f"Phrase generator returned nothing for {outcome.kind.value}, using static phrase")
            return None

        if outcome.kind in (OutcomeKind.COMPLETED, OutcomeKind.PARTIAL_COMPLETED):
            text = f"{text} {streak_suffix(outcome.streak)}"
        return text

    def render_static(self, outcome: Outcome) -> str:
        """Render from the fixed phrase table. Pure string formatting."""
        kind = outcome.kind
        days = plural_days(outcome.streak)

        if kind == OutcomeKind.COMPLETED:
            return self.rng.choice(DONE_PHRASES).format(streak=outcome.streak, days=days)

        if kind == OutcomeKind.PARTIAL_COMPLETED:
            phrase = self.rng.choice(PARTIAL_PHRASES).format(text=outcome.text or "")
            return f"{phrase} {streak_suffix(outcome.streak)}"

        if kind == OutcomeKind.SKIPPED:
            return self.rng.choice(SKIP_PHRASES)

        if kind == OutcomeKind.GOAL_SET:
            return GOAL_SET_TEXT

        if kind == OutcomeKind.ALREADY_LOGGED_TODAY:
            return ALREADY_LOGGED_TEXT

        if kind == OutcomeKind.NO_GOAL_YET:
            return NO_GOAL_YET_TEXT

        if kind == OutcomeKind.NO_GOAL_YET_FOR_STATUS:
            return NO_GOAL_YET_FOR_STATUS_TEXT

        if kind == OutcomeKind.STATUS_REPORT:
            return STATUS_TEMPLATE.format(
                goal=outcome.goal,
                streak=outcome.streak,
                days=days,
                created_at=outcome.created_at.isoformat() if outcome.created_at else "Unknown",
                last_completed=outcome.last_completed.isoformat() if outcome.last_completed else "Never",
            )

        if kind == OutcomeKind.HELP_REQUESTED:
            return HELP_TEXT

        return UNKNOWN_TEXT
