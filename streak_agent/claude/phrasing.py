"""
Claude-generated reply phrasing.

Used as an optional generator by ResponseSelector. Every failure, including
a missing system prompt, is raised as PhrasingGeneratorFailed so the
selector can fall back to static phrases.
"""

from functools import lru_cache
from pathlib import Path

import anthropic

from streak_agent.config import CLAUDE_MODEL, logger
from streak_agent.errors import PhrasingGeneratorFailed
from streak_agent.models import OutcomeKind

# Modal image copies prompts/ to /root/prompts; locally it sits at the repo root
PROMPT_LOCATIONS = [
    Path("/root/prompts/phrasing.md"),
    Path(__file__).parent.parent.parent / "prompts" / "phrasing.md",
]

EVENT_DESCRIPTIONS = {
    OutcomeKind.GOAL_SET: 'They just set a new goal: "{goal}". Confirm you\'ll remind them daily.',
    OutcomeKind.COMPLETED: 'They just did their habit today. Their goal: "{goal}".',
    OutcomeKind.PARTIAL_COMPLETED: 'They did part of their habit today and reported "{text}". Their goal: "{goal}". It still counts.',
    OutcomeKind.SKIPPED: 'They skipped their habit today. Their goal: "{goal}". Tomorrow is a fresh start.',
}


@lru_cache(maxsize=1)
def load_phrasing_prompt() -> str:
    """Read the phrasing system prompt from the first location that has it."""
    for prompt_file in PROMPT_LOCATIONS:
        if prompt_file.exists():
            text = prompt_file.read_text(encoding="utf-8").strip()
            if text:
                return text
    raise PhrasingGeneratorFailed(f"Phrasing prompt not found in {[str(p) for p in PROMPT_LOCATIONS]}")


def build_phrasing_prompt(kind: OutcomeKind, context: dict) -> str:
    """Describe the event for Claude."""
    template = EVENT_DESCRIPTIONS.get(kind)
    if template is None:
        raise PhrasingGeneratorFailed(f"No phrasing for outcome {kind.value}")
    return template.format(
        goal=context.get("goal") or "their habit",
        text=context.get("text") or "",
    )


def generate_phrase_with_claude(api_key: str, kind: OutcomeKind, context: dict) -> str:
    """Ask Claude for a one-line reply for the given outcome."""
    if not api_key:
        raise PhrasingGeneratorFailed("ANTHROPIC_API_KEY not configured")

    system_prompt = load_phrasing_prompt()
    prompt = build_phrasing_prompt(kind, context)

    try:
        client = anthropic.Anthropic(api_key=api_key)
        response = client.messages.create(
            model=CLAUDE_MODEL,
            max_tokens=100,
            system=system_prompt,
            messages=[{"role": "user", "content": prompt}]
        )
        text = response.content[0].text.strip().strip('"')
    except Exception as e:
        logger.error(f"Error generating phrase with Claude: {e}")
        raise PhrasingGeneratorFailed(str(e)) from e

    if not text:
        raise PhrasingGeneratorFailed("Claude returned an empty phrase")
    return text


class ClaudePhraser:
    """Callable phrase generator: (kind, context) -> str."""

    def __init__(self, api_key: str):
        self.api_key = api_key

    def __call__(self, kind: OutcomeKind, context: dict) -> str:
        return generate_phrase_with_claude(self.api_key, kind, context)
