"""Claude AI phrasing module."""

from streak_agent.claude.phrasing import (
    generate_phrase_with_claude,
    build_phrasing_prompt,
    load_phrasing_prompt,
    ClaudePhraser,
)

__all__ = [
    "generate_phrase_with_claude",
    "build_phrasing_prompt",
    "load_phrasing_prompt",
    "ClaudePhraser",
]
