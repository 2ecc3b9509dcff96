"""
Tests for Claude-generated reply phrasing.
"""

from unittest.mock import MagicMock

import pytest

from streak_agent.claude import phrasing
from streak_agent.claude.phrasing import ClaudePhraser, build_phrasing_prompt, generate_phrase_with_claude, load_phrasing_prompt
from streak_agent.errors import PhrasingGeneratorFailed
from streak_agent.models import Outcome, OutcomeKind
from streak_agent.responses import GOAL_SET_TEXT, ResponseSelector


@pytest.fixture
def mock_anthropic(monkeypatch):
    """Patch anthropic.Anthropic to return a client with a canned reply."""
    import anthropic

    mock_response = MagicMock()
    mock_response.content = [MagicMock(text='"You showed up today!"')]
    mock_client = MagicMock()
    mock_client.messages.create.return_value = mock_response
    monkeypatch.setattr(anthropic, "Anthropic", lambda api_key: mock_client)
    return mock_client


class TestBuildPrompt:

    def test_partial_prompt_includes_text(self):
        prompt = build_phrasing_prompt(OutcomeKind.PARTIAL_COMPLETED, {"goal": "read", "text": "20 mins"})

        assert '"20 mins"' in prompt
        assert '"read"' in prompt

    def test_unsupported_kind(self):
        with pytest.raises(PhrasingGeneratorFailed):
            build_phrasing_prompt(OutcomeKind.STATUS_REPORT, {})


class TestGeneratePhrase:

    def test_returns_cleaned_text(self, mock_anthropic):
        text = generate_phrase_with_claude("fake-key", OutcomeKind.COMPLETED, {"goal": "read", "streak": 2})

        assert text == "You showed up today!"
        mock_anthropic.messages.create.assert_called_once()

    def test_missing_key(self):
        with pytest.raises(PhrasingGeneratorFailed):
            generate_phrase_with_claude("", OutcomeKind.COMPLETED, {})

    def test_api_error_raises_generator_failed(self, monkeypatch):
        import anthropic

        def raise_error(api_key):
            raise Exception("API error")
        monkeypatch.setattr(anthropic, "Anthropic", raise_error)

        with pytest.raises(PhrasingGeneratorFailed):
            generate_phrase_with_claude("fake-key", OutcomeKind.SKIPPED, {"goal": "read"})


class TestSelectorIntegration:

    def test_claude_phrase_with_streak_suffix(self, mock_anthropic):
        selector = ResponseSelector(generator=ClaudePhraser("fake-key"))

        text = selector.render(Outcome(OutcomeKind.COMPLETED, streak=4, goal="read"))

        assert text == "You showed up today! 🔥 Streak: 4 days!"

    def test_claude_failure_falls_back(self, monkeypatch):
        import anthropic

        def raise_error(api_key):
            raise Exception("API error")
        monkeypatch.setattr(anthropic, "Anthropic", raise_error)
        selector = ResponseSelector(generator=ClaudePhraser("fake-key"))

        assert selector.render(Outcome(OutcomeKind.GOAL_SET, goal="read")) == GOAL_SET_TEXT


@pytest.fixture
def prompt_locations(tmp_path, monkeypatch):
    """Point prompt loading at a temp file and reset the cache around the test."""
    prompt_file = tmp_path / "phrasing.md"
    monkeypatch.setattr(phrasing, "PROMPT_LOCATIONS", [tmp_path / "missing.md", prompt_file])
    load_phrasing_prompt.cache_clear()
    yield prompt_file
    load_phrasing_prompt.cache_clear()


class TestPhrasingPrompt:
    """System prompt loading for the phrasing call."""

    def test_repo_prompt_loads(self):
        load_phrasing_prompt.cache_clear()

        assert "accountability buddy" in load_phrasing_prompt()

    def test_first_existing_location_wins(self, prompt_locations):
        prompt_locations.write_text("Be brief.\n")

        assert load_phrasing_prompt() == "Be brief."

    def test_missing_prompt_raises(self, prompt_locations):
        with pytest.raises(PhrasingGeneratorFailed):
            load_phrasing_prompt()

    def test_missing_prompt_falls_back_to_static(self, prompt_locations, mock_anthropic):
        selector = ResponseSelector(generator=ClaudePhraser("fake-key"))

        text = selector.render(Outcome(OutcomeKind.GOAL_SET, goal="read"))

        assert text == GOAL_SET_TEXT
        mock_anthropic.messages.create.assert_not_called()

    def test_prompt_sent_as_system(self, prompt_locations, mock_anthropic):
        prompt_locations.write_text("Cheer them on.")

        generate_phrase_with_claude("fake-key", OutcomeKind.COMPLETED, {"goal": "read"})

        assert mock_anthropic.messages.create.call_args[1]["system"] == "Cheer them on."
