"""
Unit tests for services.prompt_builder module.
"""
from datetime import datetime

import pytest
from hablaya.services.prompt_builder import (
    FOCUS_INSTRUCTIONS,
    LEARNING_FOCUSES,
    LEVEL_PROFILES,
    build_default_prompt,
    build_system_prompt,
    get_level_profile,
    normalize_focus,
)

NOW = datetime(2025, 3, 14, 9, 26, 53)


class TestLevelProfiles:

    def test_known_level(self):
        assert get_level_profile("advanced").label == "Advanced (C1)"

    @pytest.mark.parametrize("name", [None, "", "expert"])
    def test_unknown_level_falls_back_to_intermediate(self, name):
        assert get_level_profile(name) is LEVEL_PROFILES["intermediate"]

    def test_every_focus_has_instructions(self):
        assert set(LEARNING_FOCUSES) == set(FOCUS_INSTRUCTIONS)


class TestBuildSystemPrompt:

    def test_context_block(self):
        prompt = build_system_prompt(
            level=LEVEL_PROFILES["upper-intermediate"],
            focus="grammar",
            is_voice_input=False,
            session_data={"wordsPracticed": 42, "messagesSent": 5},
            now=NOW,
        )

        assert "Learner level: Upper-Intermediate (B2)" in prompt
        assert "Learning focus: grammar" in prompt
        assert "Input mode: text (typed)" in prompt
        assert 'Session data: {"messagesSent": 5, "wordsPracticed": 42}' in prompt
        assert "Current time: 2025-03-14 09:26:53" in prompt
        assert "Keep replies under 80 words" in prompt
        assert FOCUS_INSTRUCTIONS["grammar"] in prompt

    def test_voice_input_guidance(self):
        prompt = build_system_prompt(LEVEL_PROFILES["beginner"], is_voice_input=True, now=NOW)

        assert "Input mode: voice (transcribed speech)" in prompt
        assert "ignore punctuation and capitalization" in prompt

    @pytest.mark.parametrize("focus", [None, "", "karaoke", "GRAMMAR"])
    def test_unrecognized_focus_uses_conversation_block(self, focus):
        prompt = build_system_prompt(LEVEL_PROFILES["intermediate"], focus=focus, now=NOW)

        assert FOCUS_INSTRUCTIONS["conversation"] in prompt
        assert "Learning focus: conversation" in prompt

    @pytest.mark.parametrize("focus", LEARNING_FOCUSES)
    def test_focus_block_selected_by_exact_match(self, focus):
        prompt = build_system_prompt(LEVEL_PROFILES["intermediate"], focus=focus, now=NOW)

        assert FOCUS_INSTRUCTIONS[focus] in prompt
        others = [block for name, block in FOCUS_INSTRUCTIONS.items() if name != focus]
        assert not any(block in prompt for block in others)

    def test_timestamp_changes_prompt(self):
        level = LEVEL_PROFILES["intermediate"]
        later = datetime(2025, 3, 14, 9, 27, 0)
        assert build_system_prompt(level, now=NOW) != build_system_prompt(level, now=later)

    def test_empty_session_data(self):
        prompt = build_system_prompt(LEVEL_PROFILES["intermediate"], session_data=None, now=NOW)
        assert "Session data: {}" in prompt


class TestDefaultPrompt:

    def test_embeds_time(self):
        prompt = build_default_prompt(NOW)
        assert prompt.startswith("You are HablaYa!")
        assert prompt.endswith("Current time: 2025-03-14 09:26:53")

    def test_normalize_focus(self):
        assert normalize_focus("writing") == "writing"
        assert normalize_focus("dancing") == "conversation"
