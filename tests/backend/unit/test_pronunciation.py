"""
Unit tests for services.pronunciation module.
Tests challenging-word detection, pace boundaries and learning suggestions.
"""
import pytest
from hablaya.services.pronunciation import (
    PACE_SUGGESTIONS,
    analyze_pronunciation,
    generate_learning_suggestions,
)


class TestAnalyzePronunciation:

    def test_challenging_words_are_flagged(self):
        result = analyze_pronunciation("I am running and thinking")

        assert result["suggestions"][0] == "Focus on: running, thinking"
        assert result["clarity"] == "good"

    def test_five_words_is_moderate(self):
        # Boundary: fewer than 5 words is slow, exactly 5 is not
        result = analyze_pronunciation("I am running and thinking")
        assert result["pace"] == "moderate"
        assert result["suggestions"][-1] == PACE_SUGGESTIONS["moderate"]

    def test_four_words_is_slow(self):
        result = analyze_pronunciation("I like big apples")

        assert result["pace"] == "slow"
        assert result["suggestions"] == [PACE_SUGGESTIONS["slow"]]

    def test_fifteen_words_is_moderate(self):
        text = " ".join(["word"] * 15)
        assert analyze_pronunciation(text)["pace"] == "moderate"

    def test_sixteen_words_is_fast(self):
        text = " ".join(["word"] * 16)
        assert analyze_pronunciation(text)["pace"] == "fast"

    def test_at_most_three_focus_words(self):
        result = analyze_pronunciation("The children washed each dish while laughing")

        assert result["suggestions"][0] == "Focus on: the, children, washed"

    def test_case_is_ignored(self):
        result = analyze_pronunciation("THINK about SHIPS please today now")
        assert result["suggestions"][0] == "Focus on: think, ships"

    def test_empty_text(self):
        result = analyze_pronunciation("")
        assert result["pace"] == "slow"
        assert result["suggestions"] == [PACE_SUGGESTIONS["slow"]]


class TestLearningSuggestions:

    def test_short_text_with_to_be(self):
        assert generate_learning_suggestions("I am happy") == [
            "Try expanding your response with more details",
            "Great use of the verb 'to be'!",
        ]

    def test_long_fluent_text(self):
        text = "Yesterday my friends and I went hiking in the mountains near the lake"
        assert generate_learning_suggestions(text) == [
            "Excellent fluency! Keep practicing longer conversations",
        ]

    def test_all_branches_are_independent(self):
        text = "I am sure you are right about it all, yes."  # 10 words, < 50 chars
        assert len(text) < 50
        suggestions = generate_learning_suggestions(text + " ok")
        assert suggestions == [
            "Try expanding your response with more details",
            "Great use of the verb 'to be'!",
            "Excellent fluency! Keep practicing longer conversations",
        ]

    @pytest.mark.parametrize("text", ["i am tired and cold today friends", "You Are great"])
    def test_to_be_match_is_case_sensitive(self, text):
        assert "Great use of the verb 'to be'!" not in generate_learning_suggestions(text)
