"""
Unit tests for services.level_detector module.
Tests the proficiency score features, thresholds and message selection.
"""
import pytest
from hablaya.services.level_detector import (
    ADVANCED,
    INTERMEDIATE,
    UPPER_INTERMEDIATE,
    detect_level,
    detect_level_from_messages,
    level_for_score,
    score_utterance,
)


class TestScoreFeatures:
    """Tests for the individual score features."""

    def test_simple_sentence_has_no_complex_features(self):
        score = score_utterance("I like pizza.")

        assert score.complex_words == 0
        assert score.mean_sentence_length == 3
        assert score.has_complex_grammar is False
        assert score.has_subjunctive is False
        assert score.total == 1.5

    def test_long_and_suffixed_words_are_complex(self):
        # "yesterday" is long, "finished" / "quickly" match the suffix rule, "red" has a short stem
        score = score_utterance("I finished quickly yesterday, red car")
        assert score.complex_words == 3

    def test_mean_sentence_length_uses_sentence_count(self):
        score = score_utterance("I like tea. You like coffee! Do we agree?")
        assert score.mean_sentence_length == 3

    @pytest.mark.parametrize("text", [
        "If it rained we would stay home",
        "Had I known, I would have called",
        "She might have missed the bus",
        "We could have won",
        "You should have told me",
    ])
    def test_complex_grammar_patterns(self, text):
        assert score_utterance(text).has_complex_grammar is True

    @pytest.mark.parametrize("text", ["If I were you", "Were he to arrive, were to happen"])
    def test_subjunctive_patterns(self, text):
        assert score_utterance(text).has_subjunctive is True

    def test_patterns_match_case_insensitively(self):
        assert score_utterance("IF I WERE RICH").has_subjunctive is True

    def test_pattern_words_must_be_whole_words(self):
        score = score_utterance("The gift would arrive")
        assert score.has_complex_grammar is False


class TestThresholds:
    """Tests for score-to-level mapping."""

    @pytest.mark.parametrize("score,level", [
        (0, INTERMEDIATE),
        (14.5, INTERMEDIATE),
        (15, UPPER_INTERMEDIATE),
        (24.5, UPPER_INTERMEDIATE),
        (25, ADVANCED),
        (60, ADVANCED),
    ])
    def test_level_for_score(self, score, level):
        assert level_for_score(score) == level

    def test_advanced_utterance(self):
        text = "If I were to travel abroad, I would definitely visit museums."
        assert score_utterance(text).total == 32.5
        assert detect_level(text) == ADVANCED

    def test_upper_intermediate_utterance(self):
        text = "I could have finished the report yesterday."
        assert score_utterance(text).total == 17.5
        assert detect_level(text) == UPPER_INTERMEDIATE

    def test_intermediate_utterance(self):
        assert detect_level("Hello, how are you?") == INTERMEDIATE

    def test_deterministic(self):
        text = "Honestly, I should have prepared more thoroughly for yesterday's interview."
        assert len({detect_level(text) for _ in range(5)}) == 1


class TestNoSignal:
    """Tests for missing utterances."""

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_is_no_signal(self, text):
        assert detect_level(text) is None

    def test_no_user_message(self):
        messages = [{"role": "assistant", "content": "Hi! What would you like to talk about?"}]
        assert detect_level_from_messages(messages) is None

    def test_uses_most_recent_user_message(self):
        messages = [
            {"role": "user", "content": "If I were to travel abroad, I would definitely visit museums."},
            {"role": "assistant", "content": "Which museums?"},
            {"role": "user", "content": "Art ones."},
        ]
        assert detect_level_from_messages(messages) == INTERMEDIATE

    def test_accepts_message_objects(self):
        class Msg:
            def __init__(self, role, content):
                self.role = role
                self.content = content

        messages = [Msg("user", "I could have finished the report yesterday.")]
        assert detect_level_from_messages(messages) == UPPER_INTERMEDIATE
