"""
Unit tests for client.stats module.
"""
from hablaya.client.stats import SessionStats


class TestSessionStats:

    def test_starts_empty(self):
        stats = SessionStats()
        assert stats.messagesSent == 0
        assert stats.wordsPracticed == 0
        assert stats.accuracyScore == 0.0

    def test_record_message_counts_words(self):
        stats = SessionStats()
        stats.record_message("I went to the market", accuracy=1.0)
        stats.record_message("  It was   busy ", accuracy=0.8)

        assert stats.messagesSent == 2
        assert stats.wordsPracticed == 8
        assert abs(stats.accuracyScore - 0.9) < 1e-9

    def test_accuracy_is_clamped(self):
        stats = SessionStats()
        stats.record_message("Hi", accuracy=1.7)
        stats.record_message("Hi", accuracy=-0.5)
        assert stats.accuracyScore == 0.5

    def test_snapshot(self):
        stats = SessionStats()
        stats.record_message("Good morning", accuracy=0.93)

        snapshot = stats.snapshot()
        assert snapshot["messagesSent"] == 1
        assert snapshot["wordsPracticed"] == 2
        assert snapshot["accuracyScore"] == 0.93
        assert snapshot["startTime"] == stats.startTime.isoformat()
