import datetime as dt
from dataclasses import dataclass, field


@dataclass
class SessionStats:
    """Per-page-load practice statistics; only ever increases"""
    startTime: dt.datetime = field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))
    wordsPracticed: int = 0
    messagesSent: int = 0
    runningAccuracySum: float = 0.0

    @property
    def accuracyScore(self) -> float:
        if not self.messagesSent:
            return 0.0
        return self.runningAccuracySum / self.messagesSent

    def record_message(self, text: str, accuracy: float) -> None:
        """Count one outbound user message"""
        self.wordsPracticed += len(text.split())
        self.messagesSent += 1
        self.runningAccuracySum += max(0.0, min(1.0, accuracy))

    def snapshot(self) -> dict:
        return {
            "startTime": self.startTime.isoformat(),
            "wordsPracticed": self.wordsPracticed,
            "messagesSent": self.messagesSent,
            "accuracyScore": round(self.accuracyScore, 4),
        }
