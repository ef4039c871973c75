"""
Proficiency Level Detection

Estimates a coarse learner level from a single utterance using surface
features only (long/derived words, sentence length, modal-perfect and
subjunctive constructions). Pure and deterministic.
"""
import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Union

INTERMEDIATE = "intermediate"
UPPER_INTERMEDIATE = "upper-intermediate"
ADVANCED = "advanced"

ADVANCED_THRESHOLD = 25
UPPER_INTERMEDIATE_THRESHOLD = 15

_COMPLEX_SUFFIX = re.compile(r"^\w{3,}(ing|ed|ly)$")
_SENTENCE_SPLIT = re.compile(r"[.!?]")
_TOKEN_STRIP = ".,!?;:\"'()[]"

_COMPLEX_GRAMMAR = (
    re.compile(r"\bif\b.*\bwould\b"),
    re.compile(r"\bhad\b.*\bwould\b"),
    re.compile(r"\bmight have\b"),
    re.compile(r"\bcould have\b"),
    re.compile(r"\bshould have\b"),
)
_SUBJUNCTIVE = (
    re.compile(r"\bwere to\b"),
    re.compile(r"\bif\b.*\bwere\b"),
)


@dataclass(frozen=True)
class UtteranceScore:
    complex_words: int
    mean_sentence_length: float
    has_complex_grammar: bool
    has_subjunctive: bool

    @property
    def total(self) -> float:
        return (
            2 * self.complex_words
            + 0.5 * self.mean_sentence_length
            + 10 * int(self.has_complex_grammar)
            + 15 * int(self.has_subjunctive)
        )


def _is_complex(token: str) -> bool:
    word = token.strip(_TOKEN_STRIP).lower()
    return len(word) > 8 or bool(_COMPLEX_SUFFIX.match(word))


def score_utterance(utterance: str) -> UtteranceScore:
    tokens = utterance.split()
    sentences = [s for s in _SENTENCE_SPLIT.split(utterance) if s.strip()]
    mean_length = len(tokens) / len(sentences) if sentences else 0.0
    lowered = utterance.lower()
    return UtteranceScore(
        complex_words=sum(1 for t in tokens if _is_complex(t)),
        mean_sentence_length=mean_length,
        has_complex_grammar=any(p.search(lowered) for p in _COMPLEX_GRAMMAR),
        has_subjunctive=any(p.search(lowered) for p in _SUBJUNCTIVE),
    )


def level_for_score(score: float) -> str:
    if score >= ADVANCED_THRESHOLD:
        return ADVANCED
    if score >= UPPER_INTERMEDIATE_THRESHOLD:
        return UPPER_INTERMEDIATE
    return INTERMEDIATE


def detect_level(utterance: Optional[str]) -> Optional[str]:
    """
    Map an utterance to intermediate / upper-intermediate / advanced.

    Returns None when there is nothing to judge (no or blank utterance).
    """
    if not utterance or not utterance.strip():
        return None
    return level_for_score(score_utterance(utterance).total)


def detect_level_from_messages(messages: Iterable[Union[Mapping, object]]) -> Optional[str]:
    """Run detect_level on the most recent user message (dicts or objects with role/content)"""
    last_user = None
    for msg in messages:
        if isinstance(msg, Mapping):
            role, content = msg.get("role"), msg.get("content")
        else:
            role, content = getattr(msg, "role", None), getattr(msg, "content", None)
        if role == "user":
            last_user = content
    return detect_level(last_user)
