"""
Pronunciation & Learning Feedback Heuristics

Text-only annotations attached to every transcription. They look at
the transcript, not the audio, so treat them as hints rather than scores.
"""
from typing import Dict, List

CHALLENGING_DIGRAPHS = ("th", "ch", "sh")
CHALLENGING_ENDINGS = ("ing", "ed")
MAX_FOCUS_WORDS = 3

SLOW_PACE_WORDS = 5    # fewer words than this -> slow
FAST_PACE_WORDS = 15   # more words than this -> fast

PACE_SUGGESTIONS = {
    "slow": "Try speaking a bit faster for more natural flow",
    "moderate": "Nice steady pace, keep it up",
    "fast": "Good pace! Consider adding pauses for clarity",
}

EXPAND_MIN_CHARS = 50
FLUENCY_MIN_WORDS = 10


def _is_challenging(word: str) -> bool:
    return any(d in word for d in CHALLENGING_DIGRAPHS) or word.endswith(CHALLENGING_ENDINGS)


def analyze_pronunciation(text: str) -> Dict:
    """
    Returns:
        {"clarity": "good", "pace": "slow|moderate|fast", "suggestions": [...]}
    """
    words = text.lower().split()
    suggestions: List[str] = []

    challenging = [w for w in words if _is_challenging(w)]
    if challenging:
        suggestions.append(f"Focus on: {', '.join(challenging[:MAX_FOCUS_WORDS])}")

    if len(words) < SLOW_PACE_WORDS:
        pace = "slow"
    elif len(words) > FAST_PACE_WORDS:
        pace = "fast"
    else:
        pace = "moderate"
    suggestions.append(PACE_SUGGESTIONS[pace])

    return {"clarity": "good", "pace": pace, "suggestions": suggestions}


def generate_learning_suggestions(text: str) -> List[str]:
    suggestions = []
    if len(text) < EXPAND_MIN_CHARS:
        suggestions.append("Try expanding your response with more details")
    if "I am" in text or "you are" in text:
        suggestions.append("Great use of the verb 'to be'!")
    if len(text.split()) > FLUENCY_MIN_WORDS:
        suggestions.append("Excellent fluency! Keep practicing longer conversations")
    return suggestions
