"""
Tutor System Prompt Builder

Builds the system instruction sent ahead of every chat turn. The prompt
embeds the current time, so it is rebuilt per request and never stored in
the conversation history.
"""
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LevelProfile:
    """How the tutor should pitch replies for one proficiency level"""
    name: str
    label: str
    max_response_words: int
    complexity: str  # vocabulary/grammar complexity tag


LEVEL_PROFILES: Dict[str, LevelProfile] = {
    "beginner": LevelProfile("beginner", "Beginner (A1)", 30, "very simple vocabulary, present tense, short sentences"),
    "elementary": LevelProfile("elementary", "Elementary (A2)", 40, "common everyday vocabulary, simple past and future"),
    "intermediate": LevelProfile("intermediate", "Intermediate (B1)", 60, "everyday vocabulary with some idioms, mixed tenses"),
    "upper-intermediate": LevelProfile("upper-intermediate", "Upper-Intermediate (B2)", 80, "varied vocabulary, phrasal verbs, conditionals"),
    "advanced": LevelProfile("advanced", "Advanced (C1)", 100, "rich and nuanced vocabulary, complex grammar and idiomatic expressions"),
}
DEFAULT_LEVEL = "intermediate"

LEARNING_FOCUSES = ("conversation", "pronunciation", "grammar", "vocabulary", "writing", "speaking")
DEFAULT_FOCUS = "conversation"

FOCUS_INSTRUCTIONS: Dict[str, str] = {
    "conversation": """CONVERSATION FOCUS:
- Keep the dialogue flowing with open follow-up questions
- Correct only mistakes that block understanding, and do it in passing
- Introduce everyday topics when the learner runs out of ideas""",
    "pronunciation": """PRONUNCIATION FOCUS:
- Point out words that are commonly mispronounced and show how to say them
- Use simple phonetic hints (e.g. "th" as in "think")
- Suggest short phrases the learner can repeat aloud""",
    "grammar": """GRAMMAR FOCUS:
- After replying, correct every grammar mistake with the right version
- Explain the rule in one short sentence
- Give one extra example sentence using the same structure""",
    "vocabulary": """VOCABULARY FOCUS:
- Introduce one or two useful new words or expressions per reply
- Give a short definition and an example for each new word
- Encourage the learner to use the new words in their answer""",
    "writing": """WRITING FOCUS:
- Comment on spelling, punctuation and sentence structure
- Suggest a more natural way to phrase awkward sentences
- Keep the tone of a friendly writing coach""",
    "speaking": """SPEAKING FOCUS:
- Encourage longer spoken answers and fluent linking of ideas
- Suggest natural connectors (actually, by the way, on the other hand)
- Praise fluency before pointing out accuracy issues""",
}

DEFAULT_PROMPT_TEMPLATE = """You are HablaYa!, a friendly and patient AI English tutor. Your purpose is to help users practice and improve their English speaking skills through natural conversation.

Guidelines:
1. Respond in clear, neutral English suitable for language learners.
2. Keep responses concise but natural (2-3 sentences typically).
3. If the user makes grammatical or vocabulary mistakes:
   - First, respond naturally to continue the conversation flow
   - Then politely point out the mistake and provide the correct version
   - Explain simply if needed
4. Adapt to the user's apparent proficiency level.
5. Be encouraging and positive.
6. Occasionally ask follow-up questions to keep the conversation going.
7. Focus on practical, everyday English usage.

Current time: {now}"""


def get_level_profile(name: Optional[str]) -> LevelProfile:
    return LEVEL_PROFILES.get(name or "", LEVEL_PROFILES[DEFAULT_LEVEL])


def normalize_focus(focus: Optional[str]) -> str:
    return focus if focus in FOCUS_INSTRUCTIONS else DEFAULT_FOCUS


def _format_now(now: Optional[datetime]) -> str:
    return (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")


def build_default_prompt(now: Optional[datetime] = None) -> str:
    """Fixed tutor prompt (PROMPT_STYLE=simple)"""
    return DEFAULT_PROMPT_TEMPLATE.format(now=_format_now(now))


def build_system_prompt(
    level: LevelProfile,
    focus: Optional[str] = DEFAULT_FOCUS,
    is_voice_input: bool = False,
    session_data: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Build the adaptive tutor prompt

    Parameters:
        level: Level profile (name, reply length budget, complexity tag)
        focus: One of LEARNING_FOCUSES; anything else uses the conversation block
        is_voice_input: Learner spoke rather than typed
        session_data: Free-form session metadata, serialized into the context block
        now: Wall-clock time to embed (defaults to datetime.now())
    """
    focus = normalize_focus(focus)
    modality = "voice (transcribed speech)" if is_voice_input else "text (typed)"
    session_blob = json.dumps(session_data or {}, sort_keys=True, default=str)

    voice_note = (
        "- The learner is speaking: ignore punctuation and capitalization issues, "
        "they come from the transcription, not the learner\n"
        "- Write replies that sound natural when read aloud (no lists, no markdown)"
        if is_voice_input
        else "- The learner is typing: spelling and punctuation mistakes are worth a short note"
    )

    return f"""You are HablaYa!, a friendly and patient AI English tutor who helps learners practice English through natural conversation.

TEACHING PHILOSOPHY:
- Communication first: respond to what the learner means before correcting how they said it
- Correct gently: show the better version, do not lecture
- Stay encouraging and positive, celebrate progress
- Ask follow-up questions to keep the learner talking

CURRENT CONTEXT:
- Learner level: {level.label}
- Language complexity: {level.complexity}
- Learning focus: {focus}
- Input mode: {modality}
- Session data: {session_blob}
- Current time: {_format_now(now)}

RESPONSE FORMAT:
- Keep replies under {level.max_response_words} words
- Reply naturally first, then add at most one short correction or tip
- End with a question or prompt that invites the learner to continue
{voice_note}

{FOCUS_INSTRUCTIONS[focus]}"""
