"""
Session view interface: everything the controller wants shown to the learner.
"""
from typing import Any


class SessionView:
    """No-op base; front ends override what they render"""

    def add_message(self, role: str, content: str) -> None:
        pass

    def add_system_message(self, content: str) -> None:
        pass

    def show_typing(self) -> None:
        pass

    def hide_typing(self) -> None:
        pass

    def show_feedback(self, transcription: Any) -> None:
        """Pronunciation analysis / learning suggestions for a voice turn"""
        pass

    def on_state_change(self, state: str) -> None:
        pass

    def apply_theme(self, theme: str) -> None:
        pass
