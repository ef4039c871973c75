"""
Text-only console session against a running backend.

    python -m hablaya.client [base_url]

Commands: /stats, /theme, /level <name>, /focus <name>, /quit
"""
import asyncio
import sys
from pathlib import Path

from .controller import SessionController
from .relay import RelayClient
from .storage import JsonFileStore
from .view import SessionView

PREFS_PATH = Path.home() / ".hablaya" / "preferences.json"


class ConsoleView(SessionView):
    def add_message(self, role: str, content: str) -> None:
        if role == "assistant":
            print(f"\nHablaYa!: {content}\n")

    def add_system_message(self, content: str) -> None:
        print(f"[!] {content}")

    def show_typing(self) -> None:
        print("...", end="", flush=True)

    def hide_typing(self) -> None:
        print("\r   \r", end="", flush=True)


async def run(base_url: str) -> None:
    async with RelayClient(base_url=base_url) as relay:
        session = SessionController(relay, view=ConsoleView(), store=JsonFileStore(PREFS_PATH))
        print("HablaYa! console. Type a message, or /quit to exit.")
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            line = line.strip()
            if line == "/quit":
                break
            if line == "/stats":
                print(session.stats.snapshot())
            elif line == "/theme":
                print(f"theme: {session.toggle_theme()}")
            elif line.startswith("/level "):
                session.update_settings(proficiencyLevel=line.split(" ", 1)[1].strip())
            elif line.startswith("/focus "):
                session.update_settings(learningFocus=line.split(" ", 1)[1].strip())
            elif line:
                await session.submit_text(line)


def main() -> None:
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
    asyncio.run(run(base_url))


if __name__ == "__main__":
    main()
