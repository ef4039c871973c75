"""
HablaYa! English conversation tutor.

- hablaya.main: FastAPI relays (chat / speak / transcribe / health)
- hablaya.client: session controller used by the front end
"""
