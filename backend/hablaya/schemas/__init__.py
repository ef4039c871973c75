# hablaya/schemas/__init__.py
"""
Schema module initialization.
Exports all schema classes from submodules for convenient imports.
"""
from .chat import *
from .speech import *
from .transcription import *
