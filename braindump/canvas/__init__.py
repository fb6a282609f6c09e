"""Canvas acquisition and idea appending.

This package contains:
- CanvasStore: Slack Web API calls, translated into braindump errors
- CanvasResolver: Find-or-create the canvas with cascading fallback tiers
- IdeaAppender: Format ideas and insert them at the end of the canvas
"""

from .appender import IdeaAppender
from .resolver import CanvasResolver
from .store import CanvasStore

__all__ = ["CanvasStore", "CanvasResolver", "IdeaAppender"]
