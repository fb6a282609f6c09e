"""Trigger modules that turn Slack events into captured ideas.

This package contains:
- BaseTrigger: Shared acknowledgment helpers
- ReactionTrigger: Capture a message by reacting with the idea emoji
- BrainDumpCommand, CanvasCommand, TestCanvasCommand: Slash commands
- CaptureIdeaFunction: The capture_idea custom workflow function
"""

from .base import BaseTrigger
from .command import BrainDumpCommand, CanvasCommand, TestCanvasCommand
from .function import FUNCTION_CALLBACK_ID, CaptureIdeaFunction
from .reaction import ReactionTrigger

__all__ = [
    "BaseTrigger",
    "ReactionTrigger",
    "BrainDumpCommand",
    "CanvasCommand",
    "TestCanvasCommand",
    "CaptureIdeaFunction",
    "FUNCTION_CALLBACK_ID",
]
