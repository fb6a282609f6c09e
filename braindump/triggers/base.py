"""Base trigger class with functionality shared by every entry point.

Reaction, command and function triggers all build an IdeaRecord, hand it to
the IdeaAppender and then send a best-effort acknowledgment. The
acknowledgment helpers live here so each trigger treats their failures the
same way: as advisories that are logged and returned, never raised.
"""

import logging
from typing import Awaitable, Callable

from ..canvas import CanvasStore, IdeaAppender
from ..config import IdeaRecord
from ..outcome import Outcome

logger = logging.getLogger(__name__)

FAILURE_TEXT = "❌ Failed to capture idea. Please try again."
ERROR_TEXT = "❌ Error capturing idea. Please try again."


class BaseTrigger:
    """Base class for idea capture triggers."""

    def __init__(
        self,
        store: CanvasStore,
        appender: IdeaAppender,
        preview_length: int = 50,
    ):
        """Initialize base trigger.

        Args:
            store: CanvasStore for Slack calls (ephemeral messages, history)
            appender: IdeaAppender that writes ideas to the canvas
            preview_length: Characters of the idea echoed in confirmations (default: 50)
        """
        self.store = store
        self.appender = appender
        self.preview_length = preview_length

    def _confirmation_text(self, record: IdeaRecord) -> str:
        return f'💡 Idea captured to Brain Dump Canvas! "{record.preview(self.preview_length)}"'

    async def _acknowledge(self, channel_id: str, user_id: str, text: str) -> Outcome:
        """Send an ephemeral message; a failure is returned as an advisory.

        Args:
            channel_id: Channel to post in
            user_id: The only user who will see the message
            text: Message text

        Returns:
            Outcome that is always ok; ``advisories`` holds the delivery error, if any
        """
        try:
            await self.store.post_ephemeral(channel_id, user_id, text)
        except Exception as e:
            logger.warning(f"Acknowledgment not delivered: {e}")
            return Outcome.success(advisories=[e])
        return Outcome.success()

    async def _reply(self, respond: Callable[..., Awaitable], **kwargs) -> Outcome:
        """Reply through a slash command's response_url; failures are advisories.

        Args:
            respond: slack_bolt respond utility
            **kwargs: Passed to respond (text, blocks, ...)

        Returns:
            Outcome that is always ok; ``advisories`` holds the error, if any
        """
        try:
            await respond(response_type="ephemeral", **kwargs)
        except Exception as e:
            logger.warning(f"Ephemeral reply not delivered: {e}")
            return Outcome.success(advisories=[e])
        return Outcome.success()
