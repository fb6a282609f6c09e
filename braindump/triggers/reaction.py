"""Captures ideas when someone reacts to a message with the idea emoji."""

import logging
from typing import Dict, Optional

from ..canvas import CanvasStore, IdeaAppender
from ..config import IdeaRecord
from .base import ERROR_TEXT, FAILURE_TEXT, BaseTrigger

logger = logging.getLogger(__name__)


class ReactionTrigger(BaseTrigger):
    """Handles ``reaction_added`` events.

    Flow:
    1. Ignore every reaction except the configured emoji
    2. Fetch the reacted-to message
    3. Skip missing, short, user-less and bot-authored messages
    4. Append the message text as an idea
    5. Tell the reacting user (ephemeral) whether it worked
    """

    def __init__(
        self,
        store: CanvasStore,
        appender: IdeaAppender,
        reaction: str = "bulb",
        min_length: int = 10,
        preview_length: int = 50,
    ):
        """Initialize reaction trigger.

        Args:
            store: CanvasStore for history lookups and ephemeral messages
            appender: IdeaAppender that writes ideas to the canvas
            reaction: Emoji name that captures a message (default: "bulb")
            min_length: Shortest message text worth capturing (default: 10)
            preview_length: Characters of the idea echoed in confirmations (default: 50)
        """
        super().__init__(store=store, appender=appender, preview_length=preview_length)
        self.reaction = reaction
        self.min_length = min_length

    def _should_capture(self, message: Optional[Dict]) -> bool:
        """Decide whether a fetched message is worth capturing.

        Args:
            message: Message dict from conversations.history, or None

        Returns:
            True if the message exists, has a human author and is long enough
        """
        if not message:
            logger.warning("Could not retrieve original message")
            return False

        # Skip messages from bots (including ourselves)
        if message.get("bot_id"):
            return False

        # Skip system messages without a user
        if not message.get("user"):
            return False

        text = (message.get("text") or "").strip()
        return len(text) >= self.min_length

    async def handle(self, event: dict) -> bool:
        """Process a reaction_added event.

        Args:
            event: Slack reaction_added event dict

        Returns:
            True if an idea was appended to the canvas
        """
        if event.get("reaction") != self.reaction:
            return False

        item = event.get("item", {})
        channel_id = item.get("channel")
        message_ts = item.get("ts")
        reactor = event.get("user")

        try:
            logger.info(f"Idea reaction detected by {reactor} on message {message_ts}")

            message = await self.store.fetch_message(channel_id, message_ts)
            if not self._should_capture(message):
                return False

            record = IdeaRecord(
                text=message["text"],
                author=message["user"],
                source_channel=channel_id,
                captured_at=message_ts,
            )
            success = await self.appender.append(channel_id, record)

            text = self._confirmation_text(record) if success else FAILURE_TEXT
            await self._acknowledge(channel_id, reactor, text)
            return success

        except Exception as e:
            logger.error(f"Error handling reaction_added event: {e}", exc_info=True)
            if channel_id and reactor:
                await self._acknowledge(channel_id, reactor, ERROR_TEXT)
            return False
