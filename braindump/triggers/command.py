"""Slash command triggers: /braindump, /canvas and /testcanvas."""

import logging
from typing import Awaitable, Callable

from ..canvas import CanvasStore, IdeaAppender
from ..config import IdeaRecord
from ..errors import BrainDumpError, CreationFailure
from ..utils import (
    canvas_url,
    create_canvas_link_blocks,
    create_error_blocks,
    create_test_canvas_blocks,
)
from .base import ERROR_TEXT, FAILURE_TEXT, BaseTrigger

logger = logging.getLogger(__name__)

USAGE_TEXT = "Please provide an idea! Usage: `/braindump Your brilliant idea here`"
CANVAS_ERROR_TEXT = "❌ Error accessing canvas. Please try again."

Respond = Callable[..., Awaitable]


class BrainDumpCommand(BaseTrigger):
    """Handles ``/braindump <idea>``: the command text becomes the idea."""

    async def handle(self, command: dict, respond: Respond) -> bool:
        """Process a /braindump invocation.

        The command must already be acknowledged; every reply is ephemeral.

        Args:
            command: Slack slash command payload
            respond: slack_bolt respond utility

        Returns:
            True if an idea was appended to the canvas
        """
        try:
            idea_text = (command.get("text") or "").strip()
            if not idea_text:
                await self._reply(respond, text=USAGE_TEXT)
                return False

            record = IdeaRecord(
                text=idea_text,
                author=command["user_id"],
                source_channel=command["channel_id"],
            )
            success = await self.appender.append(record.source_channel, record)

            text = self._confirmation_text(record) if success else FAILURE_TEXT
            await self._reply(respond, text=text)
            return success

        except Exception as e:
            logger.error(f"Error handling /braindump command: {e}", exc_info=True)
            await self._reply(respond, text=ERROR_TEXT)
            return False


class CanvasCommand(BaseTrigger):
    """Handles ``/canvas``: replies with a button that opens the canvas."""

    async def handle(self, command: dict, respond: Respond) -> bool:
        try:
            canvas_id = await self.appender.resolver.resolve(command["channel_id"])
        except Exception as e:
            logger.error(f"Error handling /canvas command: {e}", exc_info=True)
            await self._reply(respond, text=CANVAS_ERROR_TEXT)
            return False

        await self._reply(
            respond,
            text=f"🧠 Brain Dump Canvas: {canvas_url(canvas_id)}",
            blocks=create_canvas_link_blocks(canvas_id),
        )
        return True


class TestCanvasCommand(BaseTrigger):
    """Handles ``/testcanvas``: checks that the bot can create canvases at all.

    Creates a throw-away canvas (channel canvas first, standalone canvas as
    fallback) and reports its ID and type. The brain dump canvas cache is
    left untouched.
    """

    __test__ = False  # not a pytest test class

    async def handle(self, command: dict, respond: Respond) -> bool:
        channel_id = command["channel_id"]
        logger.info("Testing canvas creation...")

        try:
            canvas_type = "channel"
            try:
                canvas_id = await self.store.create_channel_canvas(
                    channel_id,
                    "Test Channel Canvas",
                    "# Test Channel Canvas\n\n"
                    "This is a test channel canvas that should be visible to all channel members!",
                )
            except CreationFailure as channel_error:
                logger.warning(f"Channel canvas failed, trying standalone: {channel_error}")
                canvas_type = "standalone"
                canvas_id = await self.store.create_standalone_canvas(
                    "Test Standalone Canvas",
                    "# Test Standalone Canvas\n\nThis is a test standalone canvas!",
                )
                try:
                    await self.store.set_access(canvas_id, "read", [channel_id])
                except BrainDumpError as share_error:
                    logger.warning(f"Could not share test canvas: {share_error}")

        except Exception as e:
            logger.error(f"Canvas test failed: {e}", exc_info=True)
            await self._reply(
                respond,
                text="❌ Canvas creation failed!",
                blocks=create_error_blocks("Canvas Creation Failed", str(e)),
            )
            return False

        logger.info(f"Test canvas created: {canvas_id} ({canvas_type})")
        await self._reply(
            respond,
            text=(
                f"✅ Canvas creation works! Canvas ID: {canvas_id}\n\n"
                f"Canvas type: {canvas_type}\nDirect link: {canvas_url(canvas_id)}"
            ),
            blocks=create_test_canvas_blocks(canvas_id, canvas_type),
        )
        return True
