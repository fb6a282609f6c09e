"""The ``capture_idea`` custom function, callable from Workflow Builder."""

import logging
from typing import Awaitable, Callable

from ..config import IdeaRecord
from .base import BaseTrigger

logger = logging.getLogger(__name__)

FUNCTION_CALLBACK_ID = "capture_idea"


class CaptureIdeaFunction(BaseTrigger):
    """Handles ``capture_idea`` function executions.

    Inputs: message_text, user_id, channel_id and optionally message_ts.
    Outputs: ``{"success": bool}``. Internal errors are reported through
    ``fail`` so the workflow shows a structured failure.
    """

    async def handle(
        self,
        inputs: dict,
        complete: Callable[..., Awaitable],
        fail: Callable[..., Awaitable],
    ) -> bool:
        """Process a function execution.

        Args:
            inputs: Function inputs from the workflow step
            complete: slack_bolt complete utility
            fail: slack_bolt fail utility

        Returns:
            True if an idea was appended to the canvas
        """
        try:
            record = IdeaRecord(
                text=inputs.get("message_text") or "",
                author=inputs["user_id"],
                source_channel=inputs["channel_id"],
                captured_at=inputs.get("message_ts"),
            )
            logger.info(f"Capturing idea from user {record.author} in channel {record.source_channel}")

            success = await self.appender.append(record.source_channel, record)
            if success:
                await self._acknowledge(record.source_channel, record.author, self._confirmation_text(record))

            await complete(outputs={"success": success})
            return success

        except Exception as e:
            logger.error(f"Error in {FUNCTION_CALLBACK_ID} function: {e}", exc_info=True)
            await fail(error=f"Failed to capture idea: {e}")
            return False
