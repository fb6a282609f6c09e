"""Thin async wrapper around the Slack Web API calls the bot needs.

Every canvas, file and chat call goes through CanvasStore so that the resolver,
appender and triggers never see a raw SlackApiError from them: each method
translates it into the matching error from ``braindump.errors``. The one
exception is ``fetch_message``: history lookups are not part of the canvas
error taxonomy, so their SlackApiError propagates to the calling trigger.
"""

import logging
from typing import Dict, List, Optional

from slack_sdk.errors import SlackApiError

from ..errors import (
    AppendFailure,
    CreationFailure,
    DeliveryFailure,
    ProbeFailure,
    ShareFailure,
)

logger = logging.getLogger(__name__)


def _markdown_content(markdown: str) -> Dict:
    return {"type": "markdown", "markdown": markdown}


def _error_code(error: SlackApiError) -> str:
    try:
        return error.response.get("error", "unknown_error")
    except AttributeError:
        return "unknown_error"


class CanvasStore:
    """Slack canvas, file and chat operations.

    Usage:
        store = CanvasStore(app.client)
        canvas_id = await store.create_channel_canvas("C123", "Ideas", "# Ideas")
        await store.append_content(canvas_id, "- first idea\\n")
    """

    def __init__(self, slack_client):
        """Initialize the store.

        Args:
            slack_client: slack_sdk AsyncWebClient (e.g. AsyncApp.client)
        """
        self._slack_client = slack_client

    async def probe_exists(self, handle: str) -> None:
        """Confirm a canvas or file still exists.

        Raises:
            ProbeFailure: On any error, including network errors
        """
        try:
            await self._slack_client.files_info(file=handle)
        except Exception as e:
            raise ProbeFailure(f"Canvas {handle} could not be found: {e}") from e
        logger.debug(f"Canvas {handle} still exists")

    async def create_channel_canvas(self, channel_id: str, title: str, markdown: str) -> str:
        """Create a canvas attached to a channel.

        Returns:
            The new canvas ID

        Raises:
            CreationFailure: If Slack rejects the request
        """
        try:
            result = await self._slack_client.conversations_canvases_create(
                channel_id=channel_id,
                title=title,
                document_content=_markdown_content(markdown),
            )
        except SlackApiError as e:
            raise CreationFailure(
                f"Channel canvas creation failed: {_error_code(e)}", tier="channel"
            ) from e
        return result["canvas_id"]

    async def find_channel_canvas(self, channel_id: str) -> Optional[str]:
        """Look up the canvas already attached to a channel.

        Returns:
            Canvas ID, or None if the channel has no canvas

        Raises:
            CreationFailure: If the channel info could not be read
        """
        try:
            info = await self._slack_client.conversations_info(channel=channel_id)
        except SlackApiError as e:
            raise CreationFailure(
                f"Could not read channel {channel_id}: {_error_code(e)}", tier="channel"
            ) from e
        return info.get("channel", {}).get("properties", {}).get("canvas", {}).get("id")

    async def create_standalone_canvas(self, title: str, markdown: str) -> str:
        """Create a canvas that is not attached to any channel.

        Raises:
            CreationFailure: If Slack rejects the request
        """
        try:
            result = await self._slack_client.canvases_create(
                title=title,
                document_content=_markdown_content(markdown),
            )
        except SlackApiError as e:
            raise CreationFailure(
                f"Standalone canvas creation failed: {_error_code(e)}", tier="standalone"
            ) from e
        return result["canvas_id"]

    async def set_access(self, handle: str, access_level: str, channel_ids: List[str]) -> None:
        """Grant channels access to a canvas.

        Raises:
            ShareFailure: If Slack rejects the request
        """
        try:
            await self._slack_client.canvases_access_set(
                canvas_id=handle,
                access_level=access_level,
                channel_ids=channel_ids,
            )
        except SlackApiError as e:
            raise ShareFailure(f"Could not share canvas {handle}: {_error_code(e)}") from e

    async def append_content(self, handle: str, fragment: str) -> None:
        """Insert a markdown fragment at the end of a canvas.

        Raises:
            AppendFailure: If Slack rejects the edit
        """
        try:
            await self._slack_client.canvases_edit(
                canvas_id=handle,
                changes=[
                    {
                        "operation": "insert_at_end",
                        "document_content": _markdown_content(fragment),
                    }
                ],
            )
        except SlackApiError as e:
            raise AppendFailure(f"Could not edit canvas {handle}: {_error_code(e)}") from e

    async def upload_file(self, channel_id: str, content: str, filename: str, title: str) -> str:
        """Upload text content as a file shared to a channel.

        Returns:
            The uploaded file's ID

        Raises:
            CreationFailure: If the upload fails or returns no file
        """
        try:
            result = await self._slack_client.files_upload_v2(
                channel=channel_id,
                content=content,
                filename=filename,
                title=title,
            )
        except SlackApiError as e:
            raise CreationFailure(f"File upload failed: {_error_code(e)}", tier="file") from e

        files = result.get("files") or []
        file_id = files[0].get("id") if files else (result.get("file") or {}).get("id")
        if not file_id:
            raise CreationFailure("File upload returned no file ID", tier="file")
        return file_id

    async def post_message(self, channel_id: str, text: str, blocks: Optional[List[Dict]] = None) -> None:
        """Post a message into a channel.

        Raises:
            DeliveryFailure: If Slack rejects the message
        """
        try:
            await self._slack_client.chat_postMessage(
                channel=channel_id,
                text=text,
                blocks=blocks,
            )
        except SlackApiError as e:
            raise DeliveryFailure(f"Could not post to {channel_id}: {_error_code(e)}") from e

    async def post_ephemeral(self, channel_id: str, user_id: str, text: str) -> None:
        """Post a message only one user can see.

        Raises:
            DeliveryFailure: If Slack rejects the message
        """
        try:
            await self._slack_client.chat_postEphemeral(
                channel=channel_id,
                user=user_id,
                text=text,
            )
        except SlackApiError as e:
            raise DeliveryFailure(
                f"Could not post ephemeral to {user_id} in {channel_id}: {_error_code(e)}"
            ) from e

    async def fetch_message(self, channel_id: str, message_ts: str) -> Optional[Dict]:
        """Fetch a single message by timestamp.

        Returns:
            The message dict, or None if Slack returned no message

        Raises:
            SlackApiError: Untranslated; the reaction trigger handles it
        """
        result = await self._slack_client.conversations_history(
            channel=channel_id,
            latest=message_ts,
            limit=1,
            inclusive=True,
        )
        messages = result.get("messages") or []
        return messages[0] if messages else None
