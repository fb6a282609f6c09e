"""Appends captured ideas to the brain dump canvas."""

import logging
from datetime import datetime
from typing import Callable

from ..config import IdeaRecord
from ..utils import format_idea_entry, format_idea_timestamp
from .resolver import CanvasResolver
from .store import CanvasStore

logger = logging.getLogger(__name__)


class IdeaAppender:
    """Formats an IdeaRecord and inserts it at the end of the canvas.

    Appending is not idempotent: the same record appended twice shows up twice.

    Flow:
    1. Resolve the canvas for the channel (creating it if needed)
    2. Render the record as a markdown fragment
    3. Insert the fragment at the end of the canvas
    """

    def __init__(
        self,
        store: CanvasStore,
        resolver: CanvasResolver,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the appender.

        Args:
            store: CanvasStore used for the canvas edit
            resolver: CanvasResolver that provides the canvas ID
            clock: Returns the capture time shown in each entry
        """
        self.store = store
        self.resolver = resolver
        self.clock = clock

    def format_idea(self, record: IdeaRecord) -> str:
        """Render a record as the markdown fragment appended to the canvas."""
        return format_idea_entry(
            text=record.text,
            author=record.author,
            channel_id=record.source_channel,
            timestamp=format_idea_timestamp(self.clock()),
        )

    async def append(self, channel_id: str, record: IdeaRecord) -> bool:
        """Append an idea to the channel's canvas.

        Never raises: resolution and edit failures are logged and reported
        as False. Nothing is retried.

        Args:
            channel_id: Channel whose canvas receives the idea
            record: The idea to append

        Returns:
            True if the idea was appended
        """
        try:
            canvas_id = await self.resolver.resolve(channel_id)
            fragment = self.format_idea(record)
            await self.store.append_content(canvas_id, fragment)
        except Exception as e:
            logger.error(f"Error adding idea to canvas: {e}", exc_info=True)
            return False

        logger.info(f"Idea from {record.author} added to canvas {canvas_id}")
        return True
