"""Find-or-create logic for the brain dump canvas.

The resolver owns the one piece of process-wide state the bot has: the ID of
the canvas ideas are appended to. Lifecycle of ``canvas_id``:

- None at startup
- set by the first successful channel or standalone canvas tier
- cleared when the existence probe fails, so the next resolve recreates it

Nothing is persisted; after a restart the canvas is resolved again.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Tuple

from ..errors import BrainDumpError, CreationFailure, ProbeFailure, ResolutionError
from ..outcome import Outcome
from ..utils import (
    announcement_text,
    build_canvas_markdown,
    build_canvas_title,
    create_announcement_blocks,
)
from .store import CanvasStore

logger = logging.getLogger(__name__)

TierStrategy = Callable[[str], Awaitable[Outcome]]

FILE_TITLE = "🧠 Team Brain Dump"


class CanvasResolver:
    """Resolves the brain dump canvas for a channel.

    Tiers are tried in order and the first success wins:

    1. channel canvas (adopting the channel's existing canvas if it has one)
    2. standalone canvas shared read-only with the channel
    3. plain markdown file uploaded to the channel

    The file from tier 3 is returned but not cached.

    Tier 1 does not always fall through to tier 2. When channel canvas
    creation fails with ``channel_canvas_already_exists`` (typically after a
    restart emptied the cache), the channel's existing canvas is adopted and
    returned without an announcement. Tier 2 only runs if that lookup finds
    nothing.

    Example:
        resolver = CanvasResolver(CanvasStore(app.client))
        canvas_id = await resolver.resolve("C123ABC456")
    """

    def __init__(
        self,
        store: CanvasStore,
        title_prefix: str = "🧠 Team Brain Dump",
        reaction: str = "bulb",
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the resolver.

        Args:
            store: CanvasStore used for every Slack call
            title_prefix: Canvas title; the current year is appended
            reaction: Emoji name mentioned in the announcement message
            clock: Returns the current time (title year, upload filename)
        """
        self.store = store
        self.title_prefix = title_prefix
        self.reaction = reaction
        self.clock = clock
        self.canvas_id: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def tiers(self) -> List[Tuple[str, TierStrategy]]:
        """Acquisition strategies in the order they are attempted."""
        return [
            ("channel", self._create_channel_canvas),
            ("standalone", self._create_standalone_canvas),
            ("file", self._upload_canvas_file),
        ]

    def clear(self) -> None:
        """Forget the cached canvas."""
        self.canvas_id = None

    async def resolve(self, channel_id: str) -> str:
        """Return the canvas ID for a channel, creating the canvas if needed.

        Resolution is serialized per resolver so concurrent first captures
        create a single canvas; a waiting task re-probes the canvas the first
        one cached.

        Args:
            channel_id: Channel the canvas belongs to (and is announced in)

        Returns:
            Canvas ID (or uploaded file ID when only the file tier worked)

        Raises:
            ResolutionError: If every tier fails; ``original`` is the first tier's error
        """
        async with self._lock:
            if self.canvas_id:
                try:
                    await self.store.probe_exists(self.canvas_id)
                    logger.info(f"Using existing canvas: {self.canvas_id}")
                    return self.canvas_id
                except ProbeFailure as e:
                    logger.warning(f"Canvas no longer exists, creating new one ({e})")
                    self.clear()

            first_error: Optional[BaseException] = None
            for name, strategy in self.tiers:
                outcome = await self._run_tier(name, strategy, channel_id)
                for advisory in outcome.advisories:
                    logger.warning(f"Canvas tier '{name}' advisory: {advisory}")
                if outcome.ok:
                    return outcome.value
                if first_error is None:
                    first_error = outcome.error

            logger.error(f"All canvas acquisition tiers failed for channel {channel_id}")
            raise ResolutionError(
                f"Could not create a brain dump canvas: {first_error}",
                original=first_error,
            ) from first_error

    async def _run_tier(self, name: str, strategy: TierStrategy, channel_id: str) -> Outcome:
        logger.info(f"Trying canvas tier '{name}' for channel {channel_id}")
        try:
            outcome = await strategy(channel_id)
        except Exception as e:
            outcome = Outcome.failure(e)
        if not outcome.ok:
            logger.error(f"Canvas tier '{name}' failed: {outcome.error}")
        return outcome

    def _title(self) -> str:
        return build_canvas_title(self.title_prefix, self.clock().year)

    async def _announce(self, channel_id: str, canvas_id: str) -> None:
        await self.store.post_message(
            channel_id,
            text=announcement_text(self.reaction),
            blocks=create_announcement_blocks(canvas_id, self.reaction),
        )

    async def _create_channel_canvas(self, channel_id: str) -> Outcome:
        """Tier 1: canvas attached to the channel, then announce it."""
        try:
            canvas_id = await self.store.create_channel_canvas(
                channel_id, self._title(), build_canvas_markdown()
            )
        except CreationFailure as e:
            if e.slack_error != "channel_canvas_already_exists":
                return Outcome.failure(e)
            # Channel already has a canvas (e.g. from before a restart); adopt it
            try:
                existing = await self.store.find_channel_canvas(channel_id)
            except CreationFailure:
                existing = None
            if not existing:
                return Outcome.failure(e)
            logger.info(f"Found existing channel canvas: {existing}")
            self.canvas_id = existing
            return Outcome.success(existing)

        logger.info(f"Channel canvas created: {canvas_id}")
        try:
            await self._announce(channel_id, canvas_id)
        except BrainDumpError as e:
            return Outcome.failure(e)

        self.canvas_id = canvas_id
        return Outcome.success(canvas_id)

    async def _create_standalone_canvas(self, channel_id: str) -> Outcome:
        """Tier 2: standalone canvas, shared read-only with the channel."""
        try:
            canvas_id = await self.store.create_standalone_canvas(self._title(), build_canvas_markdown())
        except CreationFailure as e:
            return Outcome.failure(e)
        logger.info(f"Standalone canvas created: {canvas_id}")

        advisories = []
        try:
            await self.store.set_access(canvas_id, "read", [channel_id])
            logger.info(f"Canvas {canvas_id} shared with channel {channel_id}")
        except BrainDumpError as e:
            advisories.append(e)

        try:
            await self._announce(channel_id, canvas_id)
        except BrainDumpError as e:
            return Outcome.failure(e, advisories=advisories)

        self.canvas_id = canvas_id
        return Outcome.success(canvas_id, advisories=advisories)

    async def _upload_canvas_file(self, channel_id: str) -> Outcome:
        """Tier 3: plain markdown file in the channel. Not cached."""
        filename = f"brain-dump-{int(self.clock().timestamp() * 1000)}.md"
        try:
            file_id = await self.store.upload_file(
                channel_id,
                content=build_canvas_markdown(include_placeholder=False),
                filename=filename,
                title=FILE_TITLE,
            )
        except CreationFailure as e:
            return Outcome.failure(e)
        logger.info(f"Fallback file created: {file_id}")
        return Outcome.success(file_id)
