"""Main BrainDumpBot class that wires everything together.

This is the primary interface users interact with. It creates the Slack app,
registers the idea capture listeners and exposes both a FastAPI app (HTTP
event delivery) and a Socket Mode runner.
"""

import logging
import re
from typing import Optional

from fastapi import FastAPI, Request
from pydantic import SecretStr
from slack_bolt.adapter.fastapi.async_handler import AsyncSlackRequestHandler
from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.async_app import AsyncApp

from .canvas import CanvasResolver, CanvasStore, IdeaAppender
from .config import BotConfig
from .triggers import (
    FUNCTION_CALLBACK_ID,
    BrainDumpCommand,
    CanvasCommand,
    CaptureIdeaFunction,
    ReactionTrigger,
    TestCanvasCommand,
)

logger = logging.getLogger(__name__)


class BrainDumpBot:
    """Slack bot that collects ideas into a shared canvas.

    Ideas come in three ways:
    - reacting to a message with the idea emoji (default :bulb:)
    - the ``/braindump <idea>`` slash command
    - the ``capture_idea`` custom workflow function

    Example:
        bot = BrainDumpBot()
        app = bot.app  # Serve with any ASGI server for HTTP events

        # or, with SLACK_APP_TOKEN set:
        await bot.start_socket_mode()
    """

    def __init__(
        self,
        slack_bot_token: Optional[str] = None,
        slack_signing_secret: Optional[str] = None,
        slack_app_token: Optional[str] = None,
        idea_reaction: Optional[str] = None,
        min_idea_length: Optional[int] = None,
        canvas_title: Optional[str] = None,
    ):
        """Initialize BrainDumpBot.

        Args:
            slack_bot_token: Override Slack bot token (or from env: SLACK_BOT_TOKEN)
            slack_signing_secret: Override Slack signing secret (or from env: SLACK_SIGNING_SECRET)
            slack_app_token: Override Slack app-level token (or from env: SLACK_APP_TOKEN)
            idea_reaction: Emoji name that captures ideas (or from env: IDEA_REACTION)
            min_idea_length: Shortest message captured by reaction (or from env: MIN_IDEA_LENGTH)
            canvas_title: Canvas title prefix (or from env: CANVAS_TITLE)
        """
        logger.info("Initializing BrainDumpBot...")

        # Load configuration (from env + overrides)
        self.config = self._load_config(
            slack_bot_token=slack_bot_token,
            slack_signing_secret=slack_signing_secret,
            slack_app_token=slack_app_token,
            idea_reaction=idea_reaction,
            min_idea_length=min_idea_length,
            canvas_title=canvas_title,
        )

        # Initialize Slack app
        self.slack_app = AsyncApp(
            token=self.config.get_slack_bot_token(),
            signing_secret=self.config.get_slack_signing_secret(),
        )
        logger.info("Slack app initialized")

        # Canvas core: one store, one resolver (holds the cached canvas ID)
        self.store = CanvasStore(self.slack_app.client)
        self.resolver = CanvasResolver(
            self.store,
            title_prefix=self.config.CANVAS_TITLE,
            reaction=self.config.IDEA_REACTION,
        )
        self.appender = IdeaAppender(self.store, self.resolver)

        # Triggers
        preview_length = self.config.PREVIEW_LENGTH
        self.reaction_trigger = ReactionTrigger(
            self.store,
            self.appender,
            reaction=self.config.IDEA_REACTION,
            min_length=self.config.MIN_IDEA_LENGTH,
            preview_length=preview_length,
        )
        self.braindump_command = BrainDumpCommand(self.store, self.appender, preview_length=preview_length)
        self.canvas_command = CanvasCommand(self.store, self.appender, preview_length=preview_length)
        self.test_canvas_command = TestCanvasCommand(self.store, self.appender, preview_length=preview_length)
        self.capture_function = CaptureIdeaFunction(self.store, self.appender, preview_length=preview_length)

        # Setup Slack event handlers
        self._setup_slack_handlers()

        # Create FastAPI app
        self._app = self._create_fastapi_app()

        logger.info("BrainDumpBot initialization complete")

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI app instance.

        Example:
            # server.py
            bot = BrainDumpBot()
            app = bot.app  # uvicorn server:app

        Returns:
            FastAPI app instance
        """
        return self._app

    def _load_config(
        self,
        slack_bot_token: Optional[str],
        slack_signing_secret: Optional[str],
        slack_app_token: Optional[str],
        idea_reaction: Optional[str],
        min_idea_length: Optional[int],
        canvas_title: Optional[str],
    ) -> BotConfig:
        """Load configuration from env with optional overrides.

        Returns:
            BotConfig instance

        Raises:
            ValidationError: If required config is missing
        """
        # Start with env vars
        config = BotConfig()

        # Apply overrides if provided
        if slack_bot_token is not None:
            config.SLACK_BOT_TOKEN = SecretStr(slack_bot_token)
        if slack_signing_secret is not None:
            config.SLACK_SIGNING_SECRET = SecretStr(slack_signing_secret)
        if slack_app_token is not None:
            config.SLACK_APP_TOKEN = SecretStr(slack_app_token)
        if idea_reaction is not None:
            config.IDEA_REACTION = idea_reaction.strip().strip(":")
        if min_idea_length is not None:
            if min_idea_length < 1:
                raise ValueError(f"min_idea_length must be at least 1, got {min_idea_length}")
            config.MIN_IDEA_LENGTH = min_idea_length
        if canvas_title is not None:
            config.CANVAS_TITLE = canvas_title

        return config

    def _create_fastapi_app(self) -> FastAPI:
        """Create FastAPI app with Slack routes.

        Returns:
            FastAPI app instance with /events/slack endpoint
        """
        app = FastAPI(title="braindump")

        # Create Slack request handler
        handler = AsyncSlackRequestHandler(self.slack_app)

        @app.post("/events/slack")
        async def slack_events_endpoint(request: Request):
            """Handle Slack events, commands, actions and function executions."""
            return await handler.handle(request)

        return app

    async def start_socket_mode(self) -> None:
        """Connect over Socket Mode and serve until cancelled.

        Raises:
            ValueError: If SLACK_APP_TOKEN is not configured
        """
        app_token = self.config.get_slack_app_token()
        if not app_token:
            raise ValueError("SLACK_APP_TOKEN is required for Socket Mode")

        handler = AsyncSocketModeHandler(self.slack_app, app_token)
        logger.info("⚡️ Brain Dump Bot is running!")
        logger.info(f"💡 Add :{self.config.IDEA_REACTION}: reactions to messages to capture ideas")
        logger.info("📝 Use /braindump to manually add ideas")
        logger.info("📄 Use /canvas to view the brain dump canvas")
        await handler.start_async()

    def _setup_slack_handlers(self) -> None:
        """Setup Slack listeners.

        Registers handlers for:
        - reaction_added events
        - /braindump, /canvas and /testcanvas commands
        - the capture_idea custom function
        - every block action (link buttons only need an ack)
        """

        @self.slack_app.event("reaction_added")
        async def handle_reaction_added(event: dict, ack):
            """Capture the reacted-to message as an idea."""
            await ack()
            await self.reaction_trigger.handle(event)

        @self.slack_app.command("/braindump")
        async def handle_braindump_command(ack, command: dict, respond):
            """Capture the command text as an idea."""
            await ack()  # Acknowledge within 3 seconds, reply via respond
            await self.braindump_command.handle(command, respond)

        @self.slack_app.command("/canvas")
        async def handle_canvas_command(ack, command: dict, respond):
            """Reply with a link to the brain dump canvas."""
            await ack()
            await self.canvas_command.handle(command, respond)

        @self.slack_app.command("/testcanvas")
        async def handle_test_canvas_command(ack, command: dict, respond):
            """Check that canvases can be created in this channel."""
            await ack()
            await self.test_canvas_command.handle(command, respond)

        @self.slack_app.function(FUNCTION_CALLBACK_ID)
        async def handle_capture_idea(inputs: dict, complete, fail):
            """Capture an idea passed in by a workflow step."""
            await self.capture_function.handle(inputs, complete, fail)

        @self.slack_app.action(re.compile(".*"))
        async def handle_any_action(ack):
            """Acknowledge button clicks so Slack does not show a timeout."""
            await ack()

        logger.info("Slack event handlers registered")
