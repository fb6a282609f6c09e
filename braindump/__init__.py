"""braindump - Capture Slack ideas into a shared canvas.

React to any message with :bulb:, run ``/braindump <idea>`` or call the
``capture_idea`` workflow function, and the idea is appended to the
channel's brain dump canvas. The canvas is created on first use.

Example:
    from braindump import BrainDumpBot

    bot = BrainDumpBot()
    app = bot.app  # FastAPI app for HTTP event delivery
"""

from .bot import BrainDumpBot
from .config import BotConfig, IdeaRecord

# Version is dynamically loaded from package metadata (pyproject.toml)
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("braindump-bot")
except PackageNotFoundError:
    # Fallback for development (package not installed)
    __version__ = "0.0.0.dev"

__all__ = ["BrainDumpBot", "BotConfig", "IdeaRecord"]
