"""Run the bot over Socket Mode.

    $ python -m braindump
"""

import asyncio
import logging

from .bot import BrainDumpBot
from .config import BotConfig


def main() -> None:
    logging.basicConfig(
        level=BotConfig().LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    bot = BrainDumpBot()
    try:
        asyncio.run(bot.start_socket_mode())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Brain Dump Bot stopped")


if __name__ == "__main__":
    main()
