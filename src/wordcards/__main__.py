"""Main entry point for the bot."""
import asyncio
import logging
import signal

from wordcards.app import WordCardsBot
from wordcards.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def main() -> None:
    """Run the bot until SIGINT or SIGTERM."""
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, stop_event.set)

    bot = WordCardsBot()
    try:
        logger.info("Starting bot...")
        await bot.start()
        await stop_event.wait()
        logger.info("Received exit signal, shutting down...")
    finally:
        await bot.stop()


def run() -> None:
    setup_logging("Starting WordCards ...")
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")


if __name__ == "__main__":
    run()
