"""Main application class."""
import logging
from typing import Optional

from telegram.ext import Application, CallbackQueryHandler, CommandHandler

from wordcards.bot import (
    handle_callback,
    handle_signin,
    handle_signout,
    handle_signup,
    handle_start,
    show_achievements,
    show_categories,
    show_progress,
)
from wordcards.config import settings
from wordcards.models.base import init_db
from wordcards.monitoring import start_monitoring


class WordCardsBot:
    """Telegram front end for the flashcard trainer."""

    def __init__(self):
        """Initialize the application."""
        self.application: Optional[Application] = None
        self.running = False
        self.logger = logging.getLogger(__name__)

    def build_application(self) -> Application:
        """Create the Telegram application with all handlers registered."""
        application = Application.builder().token(settings.bot.token).build()
        application.add_handler(CommandHandler("start", handle_start))
        application.add_handler(CommandHandler("signup", handle_signup))
        application.add_handler(CommandHandler("signin", handle_signin))
        application.add_handler(CommandHandler("signout", handle_signout))
        application.add_handler(CommandHandler("categories", show_categories))
        application.add_handler(CommandHandler("progress", show_progress))
        application.add_handler(CommandHandler("achievements", show_achievements))
        application.add_handler(CallbackQueryHandler(handle_callback))
        return application

    async def start(self) -> None:
        """Start the application."""
        if self.running:
            return

        try:
            settings.validate_bot()

            init_db()
            self.logger.info("Database initialized")

            if settings.monitoring.enabled:
                start_monitoring(settings.monitoring.port)
                self.logger.info(f"Metrics exposed on port {settings.monitoring.port}")

            self.application = self.build_application()
            self.logger.info("Application created")

            await self.application.initialize()
            await self.application.start()
            await self.application.updater.start_polling()
            self.logger.info("Application started")

            self.running = True

        except Exception as e:
            self.logger.error("Failed to start application: %s", str(e))
            await self.stop()
            raise

    async def stop(self) -> None:
        """Stop the application."""
        if not self.application:
            self.running = False
            return

        try:
            if self.running:
                await self.application.updater.stop()
                await self.application.stop()
            await self.application.shutdown()
            self.logger.info("Application stopped")
        finally:
            self.application = None
            self.running = False
