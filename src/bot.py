"""Telegram bot implementation."""

import logging

from telegram import BotCommand, Update
from telegram.constants import ParseMode
from telegram.error import BadRequest
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from .commands import (
    Reply,
    get_info_message,
    get_schedule_view,
    get_today_view,
    handle_callback,
)
from .config import Config
from .models import ViewMode
from .session import ReadingSession

logger = logging.getLogger(__name__)


class ReadingPlanBot:
    """Telegram bot for the daily Bible reading plan (one reader)."""

    def __init__(self, config: Config, session: ReadingSession | None = None):
        config.require_telegram()
        self.config = config
        self.session = session or ReadingSession.from_config(config)

    def _is_allowed(self, update: Update) -> bool:
        """Only the configured chat may use the bot, when one is set."""
        if not self.config.telegram_chat_id:
            return True
        chat = update.effective_chat
        if chat is None or str(chat.id) != self.config.telegram_chat_id:
            logger.info(f"Ignoring update from chat {chat.id if chat else 'unknown'}")
            return False
        return True

    async def _post_init(self, app: Application) -> None:
        """Post-initialization: set up commands."""
        commands = [
            BotCommand("today", "📖 Today's reading"),
            BotCommand("schedule", "📅 Reading schedule"),
            BotCommand("theme", "🌙 Switch light/dark mode"),
            BotCommand("info", "ℹ️ About this plan"),
        ]
        await app.bot.set_my_commands(commands)
        logger.info("Bot commands configured")

        if self.config.telegram_chat_id:
            try:
                await app.bot.send_message(
                    chat_id=self.config.telegram_chat_id,
                    text="🤖 Reading plan bot started. Send /today to begin.",
                )
                logger.info("Startup notification sent")
            except Exception as e:
                logger.warning(f"Could not send startup notification: {e}")

    async def _reply(self, update: Update, reply: Reply) -> None:
        if not update.message:
            return
        await update.message.reply_text(
            reply.text,
            parse_mode=ParseMode.HTML,
            reply_markup=reply.keyboard,
            disable_web_page_preview=True,
        )

    async def today_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /start and /today."""
        if not update.message or not self._is_allowed(update):
            return
        logger.info(f"{update.message.text} from chat {update.message.chat_id}")
        await self._reply(update, get_today_view(self.session, self.config.today()))

    async def schedule_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /schedule command."""
        if not update.message or not self._is_allowed(update):
            return
        if self.session.navigation.view_mode is not ViewMode.FULL_SCHEDULE:
            self.session.navigation.toggle_view()
        await self._reply(update, get_schedule_view(self.session))

    async def theme_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /theme command."""
        if not update.message or not self._is_allowed(update):
            return
        await self._reply(update, handle_callback(self.session, "theme"))

    async def info_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /info command."""
        if not update.message or not self._is_allowed(update):
            return
        await update.message.reply_text(
            get_info_message(),
            parse_mode=ParseMode.HTML,
            disable_web_page_preview=True,
        )

    async def button_pressed(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle inline keyboard presses by editing the message in place."""
        query = update.callback_query
        if query is None:
            return
        await query.answer()
        if not self._is_allowed(update) or not query.data:
            return

        reply = handle_callback(self.session, query.data)
        try:
            await query.edit_message_text(
                reply.text,
                parse_mode=ParseMode.HTML,
                reply_markup=reply.keyboard,
                disable_web_page_preview=True,
            )
        except BadRequest as e:
            # Telegram rejects edits that leave the message unchanged
            if "not modified" not in str(e).lower():
                raise
            logger.debug(f"Message unchanged after {query.data}")

    async def unknown_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle unknown commands - silently ignore."""
        if not update.message:
            return
        command = update.message.text.split()[0] if update.message.text else "unknown"
        logger.info(f"Unknown command {command} from chat {update.message.chat_id}")

    async def _error_handler(
        self, update: object, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Log errors caused by updates."""
        logger.error(
            f"Exception while handling an update: {context.error}",
            exc_info=context.error,
        )

    def build_app(self) -> Application:
        """Build the Telegram application."""
        app = (
            Application.builder()
            .token(self.config.telegram_bot_token)
            .post_init(self._post_init)
            .build()
        )

        app.add_handler(CommandHandler(["start", "today"], self.today_command))
        app.add_handler(CommandHandler("schedule", self.schedule_command))
        app.add_handler(CommandHandler("theme", self.theme_command))
        app.add_handler(CommandHandler("info", self.info_command))
        app.add_handler(CallbackQueryHandler(self.button_pressed))
        app.add_handler(MessageHandler(filters.COMMAND, self.unknown_command))

        app.add_error_handler(self._error_handler)

        return app

    def run_polling(self) -> None:
        """Run bot in polling mode."""
        logger.info("Building application...")
        app = self.build_app()
        logger.info("Starting polling...")
        app.run_polling(allowed_updates=Update.ALL_TYPES)
