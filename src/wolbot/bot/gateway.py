"""Telegram messaging gateway.

Turns Telegram updates into engine commands and renders the engine's
replies back as Telegram messages and keyboards.
"""

from __future__ import annotations

import asyncio
import logging

from telegram import (
    Bot,
    BotCommand,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
    Update,
)
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from wolbot.config import Settings
from wolbot.core import (
    ConversationEngine,
    Reply,
    Response,
    parse_callback,
    parse_command,
)
from wolbot.core.commands import BOT_COMMANDS, Command, TextInput
from wolbot.errors import UnauthorizedError

logger = logging.getLogger(__name__)

Markup = InlineKeyboardMarkup | ReplyKeyboardMarkup


def render_markup(reply: Reply) -> Markup | None:
    if reply.keyboard is not None:
        return ReplyKeyboardMarkup(
            [[KeyboardButton(label) for label in row] for row in reply.keyboard],
            resize_keyboard=True,
        )
    if reply.buttons:
        return InlineKeyboardMarkup(
            [
                [
                    InlineKeyboardButton(button.label, callback_data=button.data)
                    for button in row
                ]
                for row in reply.buttons
            ]
        )
    return None


def command_from_text(text: str) -> Command:
    """Parse ``/name[@bot] args`` into a command, falling back to free text."""
    head = text.split(maxsplit=1)[0] if text.strip() else ""
    if head.startswith("/"):
        name = head[1:].split("@", 1)[0]
        command = parse_command(name)
        if command is not None:
            return command
    return TextInput(text)


class TelegramGateway:
    def __init__(self, engine: ConversationEngine, settings: Settings) -> None:
        self._engine = engine
        self._settings = settings

    @property
    def engine(self) -> ConversationEngine:
        return self._engine

    def build_application(self) -> Application:
        application = (
            ApplicationBuilder()
            .token(self._settings.bot_token)
            .post_init(self._post_init)
            .build()
        )
        application.add_handler(CallbackQueryHandler(self.on_callback))
        application.add_handler(MessageHandler(filters.TEXT, self.on_message))
        return application

    async def _post_init(self, application: Application) -> None:
        bot = application.bot
        try:
            await bot.set_my_commands(
                [BotCommand(name, description) for name, description in BOT_COMMANDS]
            )
        except TelegramError as exc:
            logger.error("Failed to set commands: %s", exc)

        logger.info("Authorized on account %s", bot.username)
        await bot.send_message(
            chat_id=self._settings.chat_id,
            text="Started bot",
            reply_markup=render_markup(
                Reply("Started bot", keyboard=self._engine.device_keyboard())
            ),
        )

    async def on_message(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        message = update.effective_message
        if message is None or message.text is None:
            return

        chat_id = message.chat_id
        # Registry writes and packet sends are blocking
        response = await asyncio.to_thread(
            self._engine.handle, chat_id, command_from_text(message.text)
        )
        await self.deliver(context.bot, chat_id, response)

    async def on_callback(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        query = update.callback_query
        if query is None or query.message is None:
            return

        chat_id = query.message.chat.id
        try:
            self._engine.authorize(chat_id)
        except UnauthorizedError as exc:
            logger.warning("Ignoring button press: %s", exc)
            return

        await query.answer()
        await self.retract(context.bot, chat_id, query.message.message_id)

        command = parse_callback(query.data or "")
        if command is None:
            logger.warning("Ignoring unknown button payload %r", query.data)
            return

        response = await asyncio.to_thread(
            self._engine.handle, chat_id, command, True
        )
        await self.deliver(context.bot, chat_id, response)

    async def deliver(self, bot: Bot, chat_id: int, response: Response) -> None:
        for message_id in response.retract:
            await self.retract(bot, chat_id, message_id)

        for reply in response.replies:
            try:
                sent = await bot.send_message(
                    chat_id=chat_id,
                    text=reply.text,
                    reply_markup=render_markup(reply),
                    parse_mode=ParseMode.MARKDOWN if reply.markdown else None,
                )
            except TelegramError:
                logger.exception("Failed to send reply %r", reply.text)
                continue
            if reply.interactive:
                self._engine.remember_prompt(chat_id, sent.message_id)

    async def retract(self, bot: Bot, chat_id: int, message_id: int) -> None:
        try:
            await bot.delete_message(chat_id=chat_id, message_id=message_id)
        except TelegramError as exc:
            # Already deleted or too old to delete
            logger.debug("Could not delete message %s: %s", message_id, exc)


def run_bot(engine: ConversationEngine, settings: Settings) -> None:
    if not settings.bot_token:
        raise ValueError("BOT_TOKEN is not set")
    if not settings.chat_id:
        raise ValueError("CHAT_ID is not set")

    gateway = TelegramGateway(engine, settings)
    application = gateway.build_application()
    logger.info("Starting bot for chat %s", settings.chat_id)
    application.run_polling(allowed_updates=Update.ALL_TYPES)
