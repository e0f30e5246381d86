"""
telegram-bot-adapter — async adapter for the Telegram Bot API.

Usage:
    from telegram_bot_adapter import TelegramBot, UpdateKind

    bot = TelegramBot(token)

    @bot.on(UpdateKind.MESSAGE)
    async def echo(ctx):
        await ctx.reply(ctx.update.message.text)

    await bot.handle_update(update_json)
"""

from .bot import TelegramBot
from .codec import build_request, build_url, encode_params
from .context import TelegramExecutionContext
from .exceptions import TelegramConfigError, TelegramError, TelegramRequestError
from .files import FileResolver
from .models import ChatMember, TelegramEnvelope, Update
from .telegram_client import TelegramApi
from .updates import UpdateKind, classify

__all__ = [
    "TelegramBot",
    "TelegramExecutionContext",
    "TelegramApi",
    "FileResolver",
    "UpdateKind",
    "classify",
    "build_request",
    "build_url",
    "encode_params",
    "Update",
    "ChatMember",
    "TelegramEnvelope",
    "TelegramError",
    "TelegramRequestError",
    "TelegramConfigError",
]
