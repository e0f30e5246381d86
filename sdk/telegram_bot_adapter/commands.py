"""
Command handlers for `/command` messages.

Usage:
    bot = TelegramBot(token)

    @bot.command("start")
    async def start_command(ctx, args):
        await ctx.reply("Hi! I am a bot.")

    @bot.command("help", chat_id=-100123456)  # Guard: only this chat
    async def help_command(ctx, args):
        await ctx.reply("Available commands: /start, /help")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from .updates import UpdateKind

if TYPE_CHECKING:
    from .context import TelegramExecutionContext

logger = logging.getLogger(__name__)

CommandHandler = Callable[["TelegramExecutionContext", list[str]], Awaitable[Any]]


def parse_command(text: str | None) -> tuple[str, list[str]] | None:
    """Split "/cmd@bot a b" into ("cmd", ["a", "b"]). None when text is not a command."""
    if not text or not text.startswith("/"):
        return None
    parts = text.split(maxsplit=1)
    command = parts[0][1:].split("@", 1)[0].lower()
    if not command:
        return None
    args = parts[1].split() if len(parts) > 1 else []
    return command, args


class CommandRegistry:
    """
    Command handler registry.

    Supports:
    - registration via decorator
    - guards on chat_id / user_id
    - argument parsing
    """

    def __init__(self):
        self._handlers: dict[str, dict[str, Any]] = {}

    def register(
        self,
        command: str,
        handler: CommandHandler,
        chat_id: int | str | None = None,
        user_id: int | str | None = None,
    ) -> None:
        self._handlers[command.lstrip("/").lower()] = {
            "handler": handler,
            "chat_id": chat_id,
            "user_id": user_id,
        }
        logger.info(
            "Registered command /%s chat_id=%s user_id=%s",
            command,
            chat_id,
            user_id,
        )

    def match(self, ctx: TelegramExecutionContext) -> tuple[CommandHandler, list[str]] | None:
        """Find the handler for a command message, honouring guards."""
        if ctx.update_type is not UpdateKind.MESSAGE:
            return None
        message = ctx.update.message
        parsed = parse_command(message.text)
        if parsed is None:
            return None
        command, args = parsed

        handler_info = self._handlers.get(command)
        if not handler_info:
            return None

        if handler_info["chat_id"] is not None:
            chat_id = message.chat.id if message.chat is not None else None
            if str(chat_id) != str(handler_info["chat_id"]):
                logger.debug("Command /%s blocked: chat_id %s", command, chat_id)
                return None

        if handler_info["user_id"] is not None:
            user_id = message.from_user.id if message.from_user is not None else None
            if str(user_id) != str(handler_info["user_id"]):
                logger.debug("Command /%s blocked: user_id %s", command, user_id)
                return None

        return handler_info["handler"], args

    def list_commands(self) -> list[str]:
        return list(self._handlers.keys())
