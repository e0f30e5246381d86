"""Bot configuration and update dispatch."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable

import httpx

from .commands import CommandHandler, CommandRegistry
from .config import DEFAULT_API_BASE, DEFAULT_FILE_BASE, Settings, get_settings
from .context import TelegramExecutionContext
from .exceptions import TelegramConfigError
from .models import Update
from .telegram_client import TelegramApi
from .updates import UpdateKind

logger = logging.getLogger(__name__)

UpdateHandler = Callable[[TelegramExecutionContext], Awaitable[Any]]

DEFAULT_HANDLER = "default"


def _token_hint(token: str) -> str:
    suffix = token[-6:] if len(token) >= 6 else token
    return f"*{suffix}"


class TelegramBot:
    """
    A bot: its token, endpoints and update handlers.

    Example:
        bot = TelegramBot(token)

        @bot.on(UpdateKind.MESSAGE)
        async def echo(ctx):
            await ctx.reply(ctx.update.message.text)

        await bot.handle_update(update_json)
    """

    def __init__(
        self,
        token: str,
        *,
        api_base: str = DEFAULT_API_BASE,
        file_base: str = DEFAULT_FILE_BASE,
        client: TelegramApi | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not token or not token.strip():
            raise TelegramConfigError("bot token is required")
        self.token = token.strip()
        self.api_base = api_base.rstrip("/")
        self.api_url = f"{self.api_base}/bot{self.token}"
        self.client = client or TelegramApi(http_client, file_base=file_base)
        self._handlers: dict[str, UpdateHandler] = {}
        self._commands = CommandRegistry()

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> TelegramBot:
        settings = settings or get_settings()
        if "client" not in kwargs and "http_client" not in kwargs:
            kwargs["client"] = TelegramApi(
                file_base=settings.telegram_file_base,
                timeout=settings.http_timeout,
            )
        return cls(
            settings.telegram_bot_token,
            api_base=settings.telegram_api_base,
            file_base=settings.telegram_file_base,
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"TelegramBot(token={_token_hint(self.token)}, api_base={self.api_base!r})"

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> TelegramBot:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # --- Registration ---

    def on(self, kind: UpdateKind | str, handler: UpdateHandler | None = None):
        """
        Register a handler for an update kind, or "default" for anything else.

        Works as a plain call `bot.on(kind, handler)` or as a decorator
        `@bot.on(kind)`.
        """
        key = kind.value if isinstance(kind, UpdateKind) else kind

        def decorator(func: UpdateHandler) -> UpdateHandler:
            self._handlers[key] = func
            return func

        if handler is not None:
            return decorator(handler)
        return decorator

    def command(
        self,
        name: str,
        chat_id: int | str | None = None,
        user_id: int | str | None = None,
    ) -> Callable[[CommandHandler], CommandHandler]:
        """Decorator registering a `/name` command handler."""

        def decorator(func: CommandHandler) -> CommandHandler:
            self._commands.register(name, func, chat_id=chat_id, user_id=user_id)
            return func

        return decorator

    def list_commands(self) -> list[str]:
        return self._commands.list_commands()

    # --- Dispatch ---

    async def handle_update(self, update: Update | Mapping[str, Any]) -> Any:
        """
        Run the handler for one update.

        Commands win over kind handlers, which win over the default handler.
        Returns the handler's result, or None when nothing matched.
        """
        ctx = TelegramExecutionContext(self, update)

        command = self._commands.match(ctx)
        if command is not None:
            handler, args = command
            logger.info("bot.update kind=%s command=true", ctx.update_type.value or "unknown")
            return await handler(ctx, args)

        handler = self._handlers.get(ctx.update_type.value) or self._handlers.get(DEFAULT_HANDLER)
        if handler is None:
            logger.debug("bot.update kind=%s unhandled", ctx.update_type.value or "unknown")
            return None
        logger.info("bot.update kind=%s", ctx.update_type.value or "unknown")
        return await handler(ctx)

    async def get_me(self) -> httpx.Response:
        """Bot identity via getMe."""
        return await self.client.get_me(self.api_url)
