from __future__ import annotations

import pytest

from conftest import (
    API_BASE,
    TOKEN,
    TransportRecorder,
    callback_update,
    inline_update,
    message_update,
    poll_update,
)
from telegram_bot_adapter.bot import TelegramBot
from telegram_bot_adapter.commands import parse_command
from telegram_bot_adapter.config import Settings
from telegram_bot_adapter.exceptions import TelegramConfigError
from telegram_bot_adapter.updates import UpdateKind


@pytest.mark.parametrize("token", ["", "   "])
def test_bot_requires_token(token: str) -> None:
    with pytest.raises(TelegramConfigError):
        TelegramBot(token)


def test_bot_api_url_and_repr_hides_token(bot: TelegramBot) -> None:
    assert bot.api_url == f"{API_BASE}/bot{TOKEN}"
    assert TOKEN not in repr(bot)


def test_from_settings() -> None:
    settings = Settings(
        telegram_bot_token="999:xyz",
        telegram_api_base="http://localhost:8081/",
        telegram_file_base="http://localhost:8081/file",
    )
    bot = TelegramBot.from_settings(settings)
    assert bot.api_url == "http://localhost:8081/bot999:xyz"
    assert bot.client.files.file_url("999:xyz", "a/b") == "http://localhost:8081/file/bot999:xyz/a/b"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("/start", ("start", [])),
        ("/Echo@my_bot hello world", ("echo", ["hello", "world"])),
        ("hello", None),
        ("/", None),
        (None, None),
    ],
)
def test_parse_command(text, expected) -> None:
    assert parse_command(text) == expected


@pytest.mark.asyncio
async def test_command_handler_runs_with_args(bot: TelegramBot, transport: TransportRecorder) -> None:
    seen = {}

    @bot.command("echo")
    async def echo(ctx, args):
        seen["args"] = args
        return await ctx.reply(" ".join(args))

    response = await bot.handle_update(message_update("/echo@bot hi there"))

    assert response.status_code == 200
    assert seen["args"] == ["hi", "there"]
    assert transport.params()["text"] == "hi there"
    assert bot.list_commands() == ["echo"]


@pytest.mark.asyncio
async def test_command_guards_fall_back_to_kind_handler(bot: TelegramBot) -> None:
    calls: list[str] = []

    @bot.command("admin", chat_id=-1)
    async def admin(ctx, args):
        calls.append("admin")

    @bot.command("me", user_id=555)
    async def me(ctx, args):
        calls.append("me")

    @bot.on(UpdateKind.MESSAGE)
    async def on_message(ctx):
        calls.append("message")

    await bot.handle_update(message_update("/admin"))
    await bot.handle_update(message_update("/me"))
    await bot.handle_update(message_update("/admin", chat_id=-1))

    assert calls == ["message", "message", "admin"]


@pytest.mark.asyncio
async def test_chat_guard_blocks_message_without_chat(bot: TelegramBot) -> None:
    calls: list[str] = []

    @bot.command("admin", chat_id=-1)
    async def admin(ctx, args):
        calls.append("admin")

    @bot.on(UpdateKind.MESSAGE)
    async def on_message(ctx):
        calls.append("message")

    await bot.handle_update({"message": {"text": "/admin"}})

    assert calls == ["message"]


@pytest.mark.asyncio
async def test_kind_handler_then_default(bot: TelegramBot) -> None:
    calls: list[str] = []

    async def on_inline(ctx):
        calls.append(f"inline:{ctx.update.inline_query.query}")
        return "inline"

    async def fallback(ctx):
        calls.append(f"default:{ctx.update_type.value}")
        return "default"

    bot.on("inline", on_inline)
    bot.on("default", fallback)

    assert await bot.handle_update(inline_update("dogs")) == "inline"
    assert await bot.handle_update(callback_update()) == "default"
    assert calls == ["inline:dogs", "default:callback"]


@pytest.mark.asyncio
async def test_unhandled_update_returns_none(bot: TelegramBot, transport: TransportRecorder) -> None:
    assert await bot.handle_update(poll_update()) is None
    assert transport.requests == []


@pytest.mark.asyncio
async def test_handler_errors_propagate(bot: TelegramBot) -> None:
    @bot.on(UpdateKind.MESSAGE)
    async def broken(ctx):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await bot.handle_update(message_update())


@pytest.mark.asyncio
async def test_get_me(bot: TelegramBot, transport: TransportRecorder) -> None:
    transport.respond("getMe", json={"ok": True, "result": {"id": 123456, "is_bot": True, "username": "my_bot"}})

    response = await bot.get_me()

    assert response.json()["result"]["username"] == "my_bot"
    assert str(transport.requests[0].url) == f"{API_BASE}/bot{TOKEN}/getMe"
