"""
HTTP client for Telegram Bot API.

Features:
- One method per Bot API operation, raw httpx.Response returned as-is
- Single shared httpx.AsyncClient (lazy, or injected by the caller)
- Per-call logging of method, HTTP status and duration (never the token)
- getFile resolved and downloaded in one step via FileResolver
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel

from .codec import build_request
from .config import DEFAULT_FILE_BASE
from .files import FileResolver
from .params import (
    AnswerCallbackParams,
    AnswerInlineParams,
    ChatParams,
    DeleteMessageParams,
    EditMessageTextParams,
    GetChatMemberParams,
    GetFileParams,
    SendChatActionParams,
    SendMessageParams,
    SendPhotoParams,
    SendPollParams,
    SendVideoParams,
    StopPollParams,
)

logger = logging.getLogger(__name__)

_TIMEOUT = 30.0

Params = Mapping[str, Any] | BaseModel


class TelegramApi:
    """
    Request builder for the Bot API.

    `bot_api` arguments are the full bot endpoint without a method,
    e.g. "https://api.telegram.org/bot<token>".
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        file_base: str = DEFAULT_FILE_BASE,
        timeout: float = _TIMEOUT,
    ):
        self._client = client
        self._timeout = timeout
        self.files = FileResolver(self, file_base=file_base)

    async def get_client(self) -> httpx.AsyncClient:
        """Return a reused AsyncClient instance (lazy initialization)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> TelegramApi:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # --- Transport ---

    async def perform(self, request: httpx.Request, *, method: str | None = None) -> httpx.Response:
        """Send one prepared request. Transport errors propagate to the caller."""
        label = method or request.url.path.rsplit("/", 1)[-1]
        client = await self.get_client()
        started = time.perf_counter()
        logger.info("telegram.call method=%s", label)
        try:
            response = await client.send(request)
        except httpx.HTTPError as exc:
            logger.warning(
                "telegram.error method=%s ms=%s error=%s",
                label,
                int((time.perf_counter() - started) * 1000),
                exc,
            )
            raise
        logger.info(
            "telegram.result method=%s http=%s ms=%s",
            label,
            response.status_code,
            int((time.perf_counter() - started) * 1000),
        )
        return response

    async def _call(self, bot_api: str, method: str, params: Params | None = None) -> httpx.Response:
        return await self.perform(build_request(bot_api, method, params), method=method)

    # === Messages ===

    async def send_message(self, bot_api: str, params: SendMessageParams | Params) -> httpx.Response:
        """sendMessage."""
        return await self._call(bot_api, "sendMessage", params)

    async def send_photo(self, bot_api: str, params: SendPhotoParams | Params) -> httpx.Response:
        """sendPhoto."""
        return await self._call(bot_api, "sendPhoto", params)

    async def send_video(self, bot_api: str, params: SendVideoParams | Params) -> httpx.Response:
        """sendVideo."""
        return await self._call(bot_api, "sendVideo", params)

    async def send_chat_action(self, bot_api: str, params: SendChatActionParams | Params) -> httpx.Response:
        """sendChatAction — typing, upload_photo, etc."""
        return await self._call(bot_api, "sendChatAction", params)

    async def edit_message_text(self, bot_api: str, params: EditMessageTextParams | Params) -> httpx.Response:
        """editMessageText."""
        return await self._call(bot_api, "editMessageText", params)

    async def delete_message(self, bot_api: str, params: DeleteMessageParams | Params) -> httpx.Response:
        """deleteMessage."""
        return await self._call(bot_api, "deleteMessage", params)

    # === Callbacks & inline ===

    async def answer_callback(self, bot_api: str, params: AnswerCallbackParams | Params) -> httpx.Response:
        """answerCallbackQuery."""
        return await self._call(bot_api, "answerCallbackQuery", params)

    async def answer_inline(self, bot_api: str, params: AnswerInlineParams | Params) -> httpx.Response:
        """answerInlineQuery. Only the documented fields are sent."""
        if not isinstance(params, AnswerInlineParams):
            params = AnswerInlineParams.model_validate(dict(params))
        return await self._call(bot_api, "answerInlineQuery", params)

    # === Polls ===

    async def send_poll(self, bot_api: str, params: SendPollParams | Params) -> httpx.Response:
        """sendPoll."""
        return await self._call(bot_api, "sendPoll", params)

    async def stop_poll(self, bot_api: str, params: StopPollParams | Params) -> httpx.Response:
        """stopPoll."""
        return await self._call(bot_api, "stopPoll", params)

    # === Files ===

    async def get_file(self, bot_api: str, params: GetFileParams | Params, token: str) -> httpx.Response:
        """getFile + download. Never raises; failures come back as error responses."""
        return await self.files.fetch(bot_api, params, token)

    # === Chats & bot ===

    async def get_chat_member_count(self, bot_api: str, params: ChatParams | Params) -> httpx.Response:
        """getChatMemberCount."""
        return await self._call(bot_api, "getChatMemberCount", params)

    async def get_chat_administrators(self, bot_api: str, params: ChatParams | Params) -> httpx.Response:
        """getChatAdministrators."""
        return await self._call(bot_api, "getChatAdministrators", params)

    async def get_chat_member(self, bot_api: str, params: GetChatMemberParams | Params) -> httpx.Response:
        """getChatMember."""
        return await self._call(bot_api, "getChatMember", params)

    async def get_me(self, bot_api: str) -> httpx.Response:
        """getMe — bot identity."""
        return await self._call(bot_api, "getMe")
