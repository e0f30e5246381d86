"""
Execution context for a single inbound update.

The context classifies the update once and routes every high-level reply or
query to the Bot API call valid for that variant. Operations that do not apply
to the current variant return None without touching the network.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import TypeAdapter, ValidationError

from .models import (
    ChatMember,
    InlineQueryResultArticle,
    InlineQueryResultPhoto,
    InlineQueryResultVideo,
    Message,
    TelegramEnvelope,
    Update,
)
from .params import (
    AnswerInlineParams,
    ChatParams,
    SendChatActionParams,
    SendMessageParams,
    SendPhotoParams,
    SendPollParams,
    SendVideoParams,
    StopPollParams,
)
from .updates import MESSAGE_KINDS, BusinessMessageUpdate, UpdateKind, classify

if TYPE_CHECKING:
    from .bot import TelegramBot
    from .telegram_client import TelegramApi

logger = logging.getLogger(__name__)

_chat_members = TypeAdapter(list[ChatMember])


def _message_chat_id(message: Message | None) -> str:
    if message is None or message.chat is None or message.chat.id is None:
        return ""
    return str(message.chat.id)


class TelegramExecutionContext:
    """Couples one update with the bot that received it."""

    def __init__(self, bot: TelegramBot, update: Update | Mapping[str, Any]):
        self.bot = bot
        self.update = update if isinstance(update, Update) else Update.model_validate(update)
        self.classified = classify(self.update)

    @property
    def update_type(self) -> UpdateKind:
        return self.classified.kind

    @property
    def api(self) -> TelegramApi:
        return self.bot.client

    # --- Addressing ---

    def _chat_id(self) -> str:
        for message in (self.update.message, self.update.business_message):
            chat_id = _message_chat_id(message)
            if chat_id:
                return chat_id
        return ""

    def _message_id(self) -> str:
        message = self.update.message
        if message is not None and message.message_id is not None:
            return str(message.message_id)
        return ""

    def _any_chat_id(self) -> str:
        """Chat id from message, business message or the callback's message."""
        chat_id = self._chat_id()
        if chat_id:
            return chat_id
        callback = self.update.callback_query
        if callback is not None:
            return _message_chat_id(callback.message)
        return ""

    def _business_connection_id(self) -> str:
        if isinstance(self.classified, BusinessMessageUpdate):
            return self.classified.business_message.business_connection_id or ""
        return ""

    def _inline_query_id(self) -> str:
        if self.update.inline_query is not None:
            return self.update.inline_query.id or ""
        return ""

    # --- Replies ---

    async def reply(
        self,
        message: str,
        parse_mode: str = "",
        options: Mapping[str, Any] | None = None,
    ) -> httpx.Response | None:
        """
        Reply to the update with text.

        Message-like updates get a threaded reply, business messages are sent
        through their business connection, callbacks go to the chat of the
        message carrying the button, inline queries get a "Response" article.
        """
        kind = self.update_type
        if kind in MESSAGE_KINDS:
            return await self.api.send_message(
                self.bot.api_url,
                SendMessageParams(
                    **{
                        **(options or {}),
                        "chat_id": self._chat_id(),
                        "reply_to_message_id": self._message_id(),
                        "text": message,
                        "parse_mode": parse_mode,
                    }
                ),
            )
        if kind is UpdateKind.BUSINESS_MESSAGE:
            return await self.api.send_message(
                self.bot.api_url,
                SendMessageParams(
                    chat_id=self._chat_id(),
                    text=message,
                    business_connection_id=self._business_connection_id(),
                    parse_mode=parse_mode,
                ),
            )
        if kind is UpdateKind.CALLBACK:
            callback_chat_id = _message_chat_id(self.update.callback_query.message)
            if not callback_chat_id:
                return None
            return await self.api.send_message(
                self.bot.api_url,
                SendMessageParams(
                    **{
                        **(options or {}),
                        "chat_id": callback_chat_id,
                        "text": message,
                        "parse_mode": parse_mode,
                    }
                ),
            )
        if kind is UpdateKind.INLINE:
            return await self.reply_inline("Response", message, parse_mode)
        return None

    async def reply_inline(self, title: str, message: str, parse_mode: str = "") -> httpx.Response | None:
        """Answer an inline query with a single article."""
        if self.update_type is not UpdateKind.INLINE:
            return None
        return await self.api.answer_inline(
            self.bot.api_url,
            AnswerInlineParams(
                inline_query_id=self._inline_query_id(),
                results=[InlineQueryResultArticle.from_text(title, message, parse_mode)],
            ),
        )

    async def reply_photo(
        self,
        photo: str,
        caption: str = "",
        options: Mapping[str, Any] | None = None,
    ) -> httpx.Response | None:
        """Reply with a photo (URL or file_id). Inline queries get a photo result, without caption."""
        kind = self.update_type
        if kind in (UpdateKind.MESSAGE, UpdateKind.PHOTO):
            return await self.api.send_photo(
                self.bot.api_url,
                SendPhotoParams(
                    **{
                        **(options or {}),
                        "chat_id": self._chat_id(),
                        "reply_to_message_id": self._message_id(),
                        "photo": photo,
                        "caption": caption,
                    }
                ),
            )
        if kind is UpdateKind.INLINE:
            return await self.api.answer_inline(
                self.bot.api_url,
                AnswerInlineParams(
                    inline_query_id=self._inline_query_id(),
                    results=[InlineQueryResultPhoto.from_url(photo)],
                ),
            )
        return None

    async def reply_video(
        self,
        video: str,
        caption: str = "",
        options: Mapping[str, Any] | None = None,
    ) -> httpx.Response | None:
        """Reply with a video (URL or file_id). Inline queries get a video result, without caption."""
        kind = self.update_type
        if kind in (UpdateKind.MESSAGE, UpdateKind.PHOTO):
            return await self.api.send_video(
                self.bot.api_url,
                SendVideoParams(
                    **{
                        **(options or {}),
                        "chat_id": self._chat_id(),
                        "reply_to_message_id": self._message_id(),
                        "video": video,
                        "caption": caption,
                    }
                ),
            )
        if kind is UpdateKind.INLINE:
            return await self.api.answer_inline(
                self.bot.api_url,
                AnswerInlineParams(
                    inline_query_id=self._inline_query_id(),
                    results=[InlineQueryResultVideo.from_url(video)],
                ),
            )
        return None

    async def send_typing(self) -> httpx.Response | None:
        """Show the typing indicator in the current chat."""
        kind = self.update_type
        if kind in MESSAGE_KINDS:
            return await self.api.send_chat_action(
                self.bot.api_url,
                SendChatActionParams(chat_id=self._chat_id(), action="typing"),
            )
        if kind is UpdateKind.BUSINESS_MESSAGE:
            return await self.api.send_chat_action(
                self.bot.api_url,
                SendChatActionParams(
                    business_connection_id=self._business_connection_id(),
                    chat_id=self._chat_id(),
                    action="typing",
                ),
            )
        return None

    # --- Polls ---

    async def reply_poll(
        self,
        question: str,
        options: list[str],
        poll_options: Mapping[str, Any] | None = None,
    ) -> httpx.Response | None:
        kind = self.update_type
        if kind in MESSAGE_KINDS:
            return await self.api.send_poll(
                self.bot.api_url,
                SendPollParams(
                    **{
                        **(poll_options or {}),
                        "chat_id": self._chat_id(),
                        "reply_to_message_id": self._message_id(),
                        "question": question,
                        "options": options,
                    }
                ),
            )
        if kind is UpdateKind.BUSINESS_MESSAGE:
            return await self.api.send_poll(
                self.bot.api_url,
                SendPollParams(
                    **{
                        **(poll_options or {}),
                        "chat_id": self._chat_id(),
                        "business_connection_id": self._business_connection_id(),
                        "question": question,
                        "options": options,
                    }
                ),
            )
        return None

    async def stop_poll(self, message_id: int, reply_markup: dict[str, Any] | None = None) -> httpx.Response | None:
        """Stop a poll previously sent to the current chat."""
        kind = self.update_type
        if kind in MESSAGE_KINDS:
            return await self.api.stop_poll(
                self.bot.api_url,
                StopPollParams(chat_id=self._chat_id(), message_id=message_id, reply_markup=reply_markup),
            )
        if kind is UpdateKind.BUSINESS_MESSAGE:
            return await self.api.stop_poll(
                self.bot.api_url,
                StopPollParams(
                    chat_id=self._chat_id(),
                    business_connection_id=self._business_connection_id(),
                    message_id=message_id,
                    reply_markup=reply_markup,
                ),
            )
        return None

    # --- Files ---

    async def get_file(self, file_id: str) -> httpx.Response:
        return await self.api.get_file(self.bot.api_url, {"file_id": file_id}, self.bot.token)

    # --- Chat introspection ---

    def _chat_result(self, response: httpx.Response) -> Any:
        if not response.is_success:
            return None
        try:
            envelope = TelegramEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Undecodable Telegram response: %s", exc)
            return None
        if not envelope.ok:
            logger.info("Telegram reported failure: %s", envelope.description)
            return None
        return envelope.result

    async def get_chat_member_count(self) -> int | None:
        chat_id = self._any_chat_id()
        if not chat_id:
            return None
        response = await self.api.get_chat_member_count(self.bot.api_url, ChatParams(chat_id=chat_id))
        result = self._chat_result(response)
        if isinstance(result, int) and not isinstance(result, bool):
            return result
        return None

    async def get_chat_administrators(self) -> list[ChatMember] | None:
        chat_id = self._any_chat_id()
        if not chat_id:
            return None
        response = await self.api.get_chat_administrators(self.bot.api_url, ChatParams(chat_id=chat_id))
        result = self._chat_result(response)
        if not isinstance(result, list):
            return None
        try:
            return _chat_members.validate_python(result)
        except ValidationError as exc:
            logger.warning("Unexpected chat administrators payload: %s", exc)
            return None

    async def get_user_count_excluding_bot(self) -> int | None:
        """Member count minus the bot itself, which is assumed to be a member."""
        count = await self.get_chat_member_count()
        if count is None:
            return None
        return max(0, count - 1)
