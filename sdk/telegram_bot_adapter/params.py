"""
Parameter structures for each Bot API operation.

Required fields have no default; optional ones default to None and are left
out of the query string. Extra caller options pass straight through to the
wire, except for answerInlineQuery whose parameter set is closed.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from .models import InlineQueryResult, MessageEntity


class TelegramParams(BaseModel):
    """Base for per-operation parameters."""

    model_config = ConfigDict(extra="allow")


class ChatParams(TelegramParams):
    chat_id: int | str


class BusinessChatParams(ChatParams):
    business_connection_id: str | int | None = None


# === Messages ===


class SendMessageParams(BusinessChatParams):
    text: str
    parse_mode: str = ""
    reply_to_message_id: int | str | None = None
    disable_web_page_preview: bool | None = None
    disable_notification: bool | None = None
    protect_content: bool | None = None
    reply_markup: dict[str, Any] | str | None = None


class SendPhotoParams(BusinessChatParams):
    photo: str
    caption: str | None = None
    parse_mode: str | None = None
    reply_to_message_id: int | str | None = None
    disable_notification: bool | None = None
    protect_content: bool | None = None
    reply_markup: dict[str, Any] | str | None = None


class SendVideoParams(BusinessChatParams):
    video: str
    caption: str | None = None
    parse_mode: str | None = None
    reply_to_message_id: int | str | None = None
    disable_notification: bool | None = None
    protect_content: bool | None = None
    reply_markup: dict[str, Any] | str | None = None


class SendChatActionParams(BusinessChatParams):
    action: str


class EditMessageTextParams(TelegramParams):
    """editMessageText: either chat_id + message_id or inline_message_id."""
    text: str
    chat_id: int | str | None = None
    message_id: int | None = None
    inline_message_id: str | None = None
    parse_mode: str | None = None
    disable_web_page_preview: bool | None = None
    reply_markup: dict[str, Any] | str | None = None


class DeleteMessageParams(ChatParams):
    message_id: int


# === Callbacks & inline ===


class AnswerCallbackParams(TelegramParams):
    callback_query_id: int | str
    text: str | None = None
    show_alert: bool | None = None
    url: str | None = None
    cache_time: int | None = None


class AnswerInlineParams(TelegramParams):
    model_config = ConfigDict(extra="ignore")

    inline_query_id: int | str
    results: list[InlineQueryResult]
    cache_time: int | None = None
    is_personal: bool | None = None
    next_offset: str | None = None


# === Polls ===


class SendPollParams(BusinessChatParams):
    question: str
    options: list[str]
    is_anonymous: bool | None = None
    type: Literal["quiz", "regular"] | None = None
    allows_multiple_answers: bool | None = None
    correct_option_id: int | None = None
    explanation: str | None = None
    explanation_parse_mode: str | None = None
    explanation_entities: list[MessageEntity] | str | None = None
    open_period: int | None = None
    close_date: int | None = None
    is_closed: bool | None = None
    disable_notification: bool | None = None
    protect_content: bool | None = None
    reply_to_message_id: int | str | None = None
    allow_sending_without_reply: bool | None = None
    reply_markup: dict[str, Any] | str | None = None


class StopPollParams(BusinessChatParams):
    message_id: int
    reply_markup: dict[str, Any] | str | None = None


# === Files & chat introspection ===


class GetFileParams(TelegramParams):
    file_id: str


class GetChatMemberParams(ChatParams):
    user_id: int | str
