"""Pydantic models for Telegram entities, inline results and the response envelope."""

from __future__ import annotations

from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class TelegramObject(BaseModel):
    """Attribute bag for a Telegram entity. Unknown fields are kept as-is."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# === Users & chats ===


class User(TelegramObject):
    id: int | None = None
    is_bot: bool = False
    first_name: str = ""
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    is_premium: bool | None = None


class Chat(TelegramObject):
    id: int | None = None
    type: str = "private"
    title: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_forum: bool | None = None


class ChatMember(TelegramObject):
    """
    Chat member as returned by getChatAdministrators / getChatMember.

    Only `user` and `status` are always present; capability flags depend on
    the status (administrator or restricted member).
    """
    user: User
    status: str

    # Administrator
    can_be_edited: bool | None = None
    is_anonymous: bool | None = None
    can_manage_chat: bool | None = None
    can_delete_messages: bool | None = None
    can_manage_video_chats: bool | None = None
    can_restrict_members: bool | None = None
    can_promote_members: bool | None = None
    can_change_info: bool | None = None
    can_invite_users: bool | None = None
    can_post_stories: bool | None = None
    can_edit_stories: bool | None = None
    can_delete_stories: bool | None = None
    can_pin_messages: bool | None = None
    can_manage_topics: bool | None = None
    custom_title: str | None = None

    # Restricted member
    is_member: bool | None = None
    can_send_messages: bool | None = None
    can_send_audios: bool | None = None
    can_send_documents: bool | None = None
    can_send_photos: bool | None = None
    can_send_videos: bool | None = None
    can_send_video_notes: bool | None = None
    can_send_voice_notes: bool | None = None
    can_send_polls: bool | None = None
    can_send_other_messages: bool | None = None
    can_add_web_page_previews: bool | None = None
    until_date: int | None = None


# === Messages ===


class MessageEntity(TelegramObject):
    type: str = ""
    offset: int = 0
    length: int = 0
    url: str | None = None
    user: User | None = None
    language: str | None = None
    custom_emoji_id: str | None = None


class PhotoSize(TelegramObject):
    file_id: str = ""
    file_unique_id: str = ""
    width: int = 0
    height: int = 0
    file_size: int | None = None


class Document(TelegramObject):
    file_id: str = ""
    file_unique_id: str = ""
    file_name: str | None = None
    mime_type: str | None = None
    file_size: int | None = None


class Message(TelegramObject):
    """Message; business messages share this shape plus `business_connection_id`."""
    message_id: int | None = None
    chat: Chat | None = None
    date: int = 0
    from_user: User | None = Field(None, alias="from")
    business_connection_id: str | None = None
    text: str | None = None
    entities: list[MessageEntity] | None = None
    caption: str | None = None
    caption_entities: list[MessageEntity] | None = None
    photo: list[PhotoSize] | None = None
    document: Document | None = None
    reply_markup: dict[str, Any] | None = None


class InlineQuery(TelegramObject):
    id: str | None = None
    from_user: User | None = Field(None, alias="from")
    query: str = ""
    offset: str = ""
    chat_type: str | None = None


class CallbackQuery(TelegramObject):
    id: str | None = None
    from_user: User | None = Field(None, alias="from")
    message: Message | None = None
    inline_message_id: str | None = None
    chat_instance: str | None = None
    data: str | None = None


# === Polls ===


class PollOption(TelegramObject):
    text: str = ""
    voter_count: int = 0


class Poll(TelegramObject):
    id: str | None = None
    question: str = ""
    options: list[PollOption] = Field(default_factory=list)
    total_voter_count: int = 0
    is_closed: bool = False
    is_anonymous: bool = True
    type: Literal["regular", "quiz"] = "regular"
    allows_multiple_answers: bool = False
    correct_option_id: int | None = None
    explanation: str | None = None
    explanation_entities: list[MessageEntity] | None = None
    open_period: int | None = None
    close_date: int | None = None


class PollAnswer(TelegramObject):
    poll_id: str | None = None
    user: User | None = None
    option_ids: list[int] = Field(default_factory=list)


# === Update ===


class Update(TelegramObject):
    """Inbound update. Normally exactly one sub-record is populated."""
    update_id: int | None = None
    message: Message | None = None
    edited_message: Message | None = None
    channel_post: Message | None = None
    edited_channel_post: Message | None = None
    inline_query: InlineQuery | None = None
    callback_query: CallbackQuery | None = None
    business_message: Message | None = None
    poll: Poll | None = None
    poll_answer: PollAnswer | None = None


# === Response envelope ===


class TelegramEnvelope(TelegramObject):
    """Uniform Bot API response wrapper: {ok, result, description}."""
    ok: bool = False
    result: Any = None
    description: str | None = None
    error_code: int | None = None


# === Inline query results ===


def _result_id() -> str:
    return str(uuid4())


class InputTextMessageContent(TelegramObject):
    message_text: str
    parse_mode: str | None = None


class InlineQueryResultArticle(TelegramObject):
    type: Literal["article"] = "article"
    id: str = Field(default_factory=_result_id)
    title: str
    input_message_content: InputTextMessageContent

    @classmethod
    def from_text(cls, title: str, content: str, parse_mode: str = "") -> InlineQueryResultArticle:
        return cls(
            title=title,
            input_message_content=InputTextMessageContent(message_text=content, parse_mode=parse_mode or None),
        )


class InlineQueryResultPhoto(TelegramObject):
    type: Literal["photo"] = "photo"
    id: str = Field(default_factory=_result_id)
    photo_url: str
    thumbnail_url: str

    @classmethod
    def from_url(cls, photo: str) -> InlineQueryResultPhoto:
        # The photo doubles as its own thumbnail.
        return cls(photo_url=photo, thumbnail_url=photo)


class InlineQueryResultVideo(TelegramObject):
    type: Literal["video"] = "video"
    id: str = Field(default_factory=_result_id)
    video_url: str
    mime_type: str = "video/mp4"
    thumbnail_url: str
    title: str

    @classmethod
    def from_url(cls, video: str, title: str = "Video") -> InlineQueryResultVideo:
        return cls(video_url=video, thumbnail_url=video, title=title)


InlineQueryResult = InlineQueryResultArticle | InlineQueryResultPhoto | InlineQueryResultVideo
