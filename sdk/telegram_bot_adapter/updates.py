"""
Update classification.

An update can structurally carry more than one sub-record (a message with both
text and a photo, for instance), so variants are tested in a fixed order and
the first match wins:

    photo → message → inline → document → callback
          → business_message → poll → poll_answer → unknown
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from .models import CallbackQuery, InlineQuery, Message, Poll, PollAnswer, Update


class UpdateKind(str, Enum):
    MESSAGE = "message"
    PHOTO = "photo"
    INLINE = "inline"
    DOCUMENT = "document"
    CALLBACK = "callback"
    BUSINESS_MESSAGE = "business_message"
    POLL = "poll"
    POLL_ANSWER = "poll_answer"
    UNKNOWN = ""


@dataclass(frozen=True)
class MessageUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.MESSAGE
    message: Message


@dataclass(frozen=True)
class PhotoUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.PHOTO
    message: Message


@dataclass(frozen=True)
class InlineUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.INLINE
    inline_query: InlineQuery


@dataclass(frozen=True)
class DocumentUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.DOCUMENT
    message: Message


@dataclass(frozen=True)
class CallbackUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.CALLBACK
    callback_query: CallbackQuery


@dataclass(frozen=True)
class BusinessMessageUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.BUSINESS_MESSAGE
    business_message: Message


@dataclass(frozen=True)
class PollUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.POLL
    poll: Poll


@dataclass(frozen=True)
class PollAnswerUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.POLL_ANSWER
    poll_answer: PollAnswer


@dataclass(frozen=True)
class UnknownUpdate:
    kind: ClassVar[UpdateKind] = UpdateKind.UNKNOWN


ClassifiedUpdate = Union[
    MessageUpdate,
    PhotoUpdate,
    InlineUpdate,
    DocumentUpdate,
    CallbackUpdate,
    BusinessMessageUpdate,
    PollUpdate,
    PollAnswerUpdate,
    UnknownUpdate,
]

# Variants anchored to a regular chat message.
MESSAGE_KINDS = frozenset({UpdateKind.MESSAGE, UpdateKind.PHOTO, UpdateKind.DOCUMENT})


def classify(update: Update) -> ClassifiedUpdate:
    """Assign exactly one variant to an update."""
    message = update.message
    if message is not None and message.photo is not None:
        return PhotoUpdate(message)
    if message is not None and message.text:
        return MessageUpdate(message)
    if update.inline_query is not None and update.inline_query.query:
        return InlineUpdate(update.inline_query)
    if message is not None and message.document is not None:
        return DocumentUpdate(message)
    if update.callback_query is not None and update.callback_query.id:
        return CallbackUpdate(update.callback_query)
    if update.business_message is not None:
        return BusinessMessageUpdate(update.business_message)
    if update.poll is not None:
        return PollUpdate(update.poll)
    if update.poll_answer is not None:
        return PollAnswerUpdate(update.poll_answer)
    return UnknownUpdate()
