"""
Domain events published after a store mutation succeeds.

Each event knows its wire name and how to turn itself into the ``data``
part of the broadcast envelope. Topic helpers build the channel names the
ChannelAuthorizer understands.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from chatline.domain.entities.message import Message, attachment_url
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.utils.formatting import formatted_size

PRESENCE_TOPIC = "presence"


def conversation_topic(conversation_id: ConversationId) -> str:
    return f"conversation.{conversation_id.value}"


def user_topic(user_id: UserId) -> str:
    return f"user.{user_id.value}"


def typing_topic(conversation_id: ConversationId) -> str:
    return f"typing.{conversation_id.value}"


def message_payload(message: Message, base_url: str = "") -> dict[str, Any]:
    attachment = message.attachment
    return {
        "id": message.id.value,
        "conversation_id": message.conversation_id.value,
        "author_id": message.author_id.value,
        "type": message.type.value,
        "content": message.content,
        "reply_to_id": message.reply_to_id.value if message.reply_to_id else None,
        "metadata": dict(message.metadata),
        "attachment": (
            {
                "name": attachment.name,
                "mime_type": attachment.mime_type,
                "size_bytes": attachment.size_bytes,
                "formatted_size": formatted_size(attachment.size_bytes),
                "url": attachment_url(message, base_url),
            }
            if attachment
            else None
        ),
        "created_at": message.created_at.isoformat(),
        "updated_at": message.updated_at.isoformat(),
    }


@dataclass(frozen=True)
class DomainEvent:
    @property
    def name(self) -> str:
        return type(self).__name__

    def to_payload(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class MessageSent(DomainEvent):
    message: Message
    attachment_base_url: str = ""

    @property
    def conversation_id(self) -> ConversationId:
        return self.message.conversation_id

    def to_payload(self) -> dict[str, Any]:
        return {
            "message": message_payload(self.message, self.attachment_base_url),
            "conversation_id": self.conversation_id.value,
        }


@dataclass(frozen=True)
class MessageRead(DomainEvent):
    message_id: MessageId
    conversation_id: ConversationId
    reader_id: UserId
    read_at: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "message_id": self.message_id.value,
            "conversation_id": self.conversation_id.value,
            "reader_id": self.reader_id.value,
            "read_at": self.read_at.isoformat(),
        }


@dataclass(frozen=True)
class UserTyping(DomainEvent):
    user_id: UserId
    conversation_id: ConversationId
    is_typing: bool
    user_name: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id.value,
            "user_name": self.user_name,
            "conversation_id": self.conversation_id.value,
            "is_typing": self.is_typing,
        }


@dataclass(frozen=True)
class UserOnline(DomainEvent):
    user_id: UserId

    def to_payload(self) -> dict[str, Any]:
        return {"user_id": self.user_id.value, "is_online": True}


@dataclass(frozen=True)
class UserOffline(DomainEvent):
    user_id: UserId
    last_seen_at: Optional[datetime] = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id.value,
            "is_online": False,
            "last_seen_at": self.last_seen_at.isoformat() if self.last_seen_at else None,
        }
