"""
Message Entity - A single message in a conversation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from chatline.domain.value_objects.attachment import Attachment
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId


class MessageType(str, Enum):
    TEXT = "text"
    FILE = "file"
    IMAGE = "image"
    SYSTEM = "system"


@dataclass
class Message:
    id: MessageId
    conversation_id: ConversationId
    author_id: UserId
    type: MessageType
    created_at: datetime
    updated_at: datetime
    content: Optional[str] = None
    attachment: Optional[Attachment] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    reply_to_id: Optional[MessageId] = None
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        if self.attachment is not None and self.type not in (
            MessageType.FILE,
            MessageType.IMAGE,
        ):
            raise ValueError(f"Attachment not allowed on {self.type.value} message")

    @classmethod
    def create(
        cls,
        conversation_id: ConversationId,
        author_id: UserId,
        type: MessageType,
        now: datetime,
        content: Optional[str] = None,
        attachment: Optional[Attachment] = None,
        metadata: Optional[dict[str, Any]] = None,
        reply_to_id: Optional[MessageId] = None,
    ) -> Message:
        """Factory method to create a new Message with a generated ID."""
        return cls(
            id=MessageId.new(),
            conversation_id=conversation_id,
            author_id=author_id,
            type=type,
            created_at=now,
            updated_at=now,
            content=content,
            attachment=attachment,
            metadata=dict(metadata or {}),
            reply_to_id=reply_to_id,
        )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def edited_at(self) -> Optional[str]:
        return self.metadata.get("edited_at")

    @property
    def is_edited(self) -> bool:
        return self.edited_at is not None

    def edit(self, content: str, now: datetime) -> None:
        self.content = content
        self.metadata = {**self.metadata, "edited_at": now.isoformat()}
        self.updated_at = now

    def tombstone(self, now: datetime) -> None:
        self.deleted_at = now
        self.updated_at = now


def attachment_url(message: Message, base_url: str) -> Optional[str]:
    """Public URL of the message attachment, computed at read time."""
    if message.attachment is None:
        return None
    return f"{base_url.rstrip('/')}/{message.attachment.path.lstrip('/')}"
