"""Message DTOs for API request/response."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from chatline.domain.entities.message import Message, attachment_url
from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.utils.formatting import formatted_size


class AttachmentDTO(BaseModel):
    name: str
    mime_type: str
    size_bytes: int
    formatted_size: Optional[str] = None
    url: Optional[str] = None


class MessageDTO(BaseModel):
    """DTO for message data returned to clients."""

    id: str
    conversation_id: str
    author_id: str
    type: str
    content: Optional[str] = None
    attachment: Optional[AttachmentDTO] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    reply_to_id: Optional[str] = None
    is_edited: bool = False
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime
    read_count: Optional[int] = None

    @classmethod
    def from_entity(
        cls, message: Message, base_url: str = "", read_count: Optional[int] = None
    ) -> "MessageDTO":
        attachment = None
        if message.attachment is not None:
            attachment = AttachmentDTO(
                name=message.attachment.name,
                mime_type=message.attachment.mime_type,
                size_bytes=message.attachment.size_bytes,
                formatted_size=formatted_size(message.attachment.size_bytes),
                url=attachment_url(message, base_url),
            )
        return cls(
            id=message.id.value,
            conversation_id=message.conversation_id.value,
            author_id=message.author_id.value,
            type=message.type.value,
            # Tombstones keep their row but never their content
            content=None if message.is_deleted else message.content,
            attachment=None if message.is_deleted else attachment,
            metadata=message.metadata,
            reply_to_id=message.reply_to_id.value if message.reply_to_id else None,
            is_edited=message.is_edited,
            is_deleted=message.is_deleted,
            created_at=message.created_at,
            updated_at=message.updated_at,
            read_count=read_count,
        )


class MessagePageDTO(BaseModel):
    messages: list[MessageDTO]
    total: int
    page: int
    per_page: int
    last_page: int


class ReadReceiptDTO(BaseModel):
    message_id: str
    user_id: str
    read_at: datetime

    @classmethod
    def from_entity(cls, receipt: ReadReceipt) -> "ReadReceiptDTO":
        return cls(
            message_id=receipt.message_id.value,
            user_id=receipt.user_id.value,
            read_at=receipt.read_at,
        )
