"""
Messages API Router - history, sending, editing and read receipts.

All routes are nested under a conversation; a message id that belongs to a
different conversation is reported as not found.
"""

from logging import getLogger
from typing import Any, Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from chatline.application.commands.messages import (
    DeleteMessageCommand,
    DeleteMessageHandler,
    EditMessageCommand,
    EditMessageHandler,
    MarkReadCommand,
    MarkReadHandler,
    SendMessageCommand,
    SendMessageHandler,
)
from chatline.application.dto import MessageDTO, MessagePageDTO, ReadReceiptDTO
from chatline.application.queries.messages import (
    GetMessageHandler,
    GetMessageQuery,
    GetReadReceiptsHandler,
    GetReadReceiptsQuery,
    ListMessagesHandler,
    ListMessagesQuery,
)
from chatline.config.settings import ChatConfig
from chatline.domain.entities.message import MessageType
from chatline.domain.exceptions import DomainValidationError
from chatline.domain.value_objects.attachment import Attachment
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.presentation.dependencies.auth import get_current_user
from chatline.presentation.dependencies.ids import parse_conversation_id, parse_message_id

logger = getLogger(__name__)

router = APIRouter(prefix="/conversations/{conversation_id}/messages", tags=["messages"])


# ==================== REQUEST/RESPONSE MODELS ====================


class AttachmentRequest(BaseModel):
    """Metadata reported by blob storage after an upload."""

    path: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)
    mime_type: str = Field(min_length=1)
    size_bytes: int = Field(ge=0)


class SendMessageRequest(BaseModel):
    content: Optional[str] = None
    type: Optional[MessageType] = None
    reply_to_id: Optional[str] = None
    attachment: Optional[AttachmentRequest] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class EditMessageRequest(BaseModel):
    content: str


class DeleteMessageResponse(BaseModel):
    success: bool


def _reply_target(raw: Optional[str]) -> Optional[MessageId]:
    if not raw:
        return None
    try:
        return MessageId(raw)
    except ValueError as e:
        raise DomainValidationError("Reply target is not in this conversation") from e


# ==================== ENDPOINTS ====================


@router.get("", response_model=MessagePageDTO)
@inject
async def list_messages(
    handler: FromDishka[ListMessagesHandler],
    config: FromDishka[ChatConfig],
    page: int = Query(default=1, ge=1),
    per_page: Optional[int] = Query(default=None, ge=1),
    search: Optional[str] = Query(default=None),
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    """Newest first; ``per_page`` is capped by configuration."""
    result = await handler.execute(
        ListMessagesQuery(
            conversation_id=conversation_id,
            user_id=current_user.id,
            page=page,
            per_page=per_page,
            search=search,
        )
    )
    return MessagePageDTO(
        messages=[MessageDTO.from_entity(m, config.attachment_base_url) for m in result.items],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        last_page=result.last_page,
    )


@router.post("", response_model=MessageDTO, status_code=status.HTTP_201_CREATED)
@inject
async def send_message(
    body: SendMessageRequest,
    handler: FromDishka[SendMessageHandler],
    config: FromDishka[ChatConfig],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    attachment = None
    if body.attachment is not None:
        attachment = Attachment(
            path=body.attachment.path,
            name=body.attachment.name,
            mime_type=body.attachment.mime_type,
            size_bytes=body.attachment.size_bytes,
        )

    message = await handler.execute(
        SendMessageCommand(
            conversation_id=conversation_id,
            author=current_user,
            content=body.content,
            type=body.type,
            reply_to_id=_reply_target(body.reply_to_id),
            attachment=attachment,
            metadata=body.metadata,
        )
    )
    return MessageDTO.from_entity(message, config.attachment_base_url)


@router.get("/{message_id}", response_model=MessageDTO)
@inject
async def get_message(
    handler: FromDishka[GetMessageHandler],
    config: FromDishka[ChatConfig],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    message_id: MessageId = Depends(parse_message_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    detail = await handler.execute(
        GetMessageQuery(
            conversation_id=conversation_id, message_id=message_id, user_id=current_user.id
        )
    )
    return MessageDTO.from_entity(
        detail.message, config.attachment_base_url, read_count=detail.read_count
    )


@router.patch("/{message_id}", response_model=MessageDTO)
@inject
async def edit_message(
    body: EditMessageRequest,
    handler: FromDishka[EditMessageHandler],
    config: FromDishka[ChatConfig],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    message_id: MessageId = Depends(parse_message_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    message = await handler.execute(
        EditMessageCommand(
            conversation_id=conversation_id,
            message_id=message_id,
            requester_id=current_user.id,
            content=body.content,
        )
    )
    return MessageDTO.from_entity(message, config.attachment_base_url)


@router.delete("/{message_id}", response_model=DeleteMessageResponse)
@inject
async def delete_message(
    handler: FromDishka[DeleteMessageHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    message_id: MessageId = Depends(parse_message_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    await handler.execute(
        DeleteMessageCommand(
            conversation_id=conversation_id, message_id=message_id, requester_id=current_user.id
        )
    )
    logger.info(f"[Message] {current_user.id} deleted {message_id}")
    return DeleteMessageResponse(success=True)


# ==================== READ RECEIPTS ====================


@router.post("/{message_id}/read", response_model=ReadReceiptDTO)
@inject
async def mark_read(
    handler: FromDishka[MarkReadHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    message_id: MessageId = Depends(parse_message_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    """Idempotent: marking twice returns the first receipt."""
    receipt = await handler.execute(
        MarkReadCommand(
            conversation_id=conversation_id, message_id=message_id, reader_id=current_user.id
        )
    )
    return ReadReceiptDTO.from_entity(receipt)


@router.get("/{message_id}/receipts", response_model=list[ReadReceiptDTO])
@inject
async def read_receipts(
    handler: FromDishka[GetReadReceiptsHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    message_id: MessageId = Depends(parse_message_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    receipts = await handler.execute(
        GetReadReceiptsQuery(
            conversation_id=conversation_id, message_id=message_id, user_id=current_user.id
        )
    )
    return [ReadReceiptDTO.from_entity(r) for r in receipts]
