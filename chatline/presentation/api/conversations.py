"""
Conversations API Router - conversation lifecycle and membership.

Thin layer: parses the request, builds a Command/Query, calls the handler
injected by Dishka and maps the result to a DTO. Domain errors propagate to
the central handlers in chatline.presentation.errors.

Flow:
  HTTP Request → Router → Command → Handler → Store → Repository
                                 ↓
  HTTP Response ← Router ← Result ←
"""

from logging import getLogger
from typing import Annotated, Any, Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from chatline.application.commands.conversations import (
    AddParticipantsCommand,
    AddParticipantsHandler,
    CreateConversationCommand,
    CreateConversationHandler,
    DeleteConversationCommand,
    DeleteConversationHandler,
    GetOrCreateDirectCommand,
    GetOrCreateDirectHandler,
    RemoveParticipantCommand,
    RemoveParticipantHandler,
    UpdateConversationCommand,
    UpdateConversationHandler,
)
from chatline.application.commands.messages import MarkAllReadCommand, MarkAllReadHandler
from chatline.application.dto import (
    ConversationDTO,
    ConversationListDTO,
    MessageDTO,
    ParticipantDTO,
)
from chatline.application.queries.conversations import (
    GetConversationHandler,
    GetConversationQuery,
    ListConversationsHandler,
    ListConversationsQuery,
)
from chatline.application.queries.messages import GetUnreadCountHandler, GetUnreadCountQuery
from chatline.config.settings import ChatConfig
from chatline.domain.entities.conversation import ConversationType
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.presentation.dependencies.auth import get_current_user
from chatline.presentation.dependencies.ids import parse_conversation_id, parse_user_id

logger = getLogger(__name__)

router = APIRouter(prefix="/conversations", tags=["conversations"])

# At least one non-whitespace character, matching what UserId accepts
UserIdField = Annotated[str, Field(min_length=1, max_length=128, pattern=r"\S")]


# ==================== REQUEST/RESPONSE MODELS ====================


class CreateConversationRequest(BaseModel):
    """Request body for creating a conversation."""

    type: ConversationType = ConversationType.DIRECT
    participant_ids: list[UserIdField]
    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_private: bool = True
    settings: dict[str, Any] = Field(default_factory=dict)


class UpdateConversationRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    settings: Optional[dict[str, Any]] = None


class AddParticipantsRequest(BaseModel):
    user_ids: list[UserIdField] = Field(min_length=1)


class DirectConversationRequest(BaseModel):
    user_id: UserIdField


class SuccessResponse(BaseModel):
    success: bool


class UnreadCountResponse(BaseModel):
    conversation_id: str
    unread_count: int


class MarkAllReadResponse(BaseModel):
    conversation_id: str
    marked: int


# ==================== ENDPOINTS ====================


@router.post("", response_model=ConversationDTO, status_code=status.HTTP_201_CREATED)
@inject
async def create_conversation(
    body: CreateConversationRequest,
    handler: FromDishka[CreateConversationHandler],
    current_user: ChatParticipant = Depends(get_current_user),
):
    """Start a direct chat with one user, or a group chat with several."""
    conversation = await handler.execute(
        CreateConversationCommand(
            creator=current_user,
            type=body.type,
            participant_ids=tuple(UserId(user_id) for user_id in body.participant_ids),
            name=body.name,
            description=body.description,
            is_private=body.is_private,
            settings=body.settings,
        )
    )
    logger.info(f"[Conversation] {current_user.id} created {conversation.type.value} {conversation.id}")
    return ConversationDTO.from_entity(conversation)


@router.post("/direct", response_model=ConversationDTO)
@inject
async def get_or_create_direct(
    body: DirectConversationRequest,
    handler: FromDishka[GetOrCreateDirectHandler],
    current_user: ChatParticipant = Depends(get_current_user),
):
    """Open the direct chat with a user, starting it on first use."""
    result = await handler.execute(
        GetOrCreateDirectCommand(requester=current_user, other_user_id=UserId(body.user_id))
    )
    if result.created:
        logger.info(f"[Conversation] {current_user.id} started direct {result.conversation.id}")
    return ConversationDTO.from_entity(result.conversation)


@router.get("", response_model=ConversationListDTO)
@inject
async def list_conversations(
    handler: FromDishka[ListConversationsHandler],
    config: FromDishka[ChatConfig],
    limit: Optional[int] = Query(default=None, ge=1),
    current_user: ChatParticipant = Depends(get_current_user),
):
    """Conversations the user is active in, most recently active first."""
    summaries = await handler.execute(ListConversationsQuery(user_id=current_user.id, limit=limit))
    conversations = [
        ConversationDTO.from_entity(
            summary.conversation,
            display_name=summary.display_name,
            unread_count=summary.unread_count,
            last_message=(
                MessageDTO.from_entity(summary.last_message, config.attachment_base_url)
                if summary.last_message
                else None
            ),
        )
        for summary in summaries
    ]
    return ConversationListDTO(conversations=conversations, total=len(conversations))


@router.get("/{conversation_id}", response_model=ConversationDTO)
@inject
async def get_conversation(
    handler: FromDishka[GetConversationHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    detail = await handler.execute(
        GetConversationQuery(conversation_id=conversation_id, user_id=current_user.id)
    )
    return ConversationDTO.from_entity(
        detail.conversation,
        display_name=detail.display_name,
        unread_count=detail.unread_count,
        participants=[ParticipantDTO.from_entity(p) for p in detail.participants],
    )


@router.patch("/{conversation_id}", response_model=ConversationDTO)
@inject
async def update_conversation(
    body: UpdateConversationRequest,
    handler: FromDishka[UpdateConversationHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    conversation = await handler.execute(
        UpdateConversationCommand(
            conversation_id=conversation_id,
            requester_id=current_user.id,
            name=body.name,
            description=body.description,
            settings=body.settings,
        )
    )
    return ConversationDTO.from_entity(conversation)


@router.delete("/{conversation_id}", response_model=SuccessResponse)
@inject
async def delete_conversation(
    handler: FromDishka[DeleteConversationHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    await handler.execute(
        DeleteConversationCommand(conversation_id=conversation_id, requester_id=current_user.id)
    )
    return SuccessResponse(success=True)


# ==================== MEMBERSHIP ====================


@router.post("/{conversation_id}/participants", response_model=ConversationDTO)
@inject
async def add_participants(
    body: AddParticipantsRequest,
    handler: FromDishka[AddParticipantsHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    conversation = await handler.execute(
        AddParticipantsCommand(
            conversation_id=conversation_id,
            requester_id=current_user.id,
            user_ids=tuple(UserId(user_id) for user_id in body.user_ids),
        )
    )
    return ConversationDTO.from_entity(conversation)


@router.delete("/{conversation_id}/participants/{user_id}", response_model=SuccessResponse)
@inject
async def remove_participant(
    handler: FromDishka[RemoveParticipantHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    target_user_id: UserId = Depends(parse_user_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    await handler.execute(
        RemoveParticipantCommand(
            conversation_id=conversation_id,
            requester_id=current_user.id,
            target_user_id=target_user_id,
        )
    )
    return SuccessResponse(success=True)


@router.post("/{conversation_id}/leave", response_model=SuccessResponse)
@inject
async def leave_conversation(
    handler: FromDishka[RemoveParticipantHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    await handler.execute(
        RemoveParticipantCommand(
            conversation_id=conversation_id,
            requester_id=current_user.id,
            target_user_id=current_user.id,
        )
    )
    return SuccessResponse(success=True)


# ==================== READ STATE ====================


@router.get("/{conversation_id}/unread-count", response_model=UnreadCountResponse)
@inject
async def unread_count(
    handler: FromDishka[GetUnreadCountHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    count = await handler.execute(
        GetUnreadCountQuery(conversation_id=conversation_id, user_id=current_user.id)
    )
    return UnreadCountResponse(conversation_id=conversation_id.value, unread_count=count)


@router.post("/{conversation_id}/read", response_model=MarkAllReadResponse)
@inject
async def mark_all_read(
    handler: FromDishka[MarkAllReadHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    marked = await handler.execute(
        MarkAllReadCommand(conversation_id=conversation_id, reader_id=current_user.id)
    )
    return MarkAllReadResponse(conversation_id=conversation_id.value, marked=marked)
