"""
Realtime API Router - typing indicators and presence.

Presence is heartbeat-based: clients call POST /presence/online periodically
(the WebSocket does it on ping) and fall offline once the TTL lapses.
"""

from typing import Annotated

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from chatline.application.commands.realtime import (
    SetOfflineCommand,
    SetOfflineHandler,
    SetOnlineCommand,
    SetOnlineHandler,
    SetTypingCommand,
    SetTypingHandler,
    TouchLastSeenCommand,
    TouchLastSeenHandler,
)
from chatline.application.dto import OnlineUsersDTO, PresenceDTO, TypingUsersDTO
from chatline.application.queries.realtime import (
    CheckPresenceHandler,
    CheckPresenceQuery,
    GetOnlineUsersHandler,
    GetOnlineUsersQuery,
    GetPresenceHandler,
    GetPresenceQuery,
    GetTypingUsersHandler,
    GetTypingUsersQuery,
)
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.presentation.dependencies.auth import get_current_user
from chatline.presentation.dependencies.ids import parse_conversation_id, parse_user_id

router = APIRouter(tags=["realtime"])


class TypingRequest(BaseModel):
    is_typing: bool


class PresenceCheckRequest(BaseModel):
    user_ids: list[Annotated[str, Field(min_length=1, max_length=128, pattern=r"\S")]] = Field(
        max_length=500
    )


class PresenceCheckResponse(BaseModel):
    statuses: dict[str, bool]


# ==================== TYPING ====================


@router.post("/conversations/{conversation_id}/typing", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def set_typing(
    body: TypingRequest,
    handler: FromDishka[SetTypingHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    await handler.execute(
        SetTypingCommand(conversation_id=conversation_id, user=current_user, is_typing=body.is_typing)
    )


@router.get("/conversations/{conversation_id}/typing", response_model=TypingUsersDTO)
@inject
async def typing_users(
    handler: FromDishka[GetTypingUsersHandler],
    conversation_id: ConversationId = Depends(parse_conversation_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    users = await handler.execute(
        GetTypingUsersQuery(conversation_id=conversation_id, user_id=current_user.id)
    )
    return TypingUsersDTO(
        conversation_id=conversation_id.value,
        user_ids=sorted(user.value for user in users),
    )


# ==================== PRESENCE ====================


@router.post("/presence/online", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def set_online(
    handler: FromDishka[SetOnlineHandler],
    current_user: ChatParticipant = Depends(get_current_user),
):
    await handler.execute(SetOnlineCommand(user_id=current_user.id))


@router.post("/presence/offline", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def set_offline(
    handler: FromDishka[SetOfflineHandler],
    current_user: ChatParticipant = Depends(get_current_user),
):
    await handler.execute(SetOfflineCommand(user_id=current_user.id))


@router.post("/presence/last-seen", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def touch_last_seen(
    handler: FromDishka[TouchLastSeenHandler],
    current_user: ChatParticipant = Depends(get_current_user),
):
    """Record activity without announcing the user as online."""
    await handler.execute(TouchLastSeenCommand(user_id=current_user.id))


@router.get("/presence/online", response_model=OnlineUsersDTO)
@inject
async def online_users(
    handler: FromDishka[GetOnlineUsersHandler],
    current_user: ChatParticipant = Depends(get_current_user),
):
    users = await handler.execute(GetOnlineUsersQuery())
    return OnlineUsersDTO(user_ids=sorted(user.value for user in users))


@router.post("/presence/check", response_model=PresenceCheckResponse)
@inject
async def check_presence(
    body: PresenceCheckRequest,
    handler: FromDishka[CheckPresenceHandler],
    current_user: ChatParticipant = Depends(get_current_user),
):
    statuses = await handler.execute(
        CheckPresenceQuery(user_ids=tuple(UserId(user_id) for user_id in body.user_ids))
    )
    return PresenceCheckResponse(
        statuses={user_id.value: online for user_id, online in statuses.items()}
    )


@router.get("/presence/{user_id}", response_model=PresenceDTO)
@inject
async def user_presence(
    handler: FromDishka[GetPresenceHandler],
    user_id: UserId = Depends(parse_user_id),
    current_user: ChatParticipant = Depends(get_current_user),
):
    summary = await handler.execute(GetPresenceQuery(user_id=user_id))
    return PresenceDTO(
        user_id=summary.user_id.value,
        is_online=summary.is_online,
        last_seen_at=summary.last_seen_at,
    )
