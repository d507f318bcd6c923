"""Stats API Router - per-user chat statistics."""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends

from chatline.application.dto import UserStatsDTO
from chatline.application.queries.conversations import GetUserStatsHandler, GetUserStatsQuery
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.presentation.dependencies.auth import get_current_user

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=UserStatsDTO)
@inject
async def user_stats(
    handler: FromDishka[GetUserStatsHandler],
    current_user: ChatParticipant = Depends(get_current_user),
):
    stats = await handler.execute(GetUserStatsQuery(user_id=current_user.id))
    return UserStatsDTO(
        total_conversations=stats.total_conversations,
        unread_messages=stats.unread_messages,
        messages_sent=stats.messages_sent,
    )
