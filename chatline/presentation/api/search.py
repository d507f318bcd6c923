"""Search API Router - message content and conversation names."""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from chatline.application.dto import ConversationDTO, MessageDTO
from chatline.application.queries.messages import SearchHandler, SearchQuery
from chatline.config.settings import ChatConfig
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.presentation.dependencies.auth import get_current_user

router = APIRouter(prefix="/search", tags=["search"])


class SearchResponse(BaseModel):
    messages: list[MessageDTO]
    conversations: list[ConversationDTO]


@router.get("", response_model=SearchResponse)
@inject
async def search(
    handler: FromDishka[SearchHandler],
    config: FromDishka[ChatConfig],
    q: str = Query(default=""),
    current_user: ChatParticipant = Depends(get_current_user),
):
    """Searches the conversations the user is active in; terms need two characters."""
    results = await handler.execute(SearchQuery(user_id=current_user.id, term=q))
    return SearchResponse(
        messages=[MessageDTO.from_entity(m, config.attachment_base_url) for m in results.messages],
        conversations=[ConversationDTO.from_entity(c) for c in results.conversations],
    )
