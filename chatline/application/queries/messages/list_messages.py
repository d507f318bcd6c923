"""List Messages Query - paginated, newest first, optional content filter."""

from dataclasses import dataclass
from typing import Optional

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.ports.repositories import MessagePage
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.message_store import MessageStore


@dataclass(frozen=True)
class ListMessagesQuery(Query[MessagePage]):
    conversation_id: ConversationId
    user_id: UserId
    page: int = 1
    per_page: Optional[int] = None
    search: Optional[str] = None


class ListMessagesHandler(QueryHandler[MessagePage]):
    def __init__(self, messages: MessageStore):
        self._messages = messages

    async def execute(self, query: ListMessagesQuery) -> MessagePage:
        return await self._messages.list_for_conversation(
            query.conversation_id,
            query.user_id,
            page=query.page,
            page_size=query.per_page,
            search_term=query.search,
        )
