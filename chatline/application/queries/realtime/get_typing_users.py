"""Get Typing Users Query - everyone typing in a conversation except the caller."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore
from chatline.services.typing_tracker import TypingTracker


@dataclass(frozen=True)
class GetTypingUsersQuery(Query[set[UserId]]):
    conversation_id: ConversationId
    user_id: UserId


class GetTypingUsersHandler(QueryHandler[set[UserId]]):
    def __init__(self, conversations: ConversationStore, typing: TypingTracker):
        self._conversations = conversations
        self._typing = typing

    async def execute(self, query: GetTypingUsersQuery) -> set[UserId]:
        await self._conversations.require_active_participant(
            query.conversation_id, query.user_id
        )
        return await self._typing.typing_users(
            query.conversation_id, exclude_user_id=query.user_id
        )
