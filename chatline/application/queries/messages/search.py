"""
Search Query - messages and conversations visible to the caller.

Messages are capped at 20 and conversations at 10, newest first.
"""

from dataclasses import dataclass, field

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.entities.conversation import Conversation
from chatline.domain.entities.message import Message
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore
from chatline.services.message_store import MessageStore


@dataclass
class SearchResults:
    messages: list[Message] = field(default_factory=list)
    conversations: list[Conversation] = field(default_factory=list)


@dataclass(frozen=True)
class SearchQuery(Query[SearchResults]):
    user_id: UserId
    term: str
    message_limit: int = 20
    conversation_limit: int = 10


class SearchHandler(QueryHandler[SearchResults]):
    def __init__(self, conversations: ConversationStore, messages: MessageStore):
        self._conversations = conversations
        self._messages = messages

    async def execute(self, query: SearchQuery) -> SearchResults:
        # Validates the term and the search toggle before touching conversations
        messages = await self._messages.search(
            query.user_id, query.term, query.message_limit
        )
        conversations = await self._conversations.search_for_user(
            query.user_id, query.term.strip(), query.conversation_limit
        )
        return SearchResults(messages=messages, conversations=conversations)
