"""Get Conversation Query - conversation plus its active participants."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.entities.conversation import Conversation
from chatline.domain.entities.participant import Participant
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore
from chatline.services.read_receipt_tracker import ReadReceiptTracker


@dataclass
class ConversationDetail:
    conversation: Conversation
    participants: list[Participant]
    display_name: str
    unread_count: int


@dataclass(frozen=True)
class GetConversationQuery(Query[ConversationDetail]):
    conversation_id: ConversationId
    user_id: UserId


class GetConversationHandler(QueryHandler[ConversationDetail]):
    def __init__(self, conversations: ConversationStore, receipts: ReadReceiptTracker):
        self._conversations = conversations
        self._receipts = receipts

    async def execute(self, query: GetConversationQuery) -> ConversationDetail:
        conversation, participants = await self._conversations.get(
            query.conversation_id, query.user_id
        )
        return ConversationDetail(
            conversation=conversation,
            participants=participants,
            display_name=await self._conversations.display_name_for(
                conversation, query.user_id
            ),
            unread_count=await self._receipts.unread_count(
                query.conversation_id, query.user_id
            ),
        )
