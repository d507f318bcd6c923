"""Get User Stats Query - totals shown on the chat dashboard."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore
from chatline.services.message_store import MessageStore
from chatline.services.read_receipt_tracker import ReadReceiptTracker


@dataclass
class UserStats:
    total_conversations: int
    unread_messages: int
    messages_sent: int


@dataclass(frozen=True)
class GetUserStatsQuery(Query[UserStats]):
    user_id: UserId


class GetUserStatsHandler(QueryHandler[UserStats]):
    def __init__(
        self,
        conversations: ConversationStore,
        messages: MessageStore,
        receipts: ReadReceiptTracker,
    ):
        self._conversations = conversations
        self._messages = messages
        self._receipts = receipts

    async def execute(self, query: GetUserStatsQuery) -> UserStats:
        conversation_ids = await self._conversations.active_conversation_ids(query.user_id)
        return UserStats(
            total_conversations=len(conversation_ids),
            unread_messages=await self._receipts.total_unread(query.user_id),
            messages_sent=await self._messages.count_sent(query.user_id),
        )
