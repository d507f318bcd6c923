"""Get Unread Count Query."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.read_receipt_tracker import ReadReceiptTracker


@dataclass(frozen=True)
class GetUnreadCountQuery(Query[int]):
    conversation_id: ConversationId
    user_id: UserId


class GetUnreadCountHandler(QueryHandler[int]):
    def __init__(self, receipts: ReadReceiptTracker):
        self._receipts = receipts

    async def execute(self, query: GetUnreadCountQuery) -> int:
        return await self._receipts.unread_count(query.conversation_id, query.user_id)
