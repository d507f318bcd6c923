"""Get Read Receipts Query - who has read a message, oldest first."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.message_store import MessageStore
from chatline.services.read_receipt_tracker import ReadReceiptTracker


@dataclass(frozen=True)
class GetReadReceiptsQuery(Query[list[ReadReceipt]]):
    conversation_id: ConversationId
    message_id: MessageId
    user_id: UserId


class GetReadReceiptsHandler(QueryHandler[list[ReadReceipt]]):
    def __init__(self, messages: MessageStore, receipts: ReadReceiptTracker):
        self._messages = messages
        self._receipts = receipts

    async def execute(self, query: GetReadReceiptsQuery) -> list[ReadReceipt]:
        message = await self._messages.get(
            query.conversation_id, query.message_id, query.user_id
        )
        return await self._receipts.readers(message.id)
