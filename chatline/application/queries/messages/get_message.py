"""Get Message Query - one message with its read count."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.entities.message import Message
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.message_store import MessageStore
from chatline.services.read_receipt_tracker import ReadReceiptTracker


@dataclass
class MessageDetail:
    message: Message
    read_count: int


@dataclass(frozen=True)
class GetMessageQuery(Query[MessageDetail]):
    conversation_id: ConversationId
    message_id: MessageId
    user_id: UserId


class GetMessageHandler(QueryHandler[MessageDetail]):
    def __init__(self, messages: MessageStore, receipts: ReadReceiptTracker):
        self._messages = messages
        self._receipts = receipts

    async def execute(self, query: GetMessageQuery) -> MessageDetail:
        message = await self._messages.get(
            query.conversation_id, query.message_id, query.user_id
        )
        return MessageDetail(
            message=message, read_count=await self._receipts.read_count(message.id)
        )
