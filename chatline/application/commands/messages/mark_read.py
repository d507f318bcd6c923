"""
Mark Read Command.

The receipt is always recorded; the MessageRead broadcast is skipped while
read receipts are toggled off.
"""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.config.settings import ChatConfig
from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.domain.events import MessageRead, conversation_topic
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.event_broadcaster import EventBroadcaster
from chatline.services.read_receipt_tracker import ReadReceiptTracker


@dataclass(frozen=True)
class MarkReadCommand(Command[ReadReceipt]):
    conversation_id: ConversationId
    message_id: MessageId
    reader_id: UserId


class MarkReadHandler(CommandHandler[ReadReceipt]):
    def __init__(
        self,
        config: ChatConfig,
        receipts: ReadReceiptTracker,
        broadcaster: EventBroadcaster,
    ):
        self._config = config
        self._receipts = receipts
        self._broadcaster = broadcaster

    async def execute(self, command: MarkReadCommand) -> ReadReceipt:
        receipt = await self._receipts.mark_read(
            command.message_id, command.reader_id, command.conversation_id
        )
        if self._config.read_receipts_enabled:
            await self._broadcaster.publish(
                MessageRead(
                    message_id=receipt.message_id,
                    conversation_id=command.conversation_id,
                    reader_id=receipt.user_id,
                    read_at=receipt.read_at,
                ),
                [conversation_topic(command.conversation_id)],
                originator_id=command.reader_id,
            )
        return receipt
