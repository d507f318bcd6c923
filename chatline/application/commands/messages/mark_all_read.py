"""Mark All Read Command - returns the number of receipts created."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.read_receipt_tracker import ReadReceiptTracker


@dataclass(frozen=True)
class MarkAllReadCommand(Command[int]):
    conversation_id: ConversationId
    reader_id: UserId


class MarkAllReadHandler(CommandHandler[int]):
    def __init__(self, receipts: ReadReceiptTracker):
        self._receipts = receipts

    async def execute(self, command: MarkAllReadCommand) -> int:
        return await self._receipts.mark_all_read(command.conversation_id, command.reader_id)
