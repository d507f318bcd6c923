"""Delete Message Command - soft or hard per configuration."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.message_store import MessageStore


@dataclass(frozen=True)
class DeleteMessageCommand(Command[None]):
    conversation_id: ConversationId
    message_id: MessageId
    requester_id: UserId


class DeleteMessageHandler(CommandHandler[None]):
    def __init__(self, messages: MessageStore):
        self._messages = messages

    async def execute(self, command: DeleteMessageCommand) -> None:
        # Resolves NotFound for a message outside the addressed conversation
        await self._messages.get(
            command.conversation_id, command.message_id, command.requester_id
        )
        await self._messages.delete(command.message_id, command.requester_id)
