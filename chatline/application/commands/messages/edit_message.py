"""Edit Message Command - author only, text only, inside the edit window."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.entities.message import Message
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.message_store import MessageStore


@dataclass(frozen=True)
class EditMessageCommand(Command[Message]):
    conversation_id: ConversationId
    message_id: MessageId
    requester_id: UserId
    content: str


class EditMessageHandler(CommandHandler[Message]):
    def __init__(self, messages: MessageStore):
        self._messages = messages

    async def execute(self, command: EditMessageCommand) -> Message:
        # Resolves NotFound for a message outside the addressed conversation
        await self._messages.get(
            command.conversation_id, command.message_id, command.requester_id
        )
        return await self._messages.edit(
            command.message_id, command.requester_id, command.content
        )
