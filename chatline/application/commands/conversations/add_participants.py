"""Add Participants Command - add new members or rejoin former ones."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.entities.conversation import Conversation
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore


@dataclass(frozen=True)
class AddParticipantsCommand(Command[Conversation]):
    conversation_id: ConversationId
    requester_id: UserId
    user_ids: tuple[UserId, ...]


class AddParticipantsHandler(CommandHandler[Conversation]):
    def __init__(self, conversations: ConversationStore):
        self._conversations = conversations

    async def execute(self, command: AddParticipantsCommand) -> Conversation:
        return await self._conversations.add_participants(
            command.conversation_id, command.requester_id, list(command.user_ids)
        )
