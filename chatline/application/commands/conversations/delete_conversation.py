"""Delete Conversation Command - soft delete by the creator."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore


@dataclass(frozen=True)
class DeleteConversationCommand(Command[None]):
    conversation_id: ConversationId
    requester_id: UserId


class DeleteConversationHandler(CommandHandler[None]):
    def __init__(self, conversations: ConversationStore):
        self._conversations = conversations

    async def execute(self, command: DeleteConversationCommand) -> None:
        await self._conversations.delete(command.conversation_id, command.requester_id)
