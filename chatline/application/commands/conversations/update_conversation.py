"""Update Conversation Command - name, description and settings patch."""

from dataclasses import dataclass
from typing import Any, Optional

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.entities.conversation import Conversation
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore


@dataclass(frozen=True)
class UpdateConversationCommand(Command[Conversation]):
    conversation_id: ConversationId
    requester_id: UserId
    name: Optional[str] = None
    description: Optional[str] = None
    settings: Optional[dict[str, Any]] = None


class UpdateConversationHandler(CommandHandler[Conversation]):
    def __init__(self, conversations: ConversationStore):
        self._conversations = conversations

    async def execute(self, command: UpdateConversationCommand) -> Conversation:
        return await self._conversations.update_settings(
            command.conversation_id,
            command.requester_id,
            name=command.name,
            description=command.description,
            settings=command.settings,
        )
