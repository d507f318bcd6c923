"""Create Conversation Command."""

from dataclasses import dataclass, field
from typing import Any, Optional

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.entities.conversation import Conversation, ConversationType
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore


@dataclass(frozen=True)
class CreateConversationCommand(Command[Conversation]):
    creator: ChatParticipant
    type: ConversationType
    participant_ids: tuple[UserId, ...]
    name: Optional[str] = None
    description: Optional[str] = None
    is_private: bool = True
    settings: dict[str, Any] = field(default_factory=dict)


class CreateConversationHandler(CommandHandler[Conversation]):
    def __init__(self, conversations: ConversationStore):
        self._conversations = conversations

    async def execute(self, command: CreateConversationCommand) -> Conversation:
        return await self._conversations.create(
            creator_id=command.creator.id,
            type=command.type,
            participant_ids=list(command.participant_ids),
            name=command.name,
            description=command.description,
            is_private=command.is_private,
            settings=command.settings,
        )
