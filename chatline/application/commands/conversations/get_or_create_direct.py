"""
Get Or Create Direct Command.

Idempotent: calling it again for the same pair returns the same conversation.
"""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.entities.conversation import Conversation
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore


@dataclass(frozen=True)
class DirectConversationResult:
    conversation: Conversation
    created: bool


@dataclass(frozen=True)
class GetOrCreateDirectCommand(Command[DirectConversationResult]):
    requester: ChatParticipant
    other_user_id: UserId


class GetOrCreateDirectHandler(CommandHandler[DirectConversationResult]):
    def __init__(self, conversations: ConversationStore):
        self._conversations = conversations

    async def execute(self, command: GetOrCreateDirectCommand) -> DirectConversationResult:
        conversation, created = await self._conversations.get_or_create_direct(
            command.requester.id, command.other_user_id
        )
        return DirectConversationResult(conversation=conversation, created=created)
