"""
Set Typing Command.

Only active participants may signal typing. The UserTyping event goes out on
typing.{id} and skips the typist.
"""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.events import UserTyping, typing_topic
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.services.conversation_store import ConversationStore
from chatline.services.event_broadcaster import EventBroadcaster
from chatline.services.typing_tracker import TypingTracker


@dataclass(frozen=True)
class SetTypingCommand(Command[None]):
    conversation_id: ConversationId
    user: ChatParticipant
    is_typing: bool


class SetTypingHandler(CommandHandler[None]):
    def __init__(
        self,
        conversations: ConversationStore,
        typing: TypingTracker,
        broadcaster: EventBroadcaster,
    ):
        self._conversations = conversations
        self._typing = typing
        self._broadcaster = broadcaster

    async def execute(self, command: SetTypingCommand) -> None:
        await self._conversations.require_active_participant(
            command.conversation_id, command.user.id
        )
        await self._typing.set_typing(
            command.conversation_id, command.user.id, command.is_typing
        )
        await self._broadcaster.publish(
            UserTyping(
                user_id=command.user.id,
                conversation_id=command.conversation_id,
                is_typing=command.is_typing,
                user_name=command.user.display_name,
            ),
            [typing_topic(command.conversation_id)],
            originator_id=command.user.id,
        )
