"""
Remove Participant Command.

Leaving is removal of oneself; the broadcaster unsubscribes the user from
the conversation topics so no further events reach them.
"""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.events import conversation_topic, typing_topic
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore
from chatline.services.event_broadcaster import EventBroadcaster


@dataclass(frozen=True)
class RemoveParticipantCommand(Command[None]):
    conversation_id: ConversationId
    requester_id: UserId
    target_user_id: UserId


class RemoveParticipantHandler(CommandHandler[None]):
    def __init__(self, conversations: ConversationStore, broadcaster: EventBroadcaster):
        self._conversations = conversations
        self._broadcaster = broadcaster

    async def execute(self, command: RemoveParticipantCommand) -> None:
        await self._conversations.remove_participant(
            command.conversation_id, command.requester_id, command.target_user_id
        )
        self._broadcaster.unsubscribe(
            conversation_topic(command.conversation_id), command.target_user_id
        )
        self._broadcaster.unsubscribe(
            typing_topic(command.conversation_id), command.target_user_id
        )
