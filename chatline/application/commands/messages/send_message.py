"""
Send Message Command.

Flow:
  MessageStore.append → clear the author's typing flag → publish MessageSent
  on conversation.{id} to everyone but the author.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.config.settings import ChatConfig
from chatline.domain.entities.message import Message, MessageType
from chatline.domain.events import MessageSent, conversation_topic
from chatline.domain.value_objects.attachment import Attachment
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.services.event_broadcaster import EventBroadcaster
from chatline.services.message_store import MessageStore
from chatline.services.typing_tracker import TypingTracker


@dataclass(frozen=True)
class SendMessageCommand(Command[Message]):
    conversation_id: ConversationId
    author: ChatParticipant
    content: Optional[str] = None
    type: Optional[MessageType] = None
    reply_to_id: Optional[MessageId] = None
    attachment: Optional[Attachment] = None
    metadata: dict[str, Any] = field(default_factory=dict)


class SendMessageHandler(CommandHandler[Message]):
    def __init__(
        self,
        config: ChatConfig,
        messages: MessageStore,
        typing: TypingTracker,
        broadcaster: EventBroadcaster,
    ):
        self._config = config
        self._messages = messages
        self._typing = typing
        self._broadcaster = broadcaster

    async def execute(self, command: SendMessageCommand) -> Message:
        message = await self._messages.append(
            command.conversation_id,
            command.author.id,
            content=command.content,
            type=command.type,
            reply_to_id=command.reply_to_id,
            attachment=command.attachment,
            metadata=command.metadata,
        )

        if self._config.typing_enabled:
            await self._typing.set_typing(command.conversation_id, command.author.id, False)

        await self._broadcaster.publish(
            MessageSent(message, attachment_base_url=self._config.attachment_base_url),
            [conversation_topic(command.conversation_id)],
            originator_id=command.author.id,
        )
        return message
