"""
Channel authorizer - decides who may listen on which topic.

    conversation.{id}  active participant of the conversation
    user.{id}          only that user
    presence           anyone, while presence is enabled; answers with a
                       public descriptor instead of True
    typing.{id}        typing enabled and active participant

Anything else, including malformed ids, is denied.
"""

import logging
from typing import Any, Union

from chatline.config.settings import ChatConfig
from chatline.domain.events import PRESENCE_TOPIC
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.services.conversation_store import ConversationStore
from chatline.utils.clock import Clock, utc_now
from chatline.utils.formatting import gravatar_url

logger = logging.getLogger(__name__)

Authorization = Union[bool, dict[str, Any]]


class ChannelAuthorizer:
    def __init__(
        self,
        config: ChatConfig,
        conversations: ConversationStore,
        clock: Clock = utc_now,
    ):
        self._config = config
        self._conversations = conversations
        self._clock = clock

    def presence_descriptor(self, user: ChatParticipant) -> dict[str, Any]:
        return {
            "id": user.id.value,
            "name": user.display_name,
            "avatar": user.avatar or gravatar_url(user.email),
            "joined_at": self._clock().isoformat(),
        }

    async def _is_member(self, raw_id: str, user: ChatParticipant) -> bool:
        try:
            conversation_id = ConversationId(raw_id)
        except ValueError:
            return False
        return await self._conversations.is_active_participant(conversation_id, user.id)

    async def authorize(self, topic: str, user: ChatParticipant) -> Authorization:
        if topic == PRESENCE_TOPIC:
            if not self._config.presence_enabled:
                return False
            return self.presence_descriptor(user)

        kind, _, raw_id = topic.partition(".")
        if not raw_id:
            return False

        if kind == "conversation":
            return await self._is_member(raw_id, user)
        if kind == "user":
            return raw_id == user.id.value
        if kind == "typing":
            return self._config.typing_enabled and await self._is_member(raw_id, user)

        logger.debug(f"[Channel] Unknown topic {topic!r} requested by {user.id}")
        return False
