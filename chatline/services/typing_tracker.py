"""
Typing tracker - short-lived "is typing" flags per (conversation, user).

Clients re-assert ``True`` while composing and send ``False`` on idle, send or
cancel. If they vanish instead, the flag expires after ``typing_ttl``.
Expired entries are ignored on read, never swept.
"""

import logging
from typing import Optional

from chatline.config.settings import ChatConfig
from chatline.domain.exceptions import FeatureDisabledError
from chatline.domain.ports.typing_store import TypingStore
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class TypingTracker:
    def __init__(self, config: ChatConfig, store: TypingStore):
        self._config = config
        self._store = store

    async def set_typing(
        self, conversation_id: ConversationId, user_id: UserId, is_typing: bool
    ) -> None:
        if not self._config.typing_enabled:
            raise FeatureDisabledError("typing")
        if is_typing:
            await self._store.set_typing(conversation_id, user_id, self._config.typing_ttl)
        else:
            await self._store.clear_typing(conversation_id, user_id)
        logger.debug(f"[Typing] {user_id} in {conversation_id}: {is_typing}")

    async def typing_users(
        self,
        conversation_id: ConversationId,
        exclude_user_id: Optional[UserId] = None,
    ) -> set[UserId]:
        if not self._config.typing_enabled:
            return set()
        users = await self._store.typing_users(conversation_id)
        users.discard(exclude_user_id)
        return users
