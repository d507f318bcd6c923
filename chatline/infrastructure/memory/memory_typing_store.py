"""In-memory TypingStore with lazy expiry against the injected clock."""

import threading
from datetime import datetime, timedelta

from chatline.domain.ports.typing_store import TypingStore
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.utils.clock import Clock, utc_now


class InMemoryTypingStore(TypingStore):
    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._flags: dict[tuple[ConversationId, UserId], datetime] = {}
        self._lock = threading.Lock()

    async def set_typing(
        self, conversation_id: ConversationId, user_id: UserId, ttl_seconds: int
    ) -> None:
        with self._lock:
            self._flags[(conversation_id, user_id)] = self._clock() + timedelta(
                seconds=ttl_seconds
            )

    async def clear_typing(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> None:
        with self._lock:
            self._flags.pop((conversation_id, user_id), None)

    async def typing_users(self, conversation_id: ConversationId) -> set[UserId]:
        now = self._clock()
        with self._lock:
            return {
                user_id
                for (owner, user_id), expires_at in self._flags.items()
                if owner == conversation_id and expires_at > now
            }
