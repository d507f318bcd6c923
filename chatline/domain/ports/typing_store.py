"""
Typing Store Port - short-lived (conversation, user) typing flags.
Implementations:
- chatline/infrastructure/cache/redis_typing_store.py
- chatline/infrastructure/memory/memory_typing_store.py
"""

from abc import ABC, abstractmethod

from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId


class TypingStore(ABC):
    @abstractmethod
    async def set_typing(
        self, conversation_id: ConversationId, user_id: UserId, ttl_seconds: int
    ) -> None: ...

    @abstractmethod
    async def clear_typing(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> None: ...

    @abstractmethod
    async def typing_users(self, conversation_id: ConversationId) -> set[UserId]:
        """Users whose flag exists and has not expired."""
        ...
