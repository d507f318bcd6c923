"""
Conversation Repository Port - Interface for conversation persistence.
Implementation: chatline/infrastructure/persistence/prisma_conversation_repository.py
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from chatline.domain.entities.conversation import Conversation
from chatline.domain.entities.participant import Participant
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        """Return the conversation, tombstoned or not."""
        ...

    @abstractmethod
    async def get_by_direct_key(self, direct_key: str) -> Optional[Conversation]: ...

    @abstractmethod
    async def create(
        self, conversation: Conversation, participants: list[Participant]
    ) -> None:
        """
        Insert the conversation and its participant rows atomically.

        Raises ConflictError when ``direct_key`` is already taken.
        """
        ...

    @abstractmethod
    async def save(self, conversation: Conversation) -> None:
        """
        Write the editable fields: name, description, privacy, settings and
        ``updated_at``. A soft-deleted row is left as it is.
        """
        ...

    @abstractmethod
    async def touch(self, conversation_id: ConversationId, now: datetime) -> None:
        """Set ``updated_at`` only; no-op on a soft-deleted row."""
        ...

    @abstractmethod
    async def soft_delete(self, conversation_id: ConversationId, now: datetime) -> None:
        """Set ``deleted_at`` and release the ``direct_key``."""
        ...

    @abstractmethod
    async def list_for_user(
        self, user_id: UserId, limit: Optional[int] = None
    ) -> list[Conversation]:
        """Live conversations with an active row for ``user_id``, newest activity first."""
        ...

    @abstractmethod
    async def search_for_user(
        self, user_id: UserId, term: str, limit: int
    ) -> list[Conversation]: ...
