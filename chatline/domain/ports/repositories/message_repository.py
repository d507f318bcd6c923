"""
Message Repository Port - Interface for message persistence.
Implementation: chatline/infrastructure/persistence/prisma_message_repository.py
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from math import ceil
from typing import Optional

from chatline.domain.entities.message import Message
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId


@dataclass
class MessagePage:
    items: list[Message]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, ceil(self.total / self.per_page)) if self.per_page else 1


class MessageRepository(ABC):
    @abstractmethod
    async def get_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Return the message, tombstoned or not."""
        ...

    @abstractmethod
    async def save(self, message: Message) -> None: ...

    @abstractmethod
    async def delete(self, message_id: MessageId) -> bool: ...

    @abstractmethod
    async def list_page(
        self,
        conversation_id: ConversationId,
        page: int,
        per_page: int,
        term: Optional[str] = None,
    ) -> MessagePage:
        """Non-deleted messages newest first; ``term`` is a case-insensitive substring."""
        ...

    @abstractmethod
    async def search(
        self, conversation_ids: list[ConversationId], term: str, limit: int
    ) -> list[Message]: ...

    @abstractmethod
    async def unread_candidates(
        self,
        conversation_id: ConversationId,
        reader_id: UserId,
        until: Optional[datetime] = None,
    ) -> list[MessageId]:
        """Ids of live messages authored by someone other than ``reader_id``."""
        ...

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int: ...
