"""
User Repository Port - profile directory used for display names and descriptors.
Implementation: chatline/infrastructure/persistence/prisma_user_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[ChatParticipant]: ...

    @abstractmethod
    async def save(self, participant: ChatParticipant) -> None: ...
