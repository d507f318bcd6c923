"""
Participant Repository Port - one membership row per (conversation, user).
Implementation: chatline/infrastructure/persistence/prisma_participant_repository.py
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from chatline.domain.entities.participant import Participant, ParticipantRole
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId


class ParticipantRepository(ABC):
    @abstractmethod
    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Participant]: ...

    @abstractmethod
    async def list_for_conversation(
        self, conversation_id: ConversationId, active_only: bool = True
    ) -> list[Participant]: ...

    @abstractmethod
    async def add_or_rejoin(
        self,
        conversation_id: ConversationId,
        user_id: UserId,
        role: ParticipantRole,
        now: datetime,
    ) -> Participant:
        """
        Upsert keyed on (conversation_id, user_id).

        Absent: insert with ``role``. Left: clear ``left_at`` and reset
        ``joined_at``. Active: untouched.
        """
        ...

    @abstractmethod
    async def save(self, participant: Participant) -> None: ...
