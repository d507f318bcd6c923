"""In-memory ParticipantRepository for tests and STORAGE_BACKEND=memory."""

from copy import deepcopy
from datetime import datetime
from typing import Optional

from chatline.domain.entities.participant import Participant, ParticipantRole
from chatline.domain.ports.repositories import ParticipantRepository
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.infrastructure.memory.database import InMemoryDatabase


class InMemoryParticipantRepository(ParticipantRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Participant]:
        with self._db.lock:
            record = self._db.participants.get((conversation_id.value, user_id.value))
            return deepcopy(record) if record else None

    async def list_for_conversation(
        self, conversation_id: ConversationId, active_only: bool = True
    ) -> list[Participant]:
        with self._db.lock:
            rows = [
                participant
                for (owner, _), participant in self._db.participants.items()
                if owner == conversation_id.value
                and (participant.is_active or not active_only)
            ]
            rows.sort(key=lambda p: p.joined_at)
            return deepcopy(rows)

    async def add_or_rejoin(
        self,
        conversation_id: ConversationId,
        user_id: UserId,
        role: ParticipantRole,
        now: datetime,
    ) -> Participant:
        key = (conversation_id.value, user_id.value)
        with self._db.lock:
            record = self._db.participants.get(key)
            if record is None:
                record = Participant(
                    conversation_id=conversation_id,
                    user_id=user_id,
                    role=role,
                    joined_at=now,
                )
                self._db.participants[key] = record
            elif not record.is_active:
                record.rejoin(now)
            return deepcopy(record)

    async def save(self, participant: Participant) -> None:
        key = (participant.conversation_id.value, participant.user_id.value)
        with self._db.lock:
            self._db.participants[key] = deepcopy(participant)
