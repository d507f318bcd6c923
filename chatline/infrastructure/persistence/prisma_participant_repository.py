"""
Prisma Participant Repository Implementation.

Rejoin is two statements that are each safe under concurrency: an upsert on
the (conversation_id, user_id) unique key whose update branch is empty, then
an update_many that only touches the row if it is currently left.
"""

from datetime import datetime
from typing import Optional

from prisma import Prisma
from prisma.models import Participant as PrismaParticipant

from chatline.domain.entities.participant import Participant, ParticipantRole
from chatline.domain.ports.repositories import ParticipantRepository
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId


def _key(conversation_id: ConversationId, user_id: UserId) -> dict:
    return {
        "conversation_id_user_id": {
            "conversation_id": conversation_id.value,
            "user_id": user_id.value,
        }
    }


class PrismaParticipantRepository(ParticipantRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaParticipant) -> Participant:
        return Participant(
            conversation_id=ConversationId(record.conversation_id),
            user_id=UserId(record.user_id),
            role=ParticipantRole(record.role),
            joined_at=record.joined_at,
            left_at=record.left_at,
        )

    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Participant]:
        record = await self._prisma.participant.find_unique(
            where=_key(conversation_id, user_id)
        )
        return self._to_entity(record) if record else None

    async def list_for_conversation(
        self, conversation_id: ConversationId, active_only: bool = True
    ) -> list[Participant]:
        where = {"conversation_id": conversation_id.value}
        if active_only:
            where["left_at"] = None
        records = await self._prisma.participant.find_many(
            where=where, order={"joined_at": "asc"}
        )
        return [self._to_entity(record) for record in records]

    async def add_or_rejoin(
        self,
        conversation_id: ConversationId,
        user_id: UserId,
        role: ParticipantRole,
        now: datetime,
    ) -> Participant:
        await self._prisma.participant.upsert(
            where=_key(conversation_id, user_id),
            data={
                "create": {
                    "conversation_id": conversation_id.value,
                    "user_id": user_id.value,
                    "role": role.value,
                    "joined_at": now,
                },
                "update": {},
            },
        )
        await self._prisma.participant.update_many(
            where={
                "conversation_id": conversation_id.value,
                "user_id": user_id.value,
                "left_at": {"not": None},
            },
            data={"left_at": None, "joined_at": now},
        )
        return await self.get(conversation_id, user_id)

    async def save(self, participant: Participant) -> None:
        await self._prisma.participant.update(
            where=_key(participant.conversation_id, participant.user_id),
            data={
                "role": participant.role.value,
                "joined_at": participant.joined_at,
                "left_at": participant.left_at,
            },
        )
