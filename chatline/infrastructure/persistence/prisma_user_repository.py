"""
Prisma User Repository Implementation.

A thin profile directory (table chat_users) refreshed from token claims on
every authenticated request.
"""

from typing import Optional

from prisma import Prisma

from chatline.domain.ports.repositories import UserRepository
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.user_id import UserId


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    async def get_by_id(self, user_id: UserId) -> Optional[ChatParticipant]:
        record = await self._prisma.chatuser.find_unique(where={"id": user_id.value})
        if record is None:
            return None
        return ChatParticipant(
            id=UserId(record.id),
            name=record.name,
            email=record.email,
            avatar=record.avatar,
        )

    async def save(self, participant: ChatParticipant) -> None:
        profile = {
            "name": participant.name,
            "email": participant.email,
            "avatar": participant.avatar,
        }
        await self._prisma.chatuser.upsert(
            where={"id": participant.id.value},
            data={
                "create": {"id": participant.id.value, **profile},
                "update": profile,
            },
        )
