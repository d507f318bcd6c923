"""
Prisma Conversation Repository Implementation.

Mapping:
- Prisma model ``Conversation`` (table chat_conversations) ←→ domain Conversation
- Participants are written in the same nested create, so a conversation
  never exists without its member rows
- ``direct_key`` carries a unique index; a concurrent duplicate direct
  conversation surfaces as UniqueViolationError → ConflictError
- Writes after creation are column-targeted ``update_many`` calls filtered on
  ``deleted_at IS NULL``, so an activity bump never rewrites a concurrent
  delete or settings change
"""

import logging
from datetime import datetime
from typing import Any, Optional

from prisma import Json, Prisma
from prisma.errors import UniqueViolationError
from prisma.models import Conversation as PrismaConversation

from chatline.domain.entities.conversation import Conversation, ConversationType
from chatline.domain.entities.participant import Participant
from chatline.domain.exceptions import ConflictError
from chatline.domain.ports.repositories import ConversationRepository
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class PrismaConversationRepository(ConversationRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaConversation) -> Conversation:
        """Map Prisma record to domain entity."""
        return Conversation(
            id=ConversationId(record.id),
            type=ConversationType(record.type),
            created_by=UserId(record.created_by),
            created_at=record.created_at,
            updated_at=record.updated_at,
            name=record.name,
            description=record.description,
            is_private=record.is_private,
            settings=dict(record.settings or {}),
            deleted_at=record.deleted_at,
            direct_key=record.direct_key,
        )

    @staticmethod
    def _active_for(user_id: UserId) -> dict[str, Any]:
        return {
            "deleted_at": None,
            "participants": {"some": {"user_id": user_id.value, "left_at": None}},
        }

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        record = await self._prisma.conversation.find_unique(
            where={"id": conversation_id.value}
        )
        return self._to_entity(record) if record else None

    async def get_by_direct_key(self, direct_key: str) -> Optional[Conversation]:
        record = await self._prisma.conversation.find_unique(
            where={"direct_key": direct_key}
        )
        return self._to_entity(record) if record else None

    async def create(
        self, conversation: Conversation, participants: list[Participant]
    ) -> None:
        try:
            await self._prisma.conversation.create(
                data={
                    "id": conversation.id.value,
                    "type": conversation.type.value,
                    "name": conversation.name,
                    "description": conversation.description,
                    "is_private": conversation.is_private,
                    "created_by": conversation.created_by.value,
                    "settings": Json(conversation.settings),
                    "direct_key": conversation.direct_key,
                    "created_at": conversation.created_at,
                    "updated_at": conversation.updated_at,
                    "participants": {
                        "create": [
                            {
                                "user_id": participant.user_id.value,
                                "role": participant.role.value,
                                "joined_at": participant.joined_at,
                            }
                            for participant in participants
                        ]
                    },
                }
            )
        except UniqueViolationError as e:
            logger.info(f"[Conversation] direct_key {conversation.direct_key} already taken")
            raise ConflictError("Direct conversation already exists") from e

    @staticmethod
    def _live(conversation_id: ConversationId) -> dict[str, Any]:
        return {"id": conversation_id.value, "deleted_at": None}

    async def save(self, conversation: Conversation) -> None:
        await self._prisma.conversation.update_many(
            where=self._live(conversation.id),
            data={
                "name": conversation.name,
                "description": conversation.description,
                "is_private": conversation.is_private,
                "settings": Json(conversation.settings),
                "updated_at": conversation.updated_at,
            },
        )

    async def touch(self, conversation_id: ConversationId, now: datetime) -> None:
        await self._prisma.conversation.update_many(
            where=self._live(conversation_id), data={"updated_at": now}
        )

    async def soft_delete(self, conversation_id: ConversationId, now: datetime) -> None:
        await self._prisma.conversation.update_many(
            where=self._live(conversation_id),
            data={"deleted_at": now, "updated_at": now, "direct_key": None},
        )

    async def list_for_user(
        self, user_id: UserId, limit: Optional[int] = None
    ) -> list[Conversation]:
        """Live conversations for user, ordered by updated_at desc."""
        options: dict[str, Any] = {}
        if limit is not None:
            options["take"] = limit
        records = await self._prisma.conversation.find_many(
            where=self._active_for(user_id),
            order={"updated_at": "desc"},
            **options,
        )
        return [self._to_entity(record) for record in records]

    async def search_for_user(
        self, user_id: UserId, term: str, limit: int
    ) -> list[Conversation]:
        records = await self._prisma.conversation.find_many(
            where={
                **self._active_for(user_id),
                "OR": [
                    {"name": {"contains": term, "mode": "insensitive"}},
                    {"description": {"contains": term, "mode": "insensitive"}},
                ],
            },
            order={"updated_at": "desc"},
            take=limit,
        )
        return [self._to_entity(record) for record in records]
