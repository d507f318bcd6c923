"""
Prisma Message Repository Implementation.

Prisma Message Model (from schema.prisma, table chat_messages):
    id, conversation_id, author_id, content?, type,
    attachment_path?, attachment_name?, attachment_mime_type?, attachment_size?,
    metadata (Json), reply_to_id?, created_at, updated_at, deleted_at?

Attachment columns are all null unless type is file or image.
"""

import asyncio
from datetime import datetime
from typing import Any, Optional

from prisma import Json, Prisma
from prisma.models import Message as PrismaMessage

from chatline.domain.entities.message import Message, MessageType
from chatline.domain.ports.repositories import MessagePage, MessageRepository
from chatline.domain.value_objects.attachment import Attachment
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId


class PrismaMessageRepository(MessageRepository):
    """
    Prisma implementation of MessageRepository.

    Handles persistence of Message entities to PostgreSQL via Prisma.
    """

    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaMessage) -> Message:
        """Map Prisma record to domain entity."""
        attachment = None
        if record.attachment_path:
            attachment = Attachment(
                path=record.attachment_path,
                name=record.attachment_name,
                mime_type=record.attachment_mime_type or "application/octet-stream",
                size_bytes=record.attachment_size or 0,
            )
        return Message(
            id=MessageId(record.id),
            conversation_id=ConversationId(record.conversation_id),
            author_id=UserId(record.author_id),
            type=MessageType(record.type),
            created_at=record.created_at,
            updated_at=record.updated_at,
            content=record.content,
            attachment=attachment,
            metadata=dict(record.metadata or {}),
            reply_to_id=MessageId(record.reply_to_id) if record.reply_to_id else None,
            deleted_at=record.deleted_at,
        )

    @staticmethod
    def _live(conversation_id: ConversationId) -> dict[str, Any]:
        return {"conversation_id": conversation_id.value, "deleted_at": None}

    async def get_by_id(self, message_id: MessageId) -> Optional[Message]:
        record = await self._prisma.message.find_unique(where={"id": message_id.value})
        return self._to_entity(record) if record else None

    async def save(self, message: Message) -> None:
        """
        Save (create or update) a message.

        Only content, metadata and the tombstone change after creation.
        """
        attachment = message.attachment
        await self._prisma.message.upsert(
            where={"id": message.id.value},
            data={
                "create": {
                    "id": message.id.value,
                    "conversation_id": message.conversation_id.value,
                    "author_id": message.author_id.value,
                    "type": message.type.value,
                    "content": message.content,
                    "attachment_path": attachment.path if attachment else None,
                    "attachment_name": attachment.name if attachment else None,
                    "attachment_mime_type": attachment.mime_type if attachment else None,
                    "attachment_size": attachment.size_bytes if attachment else None,
                    "metadata": Json(message.metadata),
                    "reply_to_id": message.reply_to_id.value if message.reply_to_id else None,
                    "created_at": message.created_at,
                    "updated_at": message.updated_at,
                },
                "update": {
                    "content": message.content,
                    "metadata": Json(message.metadata),
                    "updated_at": message.updated_at,
                    "deleted_at": message.deleted_at,
                },
            },
        )

    async def delete(self, message_id: MessageId) -> bool:
        """Hard delete; receipts go with it through the cascade."""
        deleted = await self._prisma.message.delete_many(where={"id": message_id.value})
        return deleted > 0

    async def list_page(
        self,
        conversation_id: ConversationId,
        page: int,
        per_page: int,
        term: Optional[str] = None,
    ) -> MessagePage:
        where = self._live(conversation_id)
        if term:
            where["content"] = {"contains": term, "mode": "insensitive"}
        records, total = await asyncio.gather(
            self._prisma.message.find_many(
                where=where,
                order={"created_at": "desc"},
                skip=(page - 1) * per_page,
                take=per_page,
            ),
            self._prisma.message.count(where=where),
        )
        return MessagePage(
            items=[self._to_entity(record) for record in records],
            total=total,
            page=page,
            per_page=per_page,
        )

    async def search(
        self, conversation_ids: list[ConversationId], term: str, limit: int
    ) -> list[Message]:
        records = await self._prisma.message.find_many(
            where={
                "conversation_id": {"in": [c.value for c in conversation_ids]},
                "deleted_at": None,
                "content": {"contains": term, "mode": "insensitive"},
            },
            order={"created_at": "desc"},
            take=limit,
        )
        return [self._to_entity(record) for record in records]

    async def unread_candidates(
        self,
        conversation_id: ConversationId,
        reader_id: UserId,
        until: Optional[datetime] = None,
    ) -> list[MessageId]:
        where = {**self._live(conversation_id), "author_id": {"not": reader_id.value}}
        if until is not None:
            where["created_at"] = {"lte": until}
        records = await self._prisma.message.find_many(where=where)
        return [MessageId(record.id) for record in records]

    async def count_by_author(self, author_id: UserId) -> int:
        return await self._prisma.message.count(
            where={"author_id": author_id.value, "deleted_at": None}
        )
