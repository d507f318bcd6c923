"""In-memory MessageRepository for tests and STORAGE_BACKEND=memory."""

from copy import deepcopy
from datetime import datetime
from typing import Optional

from chatline.domain.entities.message import Message
from chatline.domain.ports.repositories import MessagePage, MessageRepository
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.infrastructure.memory.database import InMemoryDatabase


def _newest_first(messages: list[Message]) -> list[Message]:
    return sorted(messages, key=lambda m: m.created_at, reverse=True)


def _matches(message: Message, needle: str) -> bool:
    return needle in (message.content or "").lower()


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def _live(self, conversation_id: ConversationId) -> list[Message]:
        return [
            message
            for message in self._db.messages.values()
            if message.conversation_id == conversation_id and not message.is_deleted
        ]

    async def get_by_id(self, message_id: MessageId) -> Optional[Message]:
        with self._db.lock:
            record = self._db.messages.get(message_id.value)
            return deepcopy(record) if record else None

    async def save(self, message: Message) -> None:
        with self._db.lock:
            self._db.messages[message.id.value] = deepcopy(message)

    async def delete(self, message_id: MessageId) -> bool:
        with self._db.lock:
            if self._db.messages.pop(message_id.value, None) is None:
                return False
            for key in [k for k in self._db.read_receipts if k[0] == message_id.value]:
                del self._db.read_receipts[key]
            return True

    async def list_page(
        self,
        conversation_id: ConversationId,
        page: int,
        per_page: int,
        term: Optional[str] = None,
    ) -> MessagePage:
        with self._db.lock:
            messages = self._live(conversation_id)
            if term:
                needle = term.lower()
                messages = [m for m in messages if _matches(m, needle)]
            messages = _newest_first(messages)
            start = (page - 1) * per_page
            return MessagePage(
                items=deepcopy(messages[start : start + per_page]),
                total=len(messages),
                page=page,
                per_page=per_page,
            )

    async def search(
        self, conversation_ids: list[ConversationId], term: str, limit: int
    ) -> list[Message]:
        needle = term.lower()
        with self._db.lock:
            messages = [
                message
                for conversation_id in conversation_ids
                for message in self._live(conversation_id)
                if _matches(message, needle)
            ]
            return deepcopy(_newest_first(messages)[:limit])

    async def unread_candidates(
        self,
        conversation_id: ConversationId,
        reader_id: UserId,
        until: Optional[datetime] = None,
    ) -> list[MessageId]:
        with self._db.lock:
            return [
                message.id
                for message in self._live(conversation_id)
                if message.author_id != reader_id
                and (until is None or message.created_at <= until)
            ]

    async def count_by_author(self, author_id: UserId) -> int:
        with self._db.lock:
            return sum(
                1
                for message in self._db.messages.values()
                if message.author_id == author_id and not message.is_deleted
            )
