"""In-memory ConversationRepository for tests and STORAGE_BACKEND=memory."""

from copy import deepcopy
from datetime import datetime
from typing import Optional

from chatline.domain.entities.conversation import Conversation
from chatline.domain.entities.participant import Participant
from chatline.domain.exceptions import ConflictError
from chatline.domain.ports.repositories import ConversationRepository
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.infrastructure.memory.database import InMemoryDatabase


class InMemoryConversationRepository(ConversationRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def _live(self, conversation_id: ConversationId) -> Optional[Conversation]:
        record = self._db.conversations.get(conversation_id.value)
        return None if record is None or record.is_deleted else record

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        with self._db.lock:
            record = self._db.conversations.get(conversation_id.value)
            return deepcopy(record) if record else None

    async def get_by_direct_key(self, direct_key: str) -> Optional[Conversation]:
        with self._db.lock:
            owner = self._db.direct_keys.get(direct_key)
            return deepcopy(self._db.conversations[owner]) if owner else None

    async def create(
        self, conversation: Conversation, participants: list[Participant]
    ) -> None:
        with self._db.lock:
            if conversation.direct_key and conversation.direct_key in self._db.direct_keys:
                raise ConflictError("Direct conversation already exists")
            self._db.conversations[conversation.id.value] = deepcopy(conversation)
            if conversation.direct_key:
                self._db.direct_keys[conversation.direct_key] = conversation.id.value
            for participant in participants:
                key = (participant.conversation_id.value, participant.user_id.value)
                self._db.participants[key] = deepcopy(participant)

    async def save(self, conversation: Conversation) -> None:
        with self._db.lock:
            record = self._live(conversation.id)
            if record is None:
                return
            record.name = conversation.name
            record.description = conversation.description
            record.is_private = conversation.is_private
            record.settings = deepcopy(conversation.settings)
            record.updated_at = conversation.updated_at

    async def touch(self, conversation_id: ConversationId, now: datetime) -> None:
        with self._db.lock:
            record = self._live(conversation_id)
            if record is not None:
                record.touch(now)

    async def soft_delete(self, conversation_id: ConversationId, now: datetime) -> None:
        with self._db.lock:
            record = self._live(conversation_id)
            if record is None:
                return
            if record.direct_key:
                self._db.direct_keys.pop(record.direct_key, None)
            record.soft_delete(now)

    def _visible_for(self, user_id: UserId) -> list[Conversation]:
        active = {
            conversation_id
            for (conversation_id, member), participant in self._db.participants.items()
            if member == user_id.value and participant.is_active
        }
        conversations = [
            conversation
            for conversation in self._db.conversations.values()
            if conversation.id.value in active and not conversation.is_deleted
        ]
        conversations.sort(key=lambda c: c.updated_at, reverse=True)
        return conversations

    async def list_for_user(
        self, user_id: UserId, limit: Optional[int] = None
    ) -> list[Conversation]:
        with self._db.lock:
            conversations = self._visible_for(user_id)
            if limit is not None:
                conversations = conversations[:limit]
            return deepcopy(conversations)

    async def search_for_user(
        self, user_id: UserId, term: str, limit: int
    ) -> list[Conversation]:
        needle = term.lower()
        with self._db.lock:
            matches = [
                conversation
                for conversation in self._visible_for(user_id)
                if needle in (conversation.name or "").lower()
                or needle in (conversation.description or "").lower()
            ]
            return deepcopy(matches[:limit])
