"""In-memory UserRepository for tests and STORAGE_BACKEND=memory."""

from typing import Optional

from chatline.domain.ports.repositories import UserRepository
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.user_id import UserId
from chatline.infrastructure.memory.database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    async def get_by_id(self, user_id: UserId) -> Optional[ChatParticipant]:
        with self._db.lock:
            return self._db.users.get(user_id.value)

    async def save(self, participant: ChatParticipant) -> None:
        with self._db.lock:
            self._db.users[participant.id.value] = participant
