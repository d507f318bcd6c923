"""
In-memory backend (STORAGE_BACKEND=memory and tests).

Single-process only: state lives in this interpreter and is lost on restart.
"""

from chatline.infrastructure.memory.database import InMemoryDatabase
from chatline.infrastructure.memory.memory_conversation_repository import (
    InMemoryConversationRepository,
)
from chatline.infrastructure.memory.memory_participant_repository import (
    InMemoryParticipantRepository,
)
from chatline.infrastructure.memory.memory_message_repository import (
    InMemoryMessageRepository,
)
from chatline.infrastructure.memory.memory_read_receipt_repository import (
    InMemoryReadReceiptRepository,
)
from chatline.infrastructure.memory.memory_user_repository import InMemoryUserRepository
from chatline.infrastructure.memory.memory_presence_store import InMemoryPresenceStore
from chatline.infrastructure.memory.memory_typing_store import InMemoryTypingStore

__all__ = [
    "InMemoryDatabase",
    "InMemoryConversationRepository",
    "InMemoryParticipantRepository",
    "InMemoryMessageRepository",
    "InMemoryReadReceiptRepository",
    "InMemoryUserRepository",
    "InMemoryPresenceStore",
    "InMemoryTypingStore",
]
