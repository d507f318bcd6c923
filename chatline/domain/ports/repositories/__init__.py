"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the domain needs
- Does NOT specify implementation (Prisma, in-memory, etc.)

Idempotent writes (participant rejoin, read receipts) are expressed as
upserts so implementations can make them atomic.
"""

from chatline.domain.ports.repositories.conversation_repository import ConversationRepository
from chatline.domain.ports.repositories.participant_repository import ParticipantRepository
from chatline.domain.ports.repositories.message_repository import MessagePage, MessageRepository
from chatline.domain.ports.repositories.read_receipt_repository import ReadReceiptRepository
from chatline.domain.ports.repositories.user_repository import UserRepository

__all__ = [
    "ConversationRepository",
    "ParticipantRepository",
    "MessagePage",
    "MessageRepository",
    "ReadReceiptRepository",
    "UserRepository",
]
