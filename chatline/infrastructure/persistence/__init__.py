"""
Persistence Layer - Database implementations.

Contains Prisma repository implementations for domain ports. Importing this
package requires a generated client (``prisma generate``).
"""

from chatline.infrastructure.persistence.prisma_client import PrismaDatabase
from chatline.infrastructure.persistence.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from chatline.infrastructure.persistence.prisma_participant_repository import (
    PrismaParticipantRepository,
)
from chatline.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from chatline.infrastructure.persistence.prisma_read_receipt_repository import (
    PrismaReadReceiptRepository,
)
from chatline.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)

__all__ = [
    "PrismaDatabase",
    "PrismaConversationRepository",
    "PrismaParticipantRepository",
    "PrismaMessageRepository",
    "PrismaReadReceiptRepository",
    "PrismaUserRepository",
]
