"""
DTOs - Data Transfer Objects

DTOs for transferring data between layers:
- conversation.py → ConversationDTO, ParticipantDTO, UserStatsDTO
- message.py      → MessageDTO, MessagePageDTO, ReadReceiptDTO
- realtime.py     → TypingUsersDTO, PresenceDTO, OnlineUsersDTO

Note: These are different from domain entities.
DTOs are for API input/output, entities are for business logic.
"""

from chatline.application.dto.message import (
    AttachmentDTO,
    MessageDTO,
    MessagePageDTO,
    ReadReceiptDTO,
)
from chatline.application.dto.conversation import (
    ConversationDTO,
    ConversationListDTO,
    ParticipantDTO,
    UserStatsDTO,
)
from chatline.application.dto.realtime import OnlineUsersDTO, PresenceDTO, TypingUsersDTO

__all__ = [
    "AttachmentDTO",
    "MessageDTO",
    "MessagePageDTO",
    "ReadReceiptDTO",
    "ConversationDTO",
    "ConversationListDTO",
    "ParticipantDTO",
    "UserStatsDTO",
    "OnlineUsersDTO",
    "PresenceDTO",
    "TypingUsersDTO",
]
