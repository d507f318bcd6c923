"""Conversation DTOs for API request/response."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from chatline.application.dto.message import MessageDTO
from chatline.domain.entities.conversation import Conversation
from chatline.domain.entities.participant import Participant


class ParticipantDTO(BaseModel):
    user_id: str
    role: str
    joined_at: datetime
    left_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, participant: Participant) -> "ParticipantDTO":
        return cls(
            user_id=participant.user_id.value,
            role=participant.role.value,
            joined_at=participant.joined_at,
            left_at=participant.left_at,
        )


class ConversationDTO(BaseModel):
    id: str
    type: str
    name: Optional[str] = None
    display_name: Optional[str] = None
    description: Optional[str] = None
    is_private: bool
    created_by: str
    settings: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
    unread_count: Optional[int] = None
    last_message: Optional[MessageDTO] = None
    participants: Optional[list[ParticipantDTO]] = None

    @classmethod
    def from_entity(cls, conversation: Conversation, **extra: Any) -> "ConversationDTO":
        return cls(
            id=conversation.id.value,
            type=conversation.type.value,
            name=conversation.name,
            description=conversation.description,
            is_private=conversation.is_private,
            created_by=conversation.created_by.value,
            settings=conversation.settings,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            **extra,
        )


class ConversationListDTO(BaseModel):
    conversations: list[ConversationDTO]
    total: int


class UserStatsDTO(BaseModel):
    total_conversations: int
    unread_messages: int
    messages_sent: int
