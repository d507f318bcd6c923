"""
Participant Entity - Membership of one user in one conversation.

One row per (conversation_id, user_id). Leaving sets ``left_at``; rejoining
clears it and resets ``joined_at`` instead of inserting a new row.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId


class ParticipantRole(str, Enum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    MEMBER = "member"


@dataclass
class Participant:
    conversation_id: ConversationId
    user_id: UserId
    role: ParticipantRole
    joined_at: datetime
    left_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.left_at is None

    @property
    def is_admin(self) -> bool:
        return self.role == ParticipantRole.ADMIN

    def leave(self, now: datetime) -> None:
        self.left_at = now

    def rejoin(self, now: datetime) -> None:
        self.left_at = None
        self.joined_at = now
