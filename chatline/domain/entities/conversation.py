"""
Conversation Entity - A direct or group chat between participants.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId


class ConversationType(str, Enum):
    DIRECT = "direct"
    GROUP = "group"


@dataclass
class Conversation:
    id: ConversationId
    type: ConversationType
    created_by: UserId
    created_at: datetime
    updated_at: datetime
    name: Optional[str] = None
    description: Optional[str] = None
    is_private: bool = True
    settings: dict[str, Any] = field(default_factory=dict)
    deleted_at: Optional[datetime] = None
    # Sorted "a:b" pair for live direct conversations; unique in storage.
    direct_key: Optional[str] = None

    @classmethod
    def create(
        cls,
        type: ConversationType,
        created_by: UserId,
        now: datetime,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_private: bool = True,
        settings: Optional[dict[str, Any]] = None,
        other_user_id: Optional[UserId] = None,
    ) -> Conversation:
        """Factory method to create a new Conversation with a generated ID."""
        direct_key = None
        if type == ConversationType.DIRECT and other_user_id is not None:
            direct_key = cls.direct_key_for(created_by, other_user_id)
        return cls(
            id=ConversationId.new(),
            type=type,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            name=name,
            description=description,
            is_private=is_private,
            settings=dict(settings or {}),
            direct_key=direct_key,
        )

    @staticmethod
    def direct_key_for(a: UserId, b: UserId) -> str:
        first, second = sorted([a.value, b.value])
        return f"{first}:{second}"

    @property
    def is_direct(self) -> bool:
        return self.type == ConversationType.DIRECT

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def touch(self, now: datetime) -> None:
        self.updated_at = now

    def soft_delete(self, now: datetime) -> None:
        self.deleted_at = now
        self.updated_at = now
        # Free the pair so the two users can open a new direct chat later
        self.direct_key = None

    def apply_patch(
        self,
        now: datetime,
        name: Optional[str] = None,
        description: Optional[str] = None,
        settings: Optional[dict[str, Any]] = None,
    ) -> None:
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if settings is not None:
            self.settings = {**self.settings, **settings}
        self.updated_at = now
