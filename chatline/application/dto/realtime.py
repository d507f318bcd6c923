"""Typing and presence DTOs."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TypingUsersDTO(BaseModel):
    conversation_id: str
    user_ids: list[str]


class PresenceDTO(BaseModel):
    user_id: str
    is_online: bool
    last_seen_at: Optional[datetime] = None


class OnlineUsersDTO(BaseModel):
    user_ids: list[str]
