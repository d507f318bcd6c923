"""
ChatParticipant Value Object - the acting user as the chat core sees it.

Built by the auth dependency from token claims and passed explicitly into
store operations; the host application's own user model never leaks in.
"""

from dataclasses import dataclass
from typing import Optional

from chatline.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ChatParticipant:
    id: UserId
    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.id.value
