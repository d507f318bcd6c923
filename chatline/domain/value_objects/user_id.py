"""
UserId Value Object

User identities are issued by the host's auth system (JWT ``sub``), so any
non-empty opaque string is accepted.
"""

from dataclasses import dataclass

MAX_USER_ID_LENGTH = 128


@dataclass(frozen=True)
class UserId:
    value: str  # user_id

    def __post_init__(self):
        if not self.value or not str(self.value).strip():
            raise ValueError("UserId cannot be empty")
        if len(self.value) > MAX_USER_ID_LENGTH:
            raise ValueError("UserId is too long")

    def __str__(self) -> str:
        return self.value
