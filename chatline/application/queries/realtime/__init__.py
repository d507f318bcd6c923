"""Realtime queries - typing and presence."""

from .get_typing_users import GetTypingUsersQuery, GetTypingUsersHandler
from .get_online_users import GetOnlineUsersQuery, GetOnlineUsersHandler
from .check_presence import (
    CheckPresenceQuery,
    CheckPresenceHandler,
    GetPresenceQuery,
    GetPresenceHandler,
)

__all__ = [
    "GetTypingUsersQuery",
    "GetTypingUsersHandler",
    "GetOnlineUsersQuery",
    "GetOnlineUsersHandler",
    "CheckPresenceQuery",
    "CheckPresenceHandler",
    "GetPresenceQuery",
    "GetPresenceHandler",
]
