"""Realtime commands - typing and presence."""

from .set_typing import SetTypingCommand, SetTypingHandler
from .set_online import SetOnlineCommand, SetOnlineHandler
from .set_offline import SetOfflineCommand, SetOfflineHandler
from .touch_last_seen import TouchLastSeenCommand, TouchLastSeenHandler

__all__ = [
    "SetTypingCommand",
    "SetTypingHandler",
    "SetOnlineCommand",
    "SetOnlineHandler",
    "SetOfflineCommand",
    "SetOfflineHandler",
    "TouchLastSeenCommand",
    "TouchLastSeenHandler",
]
