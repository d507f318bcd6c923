"""Conversation queries."""

from .list_conversations import (
    ConversationSummary,
    ListConversationsQuery,
    ListConversationsHandler,
)
from .get_conversation import (
    ConversationDetail,
    GetConversationQuery,
    GetConversationHandler,
)
from .get_user_stats import UserStats, GetUserStatsQuery, GetUserStatsHandler

__all__ = [
    "ConversationSummary",
    "ListConversationsQuery",
    "ListConversationsHandler",
    "ConversationDetail",
    "GetConversationQuery",
    "GetConversationHandler",
    "UserStats",
    "GetUserStatsQuery",
    "GetUserStatsHandler",
]
