"""Message queries."""

from .list_messages import ListMessagesQuery, ListMessagesHandler
from .get_message import MessageDetail, GetMessageQuery, GetMessageHandler
from .get_read_receipts import GetReadReceiptsQuery, GetReadReceiptsHandler
from .get_unread_count import GetUnreadCountQuery, GetUnreadCountHandler
from .search import SearchResults, SearchQuery, SearchHandler

__all__ = [
    "ListMessagesQuery",
    "ListMessagesHandler",
    "MessageDetail",
    "GetMessageQuery",
    "GetMessageHandler",
    "GetReadReceiptsQuery",
    "GetReadReceiptsHandler",
    "GetUnreadCountQuery",
    "GetUnreadCountHandler",
    "SearchResults",
    "SearchQuery",
    "SearchHandler",
]
