"""
API Routers - FastAPI endpoint definitions.
"""

from chatline.presentation.api.conversations import router as conversations_router
from chatline.presentation.api.messages import router as messages_router
from chatline.presentation.api.realtime import router as realtime_router
from chatline.presentation.api.search import router as search_router
from chatline.presentation.api.stats import router as stats_router
from chatline.presentation.api.metrics import router as metrics_router
from chatline.presentation.api.websocket import router as websocket_router

__all__ = [
    "conversations_router",
    "messages_router",
    "realtime_router",
    "search_router",
    "stats_router",
    "metrics_router",
    "websocket_router",
]
