"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Routes:
- /conversations, /conversations/{id}/messages, typing and presence
- /search, /stats, /metrics, /ws
"""

import time
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from chatline import __version__
from chatline.config.logging_config import NO_CORRELATION_ID, correlation_id_var, setup_logging
from chatline.config.settings import Config, get_config
from chatline.observability.metrics import observe_request_latency
from chatline.presentation.api import (
    conversations_router,
    messages_router,
    metrics_router,
    realtime_router,
    search_router,
    stats_router,
    websocket_router,
)
from chatline.presentation.errors import register_exception_handlers
from chatline.setup.ioc import create_container

# Setup logging
setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)

logger = getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propagate X-Correlation-ID into logs and record request latency."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        started = time.perf_counter()
        response = await call_next(request)

        # Route template keeps label cardinality bounded
        route = request.scope.get("route")
        observe_request_latency(
            request.method,
            getattr(route, "path", "unmatched"),
            response.status_code,
            time.perf_counter() - started,
        )

        response.headers["X-Correlation-ID"] = correlation_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: container and Dishka are already set up.
    Shutdown: close the DI container (disconnects Prisma and Redis).
    """
    logger.info("Chatline started. DI container initialized.")
    yield
    await app.state.dishka_container.close()
    logger.info("Chatline shutdown. DI container closed.")


def create_fastapi_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: DI container to use; built from APP_ENV configuration when omitted

    Returns:
        FastAPI application instance
    """
    if container is None:
        container = create_container(get_config())

    app = FastAPI(
        title="Chatline API",
        description="Real-time conversations: messages, read receipts, typing and presence",
        version=__version__,
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container, app)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Health check routes
    @app.get("/", tags=["health"])
    async def root():
        return {"message": "Chatline server is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    # Register routers
    app.include_router(conversations_router)
    app.include_router(messages_router)
    app.include_router(realtime_router)  # typing + presence
    app.include_router(search_router)
    app.include_router(stats_router)
    app.include_router(metrics_router)
    app.include_router(websocket_router)  # WS /ws?token=

    return app


# Create the app instance
app = create_fastapi_app()
