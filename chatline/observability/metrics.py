"""
Prometheus Metrics for the chatline service.

DATA FLOW:
    This file                  presentation/api/metrics.py         Scraper
    ─────────                  ────────────────────────────         ───────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus / Alloy

METRIC TYPES:
    - Gauge: Value goes up/down (open WebSocket connections)
    - Counter: Value only goes up (messages sent, broadcast failures)
    - Histogram: Distribution (request latency)
"""

from prometheus_client import (
    Gauge,
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5],
)

MESSAGES_SENT_TOTAL = Counter(
    "chat_messages_sent_total",
    "Total number of messages appended",
    ["type"],
)

READ_RECEIPTS_TOTAL = Counter(
    "chat_read_receipts_created_total",
    "Total number of read receipts created",
)

BROADCAST_DELIVERIES_TOTAL = Counter(
    "chat_broadcast_deliveries_total",
    "Total number of envelopes handed to the event sink",
    ["event"],
)

BROADCAST_FAILURES_TOTAL = Counter(
    "chat_broadcast_failures_total",
    "Total number of failed broadcast deliveries by reason",
    ["reason"],
)

ACTIVE_CONNECTIONS = Gauge(
    "chat_active_websocket_connections",
    "Number of open WebSocket connections",
)


# =============================================================================
# LABEL CONSTANTS
# =============================================================================
class BroadcastFailureReason:
    """Reason labels for chat_broadcast_failures_total."""

    TIMEOUT = "timeout"
    SINK_ERROR = "sink_error"
    AUTHORIZER_ERROR = "authorizer_error"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def observe_request_latency(method: str, route: str, status_code: int, duration: float):
    """Integration point: fastapi_app.CorrelationIdMiddleware"""
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(duration)


def increment_messages_sent(message_type: str):
    """Integration point: services/message_store.py append()"""
    MESSAGES_SENT_TOTAL.labels(type=message_type).inc()


def increment_read_receipts(count: int = 1):
    """Integration point: services/read_receipt_tracker.py"""
    if count > 0:
        READ_RECEIPTS_TOTAL.inc(count)


def increment_broadcast_delivery(event: str):
    BROADCAST_DELIVERIES_TOTAL.labels(event=event).inc()


def increment_broadcast_failure(reason: str):
    BROADCAST_FAILURES_TOTAL.labels(reason=reason).inc()


def connection_opened():
    ACTIVE_CONNECTIONS.inc()


def connection_closed():
    ACTIVE_CONNECTIONS.dec()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Called by: presentation/api/metrics.py

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "observe_request_latency",
    "increment_messages_sent",
    "increment_read_receipts",
    "increment_broadcast_delivery",
    "increment_broadcast_failure",
    "connection_opened",
    "connection_closed",
    "get_metrics_content",
    "BroadcastFailureReason",
]
