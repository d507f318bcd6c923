"""Observability package for the chatline service."""

from chatline.observability.metrics import (
    observe_request_latency,
    increment_messages_sent,
    increment_read_receipts,
    increment_broadcast_delivery,
    increment_broadcast_failure,
    connection_opened,
    connection_closed,
    get_metrics_content,
    BroadcastFailureReason,
)

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
