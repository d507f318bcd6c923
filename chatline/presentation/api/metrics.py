"""
Prometheus Metrics Endpoint.

    observability/metrics.py    This file          Scraper
    ────────────────────────    ─────────          ───────
    Define & record metrics ──► /metrics ────────► Prometheus / Alloy
"""

from fastapi import APIRouter, Response

from chatline.observability.metrics import get_metrics_content

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    """Prometheus text exposition of request, message and broadcast metrics."""
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
