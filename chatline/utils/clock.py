"""
Clock helpers.

Every component that needs "now" takes a ``Clock`` callable so tests can
move time forward (TTL expiry, edit windows) without sleeping.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
