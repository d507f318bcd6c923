"""
Event Sink Port - pushes one envelope to one user's live connections.
Implementation: chatline/infrastructure/realtime/websocket_manager.py
"""

from abc import ABC, abstractmethod
from typing import Any

from chatline.domain.value_objects.user_id import UserId


class EventSink(ABC):
    @abstractmethod
    async def send(self, user_id: UserId, envelope: dict[str, Any]) -> None:
        """Deliver to every open connection of ``user_id``; no-op if none."""
        ...
