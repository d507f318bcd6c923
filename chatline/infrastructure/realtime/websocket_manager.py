"""
WebSocket connection manager - the production EventSink.

A user may hold several sockets (tabs, devices). Sends go to all of them; a
socket that fails a send is dropped. Subscriptions live in the
EventBroadcaster, not here.
"""

import asyncio
import logging
from threading import Lock
from typing import Any

from fastapi import WebSocket

from chatline.domain.ports.event_sink import EventSink
from chatline.domain.value_objects.user_id import UserId
from chatline.observability.metrics import connection_closed, connection_opened

logger = logging.getLogger(__name__)


class WebSocketConnectionManager(EventSink):
    def __init__(self):
        self.connections: dict[UserId, set[WebSocket]] = {}
        self._lock = Lock()

    async def connect(self, user_id: UserId, websocket: WebSocket) -> None:
        await websocket.accept()
        with self._lock:
            self.connections.setdefault(user_id, set()).add(websocket)
        connection_opened()
        logger.info(f"[WebSocket] {user_id} connected")

    def disconnect(self, user_id: UserId, websocket: WebSocket) -> bool:
        """Drop one socket; returns True when it was the user's last one."""
        with self._lock:
            sockets = self.connections.get(user_id)
            if not sockets or websocket not in sockets:
                return False
            sockets.discard(websocket)
            connection_closed()
            if sockets:
                return False
            self.connections.pop(user_id, None)
        logger.info(f"[WebSocket] {user_id} disconnected")
        return True

    def is_connected(self, user_id: UserId) -> bool:
        with self._lock:
            return bool(self.connections.get(user_id))

    async def send(self, user_id: UserId, envelope: dict[str, Any]) -> None:
        with self._lock:
            sockets = list(self.connections.get(user_id, ()))
        if not sockets:
            return

        results = await asyncio.gather(
            *(socket.send_json(envelope) for socket in sockets), return_exceptions=True
        )
        failures = [
            (socket, result)
            for socket, result in zip(sockets, results)
            if isinstance(result, Exception)
        ]
        for socket, _ in failures:
            self.disconnect(user_id, socket)
        if failures and len(failures) == len(sockets):
            raise failures[0][1]
