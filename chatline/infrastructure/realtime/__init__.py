"""Realtime transport - WebSocket implementation of the EventSink port."""

from chatline.infrastructure.realtime.websocket_manager import WebSocketConnectionManager

__all__ = ["WebSocketConnectionManager"]
