"""
WebSocket endpoint - the push side of the realtime layer.

Connect with ``/ws?token=<jwt>``. The socket is subscribed to its own
``user.{id}`` topic and marked online. Client frames:

    {"action": "subscribe",   "topic": "conversation.<id>"}
    {"action": "unsubscribe", "topic": "conversation.<id>"}
    {"action": "ping"}

Every subscribe is answered with ``subscription`` (authorized or not); the
presence topic also returns the member descriptor. Server pushes are the
broadcaster envelopes. When the user's last socket closes, all their
subscriptions are dropped and they are marked offline.
"""

import json
from logging import getLogger
from typing import Any

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect

from chatline.application.commands.realtime import (
    SetOfflineCommand,
    SetOfflineHandler,
    SetOnlineCommand,
    SetOnlineHandler,
)
from chatline.config.settings import ChatConfig
from chatline.domain.events import user_topic
from chatline.domain.ports.repositories import UserRepository
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.infrastructure.realtime import WebSocketConnectionManager
from chatline.presentation.dependencies.auth import decode_token
from chatline.services.event_broadcaster import EventBroadcaster

logger = getLogger(__name__)

router = APIRouter(tags=["realtime"])

POLICY_VIOLATION = 1008


async def _mark_online(container, user: ChatParticipant) -> None:
    async with container() as request_container:
        handler = await request_container.get(SetOnlineHandler)
        await handler.execute(SetOnlineCommand(user_id=user.id))


async def _mark_offline(container, user: ChatParticipant) -> None:
    async with container() as request_container:
        handler = await request_container.get(SetOfflineHandler)
        await handler.execute(SetOfflineCommand(user_id=user.id))


async def _handle_frame(
    frame: Any,
    user: ChatParticipant,
    broadcaster: EventBroadcaster,
    config: ChatConfig,
    container,
) -> dict[str, Any]:
    if not isinstance(frame, dict):
        return {"event": "error", "error": "Frame must be a JSON object"}

    action = frame.get("action")
    topic = frame.get("topic")

    if action == "ping":
        if config.presence_enabled:
            await _mark_online(container, user)
        return {"event": "pong"}

    if action not in ("subscribe", "unsubscribe"):
        return {"event": "error", "error": f"Unknown action: {action!r}"}
    if not isinstance(topic, str) or not topic:
        return {"event": "error", "error": "Topic is required"}

    if action == "subscribe":
        result = await broadcaster.subscribe(topic, user)
        response = {"event": "subscription", "topic": topic, "authorized": bool(result)}
        if isinstance(result, dict):
            response["member"] = result
        return response

    broadcaster.unsubscribe(topic, user.id)
    return {"event": "unsubscribed", "topic": topic}


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, token: str = Query(default="")):
    try:
        user = decode_token(token)
    except HTTPException as e:
        logger.info(f"[WebSocket] Rejected connection: {e.detail}")
        await websocket.close(code=POLICY_VIOLATION)
        return

    container = websocket.app.state.dishka_container
    manager = await container.get(WebSocketConnectionManager)
    broadcaster = await container.get(EventBroadcaster)
    config = await container.get(ChatConfig)
    users = await container.get(UserRepository)

    await users.save(user)
    await manager.connect(user.id, websocket)
    await broadcaster.subscribe(user_topic(user.id), user)
    if config.presence_enabled:
        await _mark_online(container, user)

    try:
        while True:
            try:
                frame = await websocket.receive_json()
            except json.JSONDecodeError:
                await websocket.send_json({"event": "error", "error": "Invalid JSON"})
                continue
            await websocket.send_json(
                await _handle_frame(frame, user, broadcaster, config, container)
            )
    except WebSocketDisconnect:
        logger.debug(f"[WebSocket] {user.id} disconnected")
    finally:
        manager.disconnect(user.id, websocket)
        # A failed push may already have dropped this socket
        if not manager.is_connected(user.id):
            broadcaster.unsubscribe_all(user.id)
            if config.presence_enabled:
                await _mark_offline(container, user)
