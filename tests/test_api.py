"""
HTTP and WebSocket tests against an app wired with in-memory storage.

Each test gets its own container, so state never leaks between tests.
"""

import uuid
from datetime import timedelta

import pytest
from starlette.websockets import WebSocketDisconnect

from helpers import ALICE, BOB, CAROL
from jwt_generation import generate_jwt_token


def create_direct(client, headers, other="user-2"):
    response = client.post(
        "/conversations", headers=headers, json={"type": "direct", "participant_ids": [other]}
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def send(client, headers, conversation_id, **body):
    return client.post(f"/conversations/{conversation_id}/messages", headers=headers, json=body)


# =============================================================================
# HEALTH / AUTH
# =============================================================================


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_requests_without_token_are_rejected(client):
    response = client.get("/conversations")
    assert response.status_code in (401, 403)


def test_expired_token_is_rejected(client, service_secret):
    token = generate_jwt_token(ALICE, service_secret, expires_in=timedelta(seconds=-10))
    response = client.get("/conversations", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"error": "Token has expired"}


def test_token_signed_with_other_secret_is_rejected(client):
    token = generate_jwt_token(ALICE, "another-secret-0123456789abcdef0123456789")
    response = client.get("/conversations", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


# =============================================================================
# CONVERSATIONS
# =============================================================================


class TestConversationEndpoints:
    def test_create_and_list(self, client, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)

        listed = client.get("/conversations", headers=bob_headers).json()
        assert listed["total"] == 1
        [summary] = listed["conversations"]
        assert summary["id"] == conversation_id
        assert summary["display_name"] == "Alice"
        assert summary["unread_count"] == 0

    def test_duplicate_direct_is_conflict(self, client, alice_headers, bob_headers):
        create_direct(client, alice_headers)

        response = client.post(
            "/conversations",
            headers=bob_headers,
            json={"type": "direct", "participant_ids": ["user-1"]},
        )
        assert response.status_code == 409

    def test_open_direct_is_idempotent(self, client, alice_headers, bob_headers):
        first = client.post("/conversations/direct", headers=alice_headers, json={"user_id": "user-2"})
        again = client.post("/conversations/direct", headers=bob_headers, json={"user_id": "user-1"})

        assert first.status_code == 200, first.text
        assert again.status_code == 200
        assert again.json()["id"] == first.json()["id"]
        assert first.json()["type"] == "direct"

    def test_open_direct_returns_a_created_conversation(self, client, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)

        response = client.post("/conversations/direct", headers=bob_headers, json={"user_id": "user-1"})
        assert response.json()["id"] == conversation_id

    def test_open_direct_with_self_is_unprocessable(self, client, alice_headers):
        response = client.post("/conversations/direct", headers=alice_headers, json={"user_id": "user-1"})
        assert response.status_code == 422

    def test_direct_participants_cannot_leave(self, client, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)

        left = client.post(f"/conversations/{conversation_id}/leave", headers=bob_headers)
        removed = client.delete(
            f"/conversations/{conversation_id}/participants/user-2", headers=alice_headers
        )

        assert left.status_code == 422
        assert removed.status_code == 422
        assert client.get(f"/conversations/{conversation_id}", headers=bob_headers).status_code == 200

    def test_blank_user_ids_are_rejected_not_500(self, client, alice_headers):
        created = client.post(
            "/conversations",
            headers=alice_headers,
            json={"type": "direct", "participant_ids": ["   "]},
        )
        opened = client.post("/conversations/direct", headers=alice_headers, json={"user_id": " "})
        group = client.post(
            "/conversations",
            headers=alice_headers,
            json={"type": "group", "participant_ids": ["user-2"], "name": "Design"},
        ).json()
        added = client.post(
            f"/conversations/{group['id']}/participants",
            headers=alice_headers,
            json={"user_ids": ["\t"]},
        )
        removed = client.delete(
            f"/conversations/{group['id']}/participants/%20", headers=alice_headers
        )

        assert created.status_code == 422
        assert opened.status_code == 422
        assert added.status_code == 422
        assert removed.status_code == 404

    def test_group_without_name_is_unprocessable(self, client, alice_headers):
        response = client.post(
            "/conversations",
            headers=alice_headers,
            json={"type": "group", "participant_ids": ["user-2", "user-3"]},
        )
        assert response.status_code == 422
        assert "name" in response.json()["error"]

    def test_outsider_and_malformed_ids_are_not_found(self, client, alice_headers, carol_headers):
        conversation_id = create_direct(client, alice_headers)

        assert client.get(f"/conversations/{conversation_id}", headers=carol_headers).status_code == 404
        assert client.get("/conversations/not-a-uuid", headers=alice_headers).status_code == 404
        assert client.get(f"/conversations/{uuid.uuid4()}", headers=alice_headers).status_code == 404

    def test_show_includes_participants(self, client, alice_headers):
        conversation_id = create_direct(client, alice_headers)

        detail = client.get(f"/conversations/{conversation_id}", headers=alice_headers).json()
        assert {p["user_id"] for p in detail["participants"]} == {"user-1", "user-2"}

    def test_group_membership_flow(self, client, alice_headers, bob_headers, carol_headers):
        response = client.post(
            "/conversations",
            headers=alice_headers,
            json={"type": "group", "participant_ids": ["user-2"], "name": "Design"},
        )
        conversation_id = response.json()["id"]

        forbidden = client.post(
            f"/conversations/{conversation_id}/participants",
            headers=bob_headers,
            json={"user_ids": ["user-3"]},
        )
        assert forbidden.status_code == 403

        added = client.post(
            f"/conversations/{conversation_id}/participants",
            headers=alice_headers,
            json={"user_ids": ["user-3"]},
        )
        assert added.status_code == 200
        assert client.get(f"/conversations/{conversation_id}", headers=carol_headers).status_code == 200

        left = client.post(f"/conversations/{conversation_id}/leave", headers=carol_headers)
        assert left.json() == {"success": True}
        assert client.get(f"/conversations/{conversation_id}", headers=carol_headers).status_code == 404

        removed = client.delete(
            f"/conversations/{conversation_id}/participants/user-2", headers=alice_headers
        )
        assert removed.status_code == 200

    def test_update_and_delete(self, client, alice_headers, bob_headers):
        response = client.post(
            "/conversations",
            headers=alice_headers,
            json={"type": "group", "participant_ids": ["user-2"], "name": "Ops"},
        )
        conversation_id = response.json()["id"]

        patched = client.patch(
            f"/conversations/{conversation_id}",
            headers=alice_headers,
            json={"name": "Ops on-call", "settings": {"muted": True}},
        ).json()
        assert patched["name"] == "Ops on-call"
        assert patched["settings"] == {"muted": True}

        assert client.delete(f"/conversations/{conversation_id}", headers=bob_headers).status_code == 403
        assert client.delete(f"/conversations/{conversation_id}", headers=alice_headers).status_code == 200
        assert client.get(f"/conversations/{conversation_id}", headers=alice_headers).status_code == 404


# =============================================================================
# MESSAGES
# =============================================================================


class TestMessageEndpoints:
    def test_send_read_and_unread_count(self, client, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)
        sent = send(client, alice_headers, conversation_id, content="hello bob")
        assert sent.status_code == 201
        message_id = sent.json()["id"]

        unread = client.get(f"/conversations/{conversation_id}/unread-count", headers=bob_headers)
        assert unread.json()["unread_count"] == 1

        receipt = client.post(
            f"/conversations/{conversation_id}/messages/{message_id}/read", headers=bob_headers
        )
        assert receipt.status_code == 200
        again = client.post(
            f"/conversations/{conversation_id}/messages/{message_id}/read", headers=bob_headers
        )
        assert again.json() == receipt.json()

        unread = client.get(f"/conversations/{conversation_id}/unread-count", headers=bob_headers)
        assert unread.json()["unread_count"] == 0

        shown = client.get(
            f"/conversations/{conversation_id}/messages/{message_id}", headers=alice_headers
        ).json()
        assert shown["read_count"] == 1

        receipts = client.get(
            f"/conversations/{conversation_id}/messages/{message_id}/receipts", headers=alice_headers
        ).json()
        assert [r["user_id"] for r in receipts] == ["user-2"]

    def test_marking_own_message_is_unprocessable(self, client, alice_headers):
        conversation_id = create_direct(client, alice_headers)
        message_id = send(client, alice_headers, conversation_id, content="note to self").json()["id"]

        response = client.post(
            f"/conversations/{conversation_id}/messages/{message_id}/read", headers=alice_headers
        )
        assert response.status_code == 422

    def test_mark_all_read(self, client, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)
        for text in ("one", "two", "three"):
            send(client, alice_headers, conversation_id, content=text)

        response = client.post(f"/conversations/{conversation_id}/read", headers=bob_headers)
        assert response.json()["marked"] == 3

    def test_list_messages_pages(self, client, clock, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)
        for i in range(3):
            send(client, alice_headers, conversation_id, content=f"m{i}")
            clock.advance(1)

        page = client.get(
            f"/conversations/{conversation_id}/messages",
            headers=bob_headers,
            params={"per_page": 2},
        ).json()
        assert [m["content"] for m in page["messages"]] == ["m2", "m1"]
        assert page["last_page"] == 2

    def test_attachment_message(self, client, alice_headers):
        conversation_id = create_direct(client, alice_headers)
        response = send(
            client,
            alice_headers,
            conversation_id,
            attachment={
                "path": "uploads/q3.pdf",
                "name": "q3.pdf",
                "mime_type": "application/pdf",
                "size_bytes": 2048,
            },
        )

        body = response.json()
        assert response.status_code == 201
        assert body["type"] == "file"
        assert body["attachment"]["url"] == "/attachments/uploads/q3.pdf"
        assert body["attachment"]["formatted_size"] == "2 KB"

    def test_empty_message_is_unprocessable(self, client, alice_headers):
        conversation_id = create_direct(client, alice_headers)

        assert send(client, alice_headers, conversation_id, content=" ").status_code == 422

    def test_edit_window(self, client, clock, alice_headers):
        conversation_id = create_direct(client, alice_headers)
        message_id = send(client, alice_headers, conversation_id, content="teh").json()["id"]
        url = f"/conversations/{conversation_id}/messages/{message_id}"

        edited = client.patch(url, headers=alice_headers, json={"content": "the"})
        assert edited.json()["is_edited"] is True

        clock.advance(301)
        late = client.patch(url, headers=alice_headers, json={"content": "thee"})
        assert late.status_code == 422
        assert late.json() == {"error": "Message cannot be edited"}

    def test_deleted_message_hides_content(self, client, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)
        message_id = send(client, bob_headers, conversation_id, content="secret").json()["id"]
        url = f"/conversations/{conversation_id}/messages/{message_id}"

        assert client.delete(url, headers=bob_headers).json() == {"success": True}
        tombstone = client.get(url, headers=alice_headers).json()
        assert tombstone["is_deleted"] is True
        assert tombstone["content"] is None
        assert client.get(url, headers=bob_headers).status_code == 404

    def test_search_and_stats(self, client, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)
        send(client, alice_headers, conversation_id, content="quarterly report draft")
        send(client, bob_headers, conversation_id, content="thanks")

        results = client.get("/search", headers=bob_headers, params={"q": "report"}).json()
        assert [m["content"] for m in results["messages"]] == ["quarterly report draft"]
        assert client.get("/search", headers=bob_headers, params={"q": "r"}).status_code == 422

        stats = client.get("/stats", headers=bob_headers).json()
        assert stats == {"total_conversations": 1, "unread_messages": 1, "messages_sent": 1}


# =============================================================================
# TYPING / PRESENCE
# =============================================================================


class TestRealtimeEndpoints:
    def test_typing(self, client, clock, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)
        url = f"/conversations/{conversation_id}/typing"

        assert client.post(url, headers=alice_headers, json={"is_typing": True}).status_code == 204
        assert client.get(url, headers=bob_headers).json()["user_ids"] == ["user-1"]
        assert client.get(url, headers=alice_headers).json()["user_ids"] == []

        clock.advance(5)
        assert client.get(url, headers=bob_headers).json()["user_ids"] == []

    def test_presence(self, client, clock, alice_headers, bob_headers):
        assert client.post("/presence/online", headers=alice_headers).status_code == 204

        assert client.get("/presence/online", headers=bob_headers).json() == {"user_ids": ["user-1"]}
        checked = client.post(
            "/presence/check", headers=bob_headers, json={"user_ids": ["user-1", "user-3"]}
        ).json()
        assert checked == {"statuses": {"user-1": True, "user-3": False}}

        client.post("/presence/offline", headers=alice_headers)
        status = client.get("/presence/user-1", headers=bob_headers).json()
        assert status["is_online"] is False
        assert status["last_seen_at"] is not None

    def test_last_seen_heartbeat(self, client, alice_headers, bob_headers):
        assert client.post("/presence/last-seen", headers=bob_headers).status_code == 204

        status = client.get("/presence/user-2", headers=alice_headers).json()
        assert status["is_online"] is False
        assert status["last_seen_at"] is not None

    def test_blank_presence_ids_are_rejected_not_500(self, client, alice_headers):
        checked = client.post(
            "/presence/check", headers=alice_headers, json={"user_ids": ["user-2", "  "]}
        )
        status = client.get("/presence/%20", headers=alice_headers)

        assert checked.status_code == 422
        assert status.status_code == 404


# =============================================================================
# WEBSOCKET
# =============================================================================


class TestWebSocket:
    def test_invalid_token_is_refused(self, client):
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect("/ws?token=garbage") as ws:
                ws.receive_json()

    def test_subscribe_and_ping(self, client, service_secret, alice_headers, bob_headers):
        conversation_id = create_direct(client, alice_headers)
        token = generate_jwt_token(BOB, service_secret)

        with client.websocket_connect(f"/ws?token={token}") as ws:
            ws.send_json({"action": "subscribe", "topic": f"conversation.{conversation_id}"})
            assert ws.receive_json() == {
                "event": "subscription",
                "topic": f"conversation.{conversation_id}",
                "authorized": True,
            }

            ws.send_json({"action": "subscribe", "topic": "user.user-1"})
            assert ws.receive_json()["authorized"] is False

            ws.send_json({"action": "subscribe", "topic": "presence"})
            member = ws.receive_json()["member"]
            assert member["id"] == "user-2"

            ws.send_json({"action": "ping"})
            assert ws.receive_json() == {"event": "pong"}

            online = client.get("/presence/online", headers=alice_headers).json()
            assert online == {"user_ids": ["user-2"]}

    def test_outsider_cannot_subscribe(self, client, service_secret, alice_headers):
        conversation_id = create_direct(client, alice_headers)
        token = generate_jwt_token(CAROL, service_secret)

        with client.websocket_connect(f"/ws?token={token}") as ws:
            ws.send_json({"action": "subscribe", "topic": f"conversation.{conversation_id}"})
            assert ws.receive_json()["authorized"] is False

            ws.send_json({"action": "dance"})
            assert ws.receive_json()["event"] == "error"
