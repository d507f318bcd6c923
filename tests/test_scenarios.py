"""
End-to-end flows through the command handlers: store mutation first, then
the broadcast to subscribers.
"""

import asyncio

import pytest

from chatline.application.commands.conversations import (
    RemoveParticipantCommand,
    RemoveParticipantHandler,
)
from chatline.application.commands.messages import (
    MarkAllReadCommand,
    MarkAllReadHandler,
    MarkReadCommand,
    MarkReadHandler,
    SendMessageCommand,
    SendMessageHandler,
)
from chatline.application.commands.realtime import (
    SetOfflineCommand,
    SetOfflineHandler,
    SetOnlineCommand,
    SetOnlineHandler,
    SetTypingCommand,
    SetTypingHandler,
)
from chatline.application.queries.realtime import GetTypingUsersHandler, GetTypingUsersQuery
from chatline.domain.entities.conversation import ConversationType
from chatline.domain.events import PRESENCE_TOPIC, conversation_topic, typing_topic
from chatline.domain.exceptions import ConflictError, EntityNotFoundError

from helpers import ALICE, BOB, CAROL, run


def send_handler(core):
    return SendMessageHandler(core.config, core.messages, core.typing, core.broadcaster)


class TestScenarios:
    def test_direct_message_and_mark_all_read(self, core, clock):
        """Scenario: direct chat, one message, recipient catches up."""
        conversation = run(core.direct(ALICE, BOB))
        _, participants = run(core.conversations.get(conversation.id, ALICE.id))
        assert len(participants) == 2

        run(core.broadcaster.subscribe(conversation_topic(conversation.id), BOB))
        clock.advance(5)
        message = run(
            send_handler(core).execute(
                SendMessageCommand(conversation_id=conversation.id, author=ALICE, content="hi")
            )
        )
        refreshed, _ = run(core.conversations.get(conversation.id, BOB.id))
        assert refreshed.updated_at == message.created_at

        [envelope] = core.sink.received_by(BOB)
        assert envelope["event"] == "Chatline.MessageSent"
        assert envelope["data"]["message"]["content"] == "hi"

        marked = run(
            MarkAllReadHandler(core.receipts).execute(
                MarkAllReadCommand(conversation_id=conversation.id, reader_id=BOB.id)
            )
        )
        assert marked == 1
        assert run(core.receipts.unread_count(conversation.id, BOB.id)) == 0
        assert run(core.receipts.read_count(message.id)) == 1

    def test_typing_visible_to_others_until_ttl(self, core, clock):
        """Scenario: typing indicator appears for others and expires on its own."""
        conversation = run(core.group(ALICE, BOB, CAROL))
        run(core.broadcaster.subscribe(typing_topic(conversation.id), BOB))
        typing = SetTypingHandler(core.conversations, core.typing, core.broadcaster)
        query = GetTypingUsersHandler(core.conversations, core.typing)

        run(typing.execute(SetTypingCommand(conversation_id=conversation.id, user=ALICE, is_typing=True)))

        assert run(query.execute(GetTypingUsersQuery(conversation.id, ALICE.id))) == set()
        assert run(query.execute(GetTypingUsersQuery(conversation.id, BOB.id))) == {ALICE.id}
        [envelope] = core.sink.received_by(BOB)
        assert envelope["data"] == {
            "user_id": "user-1",
            "user_name": "Alice",
            "conversation_id": conversation.id.value,
            "is_typing": True,
        }

        clock.advance(core.config.typing_ttl)
        assert run(query.execute(GetTypingUsersQuery(conversation.id, BOB.id))) == set()

    def test_sending_clears_typing(self, core):
        conversation = run(core.direct(ALICE, BOB))
        run(core.typing.set_typing(conversation.id, ALICE.id, True))

        run(send_handler(core).execute(
            SendMessageCommand(conversation_id=conversation.id, author=ALICE, content="done")
        ))
        assert run(core.typing.typing_users(conversation.id)) == set()

    def test_outsider_and_removed_member(self, core):
        """Scenario: outsiders see nothing; removal keeps history intact."""
        conversation = run(core.group(ALICE, BOB))
        history = run(core.messages.append(conversation.id, BOB.id, content="for the record"))

        with pytest.raises(EntityNotFoundError):
            run(core.messages.list_for_conversation(conversation.id, CAROL.id))

        run(core.broadcaster.subscribe(conversation_topic(conversation.id), BOB))
        run(
            RemoveParticipantHandler(core.conversations, core.broadcaster).execute(
                RemoveParticipantCommand(conversation.id, ALICE.id, BOB.id)
            )
        )

        row = core.db.participants[(conversation.id.value, BOB.id.value)]
        assert row.left_at is not None
        assert conversation.id not in [c.id for c in run(core.conversations.list_for_user(BOB.id))]
        assert core.broadcaster.subscribers(conversation_topic(conversation.id)) == set()
        kept = run(core.messages.get(conversation.id, history.id, ALICE.id))
        assert kept.content == "for the record"
        assert kept.author_id == BOB.id

    def test_concurrent_direct_creation_yields_one_conversation(self, core):
        async def race():
            return await asyncio.gather(
                core.conversations.create(ALICE.id, ConversationType.DIRECT, [BOB.id]),
                core.conversations.create(BOB.id, ConversationType.DIRECT, [ALICE.id]),
                return_exceptions=True,
            )

        results = run(race())

        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(conflicts) == 1
        assert len(core.db.conversations) == 1

    def test_repeated_mark_read_returns_first_receipt(self, core, clock):
        conversation = run(core.direct(ALICE, BOB))
        message = run(core.messages.append(conversation.id, ALICE.id, content="ping"))
        run(core.broadcaster.subscribe(conversation_topic(conversation.id), ALICE))
        handler = MarkReadHandler(core.config, core.receipts, core.broadcaster)
        command = MarkReadCommand(conversation.id, message.id, BOB.id)

        first = run(handler.execute(command))
        clock.advance(30)
        second = run(handler.execute(command))

        assert first == second
        assert first.read_at == message.created_at
        assert core.sink.received_by(ALICE)[0]["data"]["reader_id"] == "user-2"

    def test_online_announced_only_on_transition(self, core):
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, BOB))
        handler = SetOnlineHandler(core.presence, core.broadcaster)

        run(handler.execute(SetOnlineCommand(ALICE.id)))
        run(handler.execute(SetOnlineCommand(ALICE.id)))

        assert [e["event"] for e in core.sink.received_by(BOB)] == ["Chatline.UserOnline"]

    def test_sign_off_is_announced_to_everyone_but_the_user(self, core, clock):
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, ALICE))
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, BOB))
        run(SetOnlineHandler(core.presence, core.broadcaster).execute(SetOnlineCommand(ALICE.id)))

        clock.advance(30)
        run(SetOfflineHandler(core.presence, core.broadcaster).execute(SetOfflineCommand(ALICE.id)))

        events = [e["event"] for e in core.sink.received_by(BOB)]
        assert events == ["Chatline.UserOnline", "Chatline.UserOffline"]
        offline = core.sink.received_by(BOB)[-1]["data"]
        assert offline["user_id"] == "user-1"
        assert offline["is_online"] is False
        assert offline["last_seen_at"] is not None
        assert core.sink.received_by(ALICE) == []
        assert not run(core.presence.is_online(ALICE.id))
