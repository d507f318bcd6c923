"""
Tests for ChannelAuthorizer and EventBroadcaster.

The broadcaster is exercised against RecordingSink, so envelopes can be
inspected directly.
"""

from dataclasses import replace

from chatline.domain.events import (
    PRESENCE_TOPIC,
    MessageRead,
    UserOnline,
    conversation_topic,
    typing_topic,
    user_topic,
)
from chatline.utils.formatting import gravatar_url

from helpers import ALICE, BOB, CAROL, DAVE, build_core, run


# =============================================================================
# CHANNEL AUTHORIZER
# =============================================================================


class TestChannelAuthorizer:
    def test_conversation_topic_requires_active_membership(self, core):
        conversation = run(core.direct(ALICE, BOB))
        topic = conversation_topic(conversation.id)

        assert run(core.authorizer.authorize(topic, ALICE)) is True
        assert run(core.authorizer.authorize(topic, CAROL)) is False

    def test_former_participant_is_denied(self, core):
        conversation = run(core.group(ALICE, BOB))
        run(core.conversations.leave(conversation.id, BOB.id))

        assert run(core.authorizer.authorize(conversation_topic(conversation.id), BOB)) is False

    def test_user_topic_is_private(self, core):
        assert run(core.authorizer.authorize(user_topic(ALICE.id), ALICE)) is True
        assert run(core.authorizer.authorize(user_topic(ALICE.id), BOB)) is False

    def test_presence_returns_descriptor(self, core, clock):
        descriptor = run(core.authorizer.authorize(PRESENCE_TOPIC, ALICE))

        assert descriptor == {
            "id": "user-1",
            "name": "Alice",
            "avatar": gravatar_url("alice@example.com"),
            "joined_at": clock().isoformat(),
        }

    def test_presence_denied_when_disabled(self, chat_config):
        core = build_core(replace(chat_config, presence_enabled=False))

        assert run(core.authorizer.authorize(PRESENCE_TOPIC, ALICE)) is False

    def test_typing_topic_follows_feature_and_membership(self, chat_config):
        core = build_core(chat_config)
        conversation = run(core.direct(ALICE, BOB))
        assert run(core.authorizer.authorize(typing_topic(conversation.id), BOB)) is True

        disabled = build_core(replace(chat_config, typing_enabled=False))
        other = run(disabled.direct(ALICE, BOB))
        assert not run(disabled.authorizer.authorize(typing_topic(other.id), BOB))

    def test_unknown_and_malformed_topics_are_denied(self, core):
        for topic in ("admin.1", "conversation.", "conversation.not-a-uuid", "typing", ""):
            assert not run(core.authorizer.authorize(topic, ALICE))


# =============================================================================
# EVENT BROADCASTER
# =============================================================================


class TestEventBroadcaster:
    def test_publish_skips_originator(self, core, clock):
        conversation = run(core.group(ALICE, BOB, CAROL))
        topic = conversation_topic(conversation.id)
        for user in (ALICE, BOB, CAROL):
            assert run(core.broadcaster.subscribe(topic, user))

        event = MessageRead(
            message_id=run(core.messages.append(conversation.id, BOB.id, content="hi")).id,
            conversation_id=conversation.id,
            reader_id=ALICE.id,
            read_at=clock(),
        )
        delivered = run(core.broadcaster.publish(event, [topic], originator_id=ALICE.id))

        assert delivered == 2
        assert core.sink.received_by(ALICE) == []
        envelope = core.sink.received_by(BOB)[0]
        assert envelope["event"] == "Chatline.MessageRead"
        assert envelope["topic"] == topic
        assert envelope["data"]["reader_id"] == "user-1"
        assert envelope["timestamp"] == clock().isoformat()

    def test_denied_subscription_is_not_registered(self, core):
        conversation = run(core.direct(ALICE, BOB))
        topic = conversation_topic(conversation.id)

        assert not run(core.broadcaster.subscribe(topic, CAROL))
        assert core.broadcaster.subscribers(topic) == set()

    def test_subscribers_are_reauthorized_on_publish(self, core):
        conversation = run(core.group(ALICE, BOB))
        topic = conversation_topic(conversation.id)
        run(core.broadcaster.subscribe(topic, BOB))
        run(core.conversations.leave(conversation.id, BOB.id))

        assert run(core.broadcaster.publish(UserOnline(ALICE.id), [topic])) == 0
        assert core.sink.received_by(BOB) == []

    def test_failing_sink_does_not_raise(self, core):
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, BOB))
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, CAROL))
        core.sink.failing.add(BOB.id)

        delivered = run(core.broadcaster.publish(UserOnline(DAVE.id), [PRESENCE_TOPIC]))
        assert delivered == 1
        assert len(core.sink.received_by(CAROL)) == 1

    def test_slow_subscriber_is_bounded_by_timeout(self, chat_config):
        core = build_core(replace(chat_config, broadcast_timeout=0.05))
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, BOB))
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, CAROL))
        core.sink.stalled.add(BOB.id)

        delivered = run(core.broadcaster.publish(UserOnline(DAVE.id), [PRESENCE_TOPIC]))
        assert delivered == 1

    def test_disabled_broadcasting_is_a_no_op(self, chat_config):
        core = build_core(replace(chat_config, broadcasting_enabled=False))
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, BOB))

        assert run(core.broadcaster.publish(UserOnline(ALICE.id), [PRESENCE_TOPIC])) == 0
        assert core.sink.sent == []

    def test_unsubscribe_all(self, core):
        conversation = run(core.direct(ALICE, BOB))
        run(core.broadcaster.subscribe(PRESENCE_TOPIC, BOB))
        run(core.broadcaster.subscribe(conversation_topic(conversation.id), BOB))
        core.broadcaster.unsubscribe_all(BOB.id)

        assert core.broadcaster.subscribers(PRESENCE_TOPIC) == set()
        assert core.broadcaster.subscribers(conversation_topic(conversation.id)) == set()
