"""
Shared test doubles: a controllable clock, a recording EventSink and a
fully wired in-memory chat core.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from chatline.config.settings import ChatConfig
from chatline.domain.entities.conversation import Conversation, ConversationType
from chatline.domain.ports.event_sink import EventSink
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.user_id import UserId
from chatline.infrastructure.memory import (
    InMemoryConversationRepository,
    InMemoryDatabase,
    InMemoryMessageRepository,
    InMemoryParticipantRepository,
    InMemoryPresenceStore,
    InMemoryReadReceiptRepository,
    InMemoryTypingStore,
    InMemoryUserRepository,
)
from chatline.services import (
    ChannelAuthorizer,
    ConversationStore,
    EventBroadcaster,
    MessageStore,
    PresenceTracker,
    ReadReceiptTracker,
    TypingTracker,
)

ALICE = ChatParticipant(UserId("user-1"), name="Alice", email="alice@example.com")
BOB = ChatParticipant(UserId("user-2"), name="Bob", email="bob@example.com")
CAROL = ChatParticipant(UserId("user-3"), name="Carol", email="carol@example.com")
DAVE = ChatParticipant(UserId("user-4"), name="Dave")


def run(coro):
    """Drive a coroutine to completion from a synchronous test."""
    return asyncio.run(coro)


class FakeClock:
    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingSink(EventSink):
    """EventSink that keeps every envelope; selected users can fail or stall."""

    def __init__(self):
        self.sent: list[tuple[UserId, dict[str, Any]]] = []
        self.failing: set[UserId] = set()
        self.stalled: set[UserId] = set()

    async def send(self, user_id: UserId, envelope: dict[str, Any]) -> None:
        if user_id in self.failing:
            raise ConnectionError("socket closed")
        if user_id in self.stalled:
            await asyncio.sleep(5)
        self.sent.append((user_id, envelope))

    def received_by(self, user: ChatParticipant) -> list[dict[str, Any]]:
        return [envelope for user_id, envelope in self.sent if user_id == user.id]


@dataclass
class ChatCore:
    config: ChatConfig
    clock: FakeClock
    db: InMemoryDatabase
    conversations: ConversationStore
    messages: MessageStore
    receipts: ReadReceiptTracker
    presence: PresenceTracker
    typing: TypingTracker
    authorizer: ChannelAuthorizer
    broadcaster: EventBroadcaster
    sink: RecordingSink = field(default_factory=RecordingSink)

    async def direct(self, a: ChatParticipant, b: ChatParticipant) -> Conversation:
        return await self.conversations.create(a.id, ConversationType.DIRECT, [b.id])

    async def group(
        self, creator: ChatParticipant, *members: ChatParticipant, name: str = "Team"
    ) -> Conversation:
        return await self.conversations.create(
            creator.id, ConversationType.GROUP, [m.id for m in members], name=name
        )


def build_core(config: Optional[ChatConfig] = None, clock: Optional[FakeClock] = None) -> ChatCore:
    config = config or ChatConfig()
    clock = clock or FakeClock()
    db = InMemoryDatabase()
    users = InMemoryUserRepository(db)
    for participant in (ALICE, BOB, CAROL, DAVE):
        run(users.save(participant))

    message_repo = InMemoryMessageRepository(db)
    conversations = ConversationStore(
        config,
        InMemoryConversationRepository(db),
        InMemoryParticipantRepository(db),
        users,
        clock,
    )
    authorizer = ChannelAuthorizer(config, conversations, clock)
    sink = RecordingSink()
    return ChatCore(
        config=config,
        clock=clock,
        db=db,
        conversations=conversations,
        messages=MessageStore(config, message_repo, conversations, clock),
        receipts=ReadReceiptTracker(
            config, InMemoryReadReceiptRepository(db), message_repo, conversations, clock
        ),
        presence=PresenceTracker(config, InMemoryPresenceStore(clock), clock),
        typing=TypingTracker(config, InMemoryTypingStore(clock)),
        authorizer=authorizer,
        broadcaster=EventBroadcaster(config, authorizer, sink, clock),
        sink=sink,
    )
