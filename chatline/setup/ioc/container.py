"""
Dishka DI Container Setup.

Providers:
- ChatProvider: ChatConfig, services, broadcaster, WebSocket sink (APP) and
  command/query handlers (REQUEST)
- MemoryStorageProvider: in-process repositories and TTL stores
- PrismaStorageProvider (prisma_provider.py): PostgreSQL repositories + Redis
  TTL stores

``create_container`` picks the storage provider from ``STORAGE_BACKEND``.

Dishka concepts:
- Provider: Class that defines how to create dependencies
- @provide: Decorator to mark factory methods
- Scope: Lifecycle of dependency (APP = singleton, REQUEST = per-request)

Flow:
  Container → InMemoryConversationRepository → ConversationStore → CreateConversationHandler
                          ↓
              resolved through the ConversationRepository port
"""

from typing import Optional

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from chatline.application.commands.conversations import (
    AddParticipantsHandler,
    CreateConversationHandler,
    DeleteConversationHandler,
    GetOrCreateDirectHandler,
    RemoveParticipantHandler,
    UpdateConversationHandler,
)
from chatline.application.commands.messages import (
    DeleteMessageHandler,
    EditMessageHandler,
    MarkAllReadHandler,
    MarkReadHandler,
    SendMessageHandler,
)
from chatline.application.commands.realtime import (
    SetOfflineHandler,
    SetOnlineHandler,
    SetTypingHandler,
    TouchLastSeenHandler,
)
from chatline.application.queries.conversations import (
    GetConversationHandler,
    GetUserStatsHandler,
    ListConversationsHandler,
)
from chatline.application.queries.messages import (
    GetMessageHandler,
    GetReadReceiptsHandler,
    GetUnreadCountHandler,
    ListMessagesHandler,
    SearchHandler,
)
from chatline.application.queries.realtime import (
    CheckPresenceHandler,
    GetOnlineUsersHandler,
    GetPresenceHandler,
    GetTypingUsersHandler,
)
from chatline.config.settings import ChatConfig, Config
from chatline.domain.ports import EventSink, PresenceStore, TypingStore
from chatline.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    ParticipantRepository,
    ReadReceiptRepository,
    UserRepository,
)
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
from chatline.infrastructure.realtime import WebSocketConnectionManager
from chatline.services import (
    ChannelAuthorizer,
    ConversationStore,
    EventBroadcaster,
    MessageStore,
    PresenceTracker,
    ReadReceiptTracker,
    TypingTracker,
)
from chatline.utils.clock import Clock, utc_now


class ChatProvider(Provider):
    """
    Chat core dependency provider.

    Services are app-scoped: the broadcaster's subscription registry and the
    WebSocket connections must be shared by every request.
    """

    def __init__(self, chat_config: ChatConfig, clock: Clock = utc_now):
        super().__init__()
        self._chat_config = chat_config
        self._clock = clock

    # ==================== CONFIG ====================

    @provide(scope=Scope.APP)
    def get_chat_config(self) -> ChatConfig:
        return self._chat_config

    # ==================== STORES / TRACKERS ====================

    @provide(scope=Scope.APP)
    def get_conversation_store(
        self,
        config: ChatConfig,
        conversations: ConversationRepository,
        participants: ParticipantRepository,
        users: UserRepository,
    ) -> ConversationStore:
        return ConversationStore(config, conversations, participants, users, self._clock)

    @provide(scope=Scope.APP)
    def get_message_store(
        self,
        config: ChatConfig,
        messages: MessageRepository,
        conversations: ConversationStore,
    ) -> MessageStore:
        return MessageStore(config, messages, conversations, self._clock)

    @provide(scope=Scope.APP)
    def get_read_receipt_tracker(
        self,
        config: ChatConfig,
        receipts: ReadReceiptRepository,
        messages: MessageRepository,
        conversations: ConversationStore,
    ) -> ReadReceiptTracker:
        return ReadReceiptTracker(config, receipts, messages, conversations, self._clock)

    @provide(scope=Scope.APP)
    def get_presence_tracker(
        self, config: ChatConfig, store: PresenceStore
    ) -> PresenceTracker:
        return PresenceTracker(config, store, self._clock)

    @provide(scope=Scope.APP)
    def get_typing_tracker(self, config: ChatConfig, store: TypingStore) -> TypingTracker:
        return TypingTracker(config, store)

    # ==================== REALTIME ====================

    @provide(scope=Scope.APP)
    def get_channel_authorizer(
        self, config: ChatConfig, conversations: ConversationStore
    ) -> ChannelAuthorizer:
        return ChannelAuthorizer(config, conversations, self._clock)

    @provide(scope=Scope.APP)
    def get_connection_manager(self) -> WebSocketConnectionManager:
        return WebSocketConnectionManager()

    @provide(scope=Scope.APP)
    def get_event_sink(self, manager: WebSocketConnectionManager) -> EventSink:
        return manager

    @provide(scope=Scope.APP)
    def get_event_broadcaster(
        self, config: ChatConfig, authorizer: ChannelAuthorizer, sink: EventSink
    ) -> EventBroadcaster:
        return EventBroadcaster(config, authorizer, sink, self._clock)

    # ==================== COMMAND HANDLERS ====================
    # Auto-wired from the handler __init__ signatures

    create_conversation_handler = provide(CreateConversationHandler, scope=Scope.REQUEST)
    get_or_create_direct_handler = provide(GetOrCreateDirectHandler, scope=Scope.REQUEST)
    add_participants_handler = provide(AddParticipantsHandler, scope=Scope.REQUEST)
    remove_participant_handler = provide(RemoveParticipantHandler, scope=Scope.REQUEST)
    update_conversation_handler = provide(UpdateConversationHandler, scope=Scope.REQUEST)
    delete_conversation_handler = provide(DeleteConversationHandler, scope=Scope.REQUEST)

    send_message_handler = provide(SendMessageHandler, scope=Scope.REQUEST)
    edit_message_handler = provide(EditMessageHandler, scope=Scope.REQUEST)
    delete_message_handler = provide(DeleteMessageHandler, scope=Scope.REQUEST)
    mark_read_handler = provide(MarkReadHandler, scope=Scope.REQUEST)
    mark_all_read_handler = provide(MarkAllReadHandler, scope=Scope.REQUEST)

    set_typing_handler = provide(SetTypingHandler, scope=Scope.REQUEST)
    set_online_handler = provide(SetOnlineHandler, scope=Scope.REQUEST)
    set_offline_handler = provide(SetOfflineHandler, scope=Scope.REQUEST)
    touch_last_seen_handler = provide(TouchLastSeenHandler, scope=Scope.REQUEST)

    # ==================== QUERY HANDLERS ====================

    list_conversations_handler = provide(ListConversationsHandler, scope=Scope.REQUEST)
    get_conversation_handler = provide(GetConversationHandler, scope=Scope.REQUEST)
    get_user_stats_handler = provide(GetUserStatsHandler, scope=Scope.REQUEST)

    list_messages_handler = provide(ListMessagesHandler, scope=Scope.REQUEST)
    get_message_handler = provide(GetMessageHandler, scope=Scope.REQUEST)
    get_read_receipts_handler = provide(GetReadReceiptsHandler, scope=Scope.REQUEST)
    get_unread_count_handler = provide(GetUnreadCountHandler, scope=Scope.REQUEST)
    search_handler = provide(SearchHandler, scope=Scope.REQUEST)

    get_typing_users_handler = provide(GetTypingUsersHandler, scope=Scope.REQUEST)
    get_online_users_handler = provide(GetOnlineUsersHandler, scope=Scope.REQUEST)
    check_presence_handler = provide(CheckPresenceHandler, scope=Scope.REQUEST)
    get_presence_handler = provide(GetPresenceHandler, scope=Scope.REQUEST)


class MemoryStorageProvider(Provider):
    """Single-process storage: state lives in this interpreter only."""

    def __init__(self, clock: Clock = utc_now):
        super().__init__()
        self._clock = clock

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        return InMemoryDatabase()

    @provide(scope=Scope.APP)
    def get_conversation_repository(self, db: InMemoryDatabase) -> ConversationRepository:
        return InMemoryConversationRepository(db)

    @provide(scope=Scope.APP)
    def get_participant_repository(self, db: InMemoryDatabase) -> ParticipantRepository:
        return InMemoryParticipantRepository(db)

    @provide(scope=Scope.APP)
    def get_message_repository(self, db: InMemoryDatabase) -> MessageRepository:
        return InMemoryMessageRepository(db)

    @provide(scope=Scope.APP)
    def get_read_receipt_repository(self, db: InMemoryDatabase) -> ReadReceiptRepository:
        return InMemoryReadReceiptRepository(db)

    @provide(scope=Scope.APP)
    def get_user_repository(self, db: InMemoryDatabase) -> UserRepository:
        return InMemoryUserRepository(db)

    @provide(scope=Scope.APP)
    def get_presence_store(self) -> PresenceStore:
        return InMemoryPresenceStore(self._clock)

    @provide(scope=Scope.APP)
    def get_typing_store(self) -> TypingStore:
        return InMemoryTypingStore(self._clock)


def create_container(
    config: type[Config] = Config,
    chat_config: Optional[ChatConfig] = None,
    clock: Clock = utc_now,
) -> AsyncContainer:
    """
    Create and configure the DI container.

    - Call this ONCE at app startup
    - Tests pass their own ChatConfig and a controllable clock
    """
    if config.STORAGE_BACKEND == "memory":
        storage: Provider = MemoryStorageProvider(clock)
    else:
        # Needs a generated Prisma client, so only imported for this backend
        from chatline.setup.ioc.prisma_provider import PrismaStorageProvider

        storage = PrismaStorageProvider(config)
    return make_async_container(
        ChatProvider(chat_config or ChatConfig.from_config(config), clock),
        storage,
    )
