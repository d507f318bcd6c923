"""
Dishka provider for the production backend: PostgreSQL through Prisma for the
durable rows, Redis for presence and typing TTL state.
"""

from typing import AsyncIterable

from dishka import Provider, Scope, provide
from redis.asyncio import Redis

from chatline.config.settings import Config
from chatline.domain.ports import PresenceStore, TypingStore
from chatline.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    ParticipantRepository,
    ReadReceiptRepository,
    UserRepository,
)
from chatline.infrastructure.cache import (
    RedisPresenceStore,
    RedisTypingStore,
    close_redis_client,
    create_redis_client,
)
from chatline.infrastructure.persistence import (
    PrismaConversationRepository,
    PrismaDatabase,
    PrismaMessageRepository,
    PrismaParticipantRepository,
    PrismaReadReceiptRepository,
    PrismaUserRepository,
)


class PrismaStorageProvider(Provider):
    """PostgreSQL (Prisma) for durable rows, Redis for TTL state."""

    def __init__(self, config: type[Config] = Config):
        super().__init__()
        self._config = config

    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[PrismaDatabase]:
        """
        Provide the connected Prisma client (singleton, app-scoped).

        Disconnected when the container closes.
        """
        database = PrismaDatabase(self._config.DATABASE_URL or None)
        await database.connect()
        yield database
        await database.disconnect()

    @provide(scope=Scope.APP)
    async def get_redis(self) -> AsyncIterable[Redis]:
        client = await create_redis_client(self._config.REDIS_URL)
        yield client
        await close_redis_client(client)

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.APP)
    def get_conversation_repository(self, db: PrismaDatabase) -> ConversationRepository:
        return PrismaConversationRepository(db.client)

    @provide(scope=Scope.APP)
    def get_participant_repository(self, db: PrismaDatabase) -> ParticipantRepository:
        return PrismaParticipantRepository(db.client)

    @provide(scope=Scope.APP)
    def get_message_repository(self, db: PrismaDatabase) -> MessageRepository:
        return PrismaMessageRepository(db.client)

    @provide(scope=Scope.APP)
    def get_read_receipt_repository(self, db: PrismaDatabase) -> ReadReceiptRepository:
        return PrismaReadReceiptRepository(db.client)

    @provide(scope=Scope.APP)
    def get_user_repository(self, db: PrismaDatabase) -> UserRepository:
        return PrismaUserRepository(db.client)

    # ==================== EPHEMERAL STATE ====================

    @provide(scope=Scope.APP)
    def get_presence_store(self, redis: Redis) -> PresenceStore:
        return RedisPresenceStore(redis, self._config.CACHE_PREFIX)

    @provide(scope=Scope.APP)
    def get_typing_store(self, redis: Redis) -> TypingStore:
        return RedisTypingStore(redis, self._config.CACHE_PREFIX)
