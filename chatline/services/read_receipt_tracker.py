"""
Read receipt tracker - who has seen which message.

Receipts are keyed on (message_id, user_id). Both single and bulk marking go
through insert-or-ignore upserts, so concurrent calls never produce two rows
and the first ``read_at`` always wins.
"""

import logging
from typing import Optional

from chatline.config.settings import ChatConfig
from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.domain.exceptions import DomainValidationError, EntityNotFoundError
from chatline.domain.ports.repositories import MessageRepository, ReadReceiptRepository
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.observability.metrics import increment_read_receipts
from chatline.services.conversation_store import ConversationStore
from chatline.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class ReadReceiptTracker:
    def __init__(
        self,
        config: ChatConfig,
        receipts: ReadReceiptRepository,
        messages: MessageRepository,
        conversations: ConversationStore,
        clock: Clock = utc_now,
    ):
        self._config = config
        self._receipts = receipts
        self._messages = messages
        self._conversations = conversations
        self._clock = clock

    async def mark_read(
        self,
        message_id: MessageId,
        user_id: UserId,
        conversation_id: Optional[ConversationId] = None,
    ) -> ReadReceipt:
        message = await self._messages.get_by_id(message_id)
        if message is None or message.is_deleted:
            raise EntityNotFoundError("Message not found")
        if conversation_id is not None and message.conversation_id != conversation_id:
            raise EntityNotFoundError("Message not found")
        await self._conversations.require_active_participant(
            message.conversation_id, user_id
        )
        if message.author_id == user_id:
            raise DomainValidationError("Cannot mark your own message as read")

        candidate = ReadReceipt(message_id=message_id, user_id=user_id, read_at=self._clock())
        stored, created = await self._receipts.create_if_absent(candidate)
        if created:
            increment_read_receipts()
            logger.debug(f"[ReadReceipt] {user_id} read {message_id}")
        return stored

    async def mark_all_read(self, conversation_id: ConversationId, user_id: UserId) -> int:
        await self._conversations.require_active_participant(conversation_id, user_id)

        now = self._clock()
        # Snapshot: messages created after this point are left unread
        candidates = await self._messages.unread_candidates(
            conversation_id, user_id, until=now
        )
        if not candidates:
            return 0
        already_read = await self._receipts.read_message_ids(user_id, candidates)
        pending = [
            ReadReceipt(message_id=message_id, user_id=user_id, read_at=now)
            for message_id in candidates
            if message_id not in already_read
        ]
        if not pending:
            return 0

        inserted = await self._receipts.create_many(pending)
        increment_read_receipts(inserted)
        logger.info(f"[ReadReceipt] {user_id} marked {inserted} messages read in {conversation_id}")
        return inserted

    async def read_count(self, message_id: MessageId) -> int:
        return await self._receipts.count(message_id)

    async def readers(self, message_id: MessageId) -> list[ReadReceipt]:
        return await self._receipts.readers(message_id)

    async def _unread(self, conversation_id: ConversationId, user_id: UserId) -> int:
        candidates = await self._messages.unread_candidates(conversation_id, user_id)
        if not candidates:
            return 0
        already_read = await self._receipts.read_message_ids(user_id, candidates)
        return len(candidates) - len(already_read)

    async def unread_count(self, conversation_id: ConversationId, user_id: UserId) -> int:
        await self._conversations.require_active_participant(conversation_id, user_id)
        return await self._unread(conversation_id, user_id)

    async def total_unread(self, user_id: UserId) -> int:
        total = 0
        for conversation_id in await self._conversations.active_conversation_ids(user_id):
            total += await self._unread(conversation_id, user_id)
        return total
