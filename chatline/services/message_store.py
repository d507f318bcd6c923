"""
Message store - the append-only message log of each conversation.

A message moves Created -> Edited* -> Deleted. Deleted is terminal: editing or
deleting a tombstone reports EntityNotFoundError.
"""

import logging
from typing import Any, Optional

from chatline.config.settings import ChatConfig
from chatline.domain.entities.message import Message, MessageType
from chatline.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
    FeatureDisabledError,
)
from chatline.domain.ports.repositories import MessagePage, MessageRepository
from chatline.domain.value_objects.attachment import Attachment
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.observability.metrics import increment_messages_sent
from chatline.services.conversation_store import ConversationStore
from chatline.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2


class MessageStore:
    def __init__(
        self,
        config: ChatConfig,
        messages: MessageRepository,
        conversations: ConversationStore,
        clock: Clock = utc_now,
    ):
        self._config = config
        self._messages = messages
        self._conversations = conversations
        self._clock = clock

    # ==================== Validation helpers ====================

    def _normalize_content(
        self, content: Optional[str], has_attachment: bool
    ) -> Optional[str]:
        if content is not None and not content.strip():
            content = None
        if content is None and not has_attachment and not self._config.allow_empty_messages:
            raise DomainValidationError("Message content cannot be empty")
        if content is not None and len(content) > self._config.max_message_length:
            raise DomainValidationError(
                f"Message exceeds {self._config.max_message_length} characters"
            )
        return content

    def _resolve_type(
        self, type: Optional[MessageType], attachment: Optional[Attachment]
    ) -> MessageType:
        if type is None:
            if attachment is None:
                return MessageType.TEXT
            return MessageType.IMAGE if attachment.is_image else MessageType.FILE

        if attachment is not None and type in (MessageType.TEXT, MessageType.SYSTEM):
            raise DomainValidationError(f"{type.value} messages cannot carry attachments")
        if attachment is None and type in (MessageType.FILE, MessageType.IMAGE):
            raise DomainValidationError(f"{type.value} messages require an attachment")
        return type

    def _validate_attachment(self, attachment: Attachment) -> None:
        if not self._config.file_uploads_enabled:
            raise DomainValidationError("File uploads are disabled")
        if attachment.size_bytes > self._config.max_attachment_kb * 1024:
            raise DomainValidationError(
                f"Attachment exceeds {self._config.max_attachment_kb} KB"
            )
        if attachment.extension not in self._config.allowed_attachment_types:
            raise DomainValidationError("Attachment type is not allowed")

    async def _load_live(self, message_id: MessageId) -> Message:
        message = await self._messages.get_by_id(message_id)
        if message is None or message.is_deleted:
            raise EntityNotFoundError("Message not found")
        return message

    # ==================== Mutations ====================

    async def append(
        self,
        conversation_id: ConversationId,
        author_id: UserId,
        content: Optional[str] = None,
        type: Optional[MessageType] = None,
        reply_to_id: Optional[MessageId] = None,
        attachment: Optional[Attachment] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Message:
        await self._conversations.require_active_participant(conversation_id, author_id)

        if attachment is not None:
            self._validate_attachment(attachment)
        type = self._resolve_type(type, attachment)
        content = self._normalize_content(content, attachment is not None)

        if reply_to_id is not None:
            parent = await self._messages.get_by_id(reply_to_id)
            if (
                parent is None
                or parent.is_deleted
                or parent.conversation_id != conversation_id
            ):
                raise DomainValidationError("Reply target is not in this conversation")

        message = Message.create(
            conversation_id=conversation_id,
            author_id=author_id,
            type=type,
            now=self._clock(),
            content=content,
            attachment=attachment,
            metadata=metadata,
            reply_to_id=reply_to_id,
        )
        await self._messages.save(message)
        await self._conversations.touch(conversation_id)

        increment_messages_sent(type.value)
        logger.info(f"[Message] {author_id} sent {type.value} {message.id} to {conversation_id}")
        return message

    async def edit(
        self, message_id: MessageId, requester_id: UserId, new_content: str
    ) -> Message:
        if not self._config.message_editing_enabled:
            raise FeatureDisabledError("message_editing")

        message = await self._load_live(message_id)
        await self._conversations.require_active_participant(
            message.conversation_id, requester_id
        )

        now = self._clock()
        elapsed = (now - message.created_at).total_seconds()
        if (
            message.author_id != requester_id
            or message.type != MessageType.TEXT
            or elapsed > self._config.edit_time_limit
        ):
            raise DomainValidationError("Message cannot be edited")

        content = self._normalize_content(new_content, has_attachment=False)
        message.edit(content, now)
        await self._messages.save(message)
        logger.info(f"[Message] {requester_id} edited {message_id}")
        return message

    async def delete(self, message_id: MessageId, requester_id: UserId) -> Message:
        if not self._config.message_deletion_enabled:
            raise FeatureDisabledError("message_deletion")

        message = await self._load_live(message_id)
        conversation, participant = await self._conversations.require_active_participant(
            message.conversation_id, requester_id
        )

        now = self._clock()
        privileged = ConversationStore.can_manage(conversation, participant)
        within_window = (
            now - message.created_at
        ).total_seconds() <= self._config.delete_time_limit
        if not privileged and not (message.author_id == requester_id and within_window):
            raise AccessDeniedError("Message cannot be deleted")

        if self._config.soft_delete_messages:
            message.tombstone(now)
            await self._messages.save(message)
        else:
            await self._messages.delete(message_id)
        logger.info(
            f"[Message] {requester_id} deleted {message_id} "
            f"({'soft' if self._config.soft_delete_messages else 'hard'})"
        )
        return message

    # ==================== Reads ====================

    async def get(
        self,
        conversation_id: ConversationId,
        message_id: MessageId,
        requester_id: UserId,
    ) -> Message:
        conversation, participant = await self._conversations.require_active_participant(
            conversation_id, requester_id
        )
        message = await self._messages.get_by_id(message_id)
        if message is None or message.conversation_id != conversation_id:
            raise EntityNotFoundError("Message not found")
        if message.is_deleted and not ConversationStore.can_manage(conversation, participant):
            raise EntityNotFoundError("Message not found")
        return message

    async def list_for_conversation(
        self,
        conversation_id: ConversationId,
        requester_id: UserId,
        page: int = 1,
        page_size: Optional[int] = None,
        search_term: Optional[str] = None,
    ) -> MessagePage:
        await self._conversations.require_active_participant(conversation_id, requester_id)

        per_page = min(
            page_size or self._config.messages_per_page,
            self._config.max_messages_per_page,
        )
        term = search_term.strip() if search_term else None
        if not self._config.search_enabled:
            term = None
        return await self._messages.list_page(
            conversation_id, max(page, 1), max(per_page, 1), term or None
        )

    async def search(self, user_id: UserId, term: str, limit: int = 20) -> list[Message]:
        if not self._config.search_enabled:
            raise FeatureDisabledError("search")
        term = (term or "").strip()
        if len(term) < MIN_SEARCH_LENGTH:
            raise DomainValidationError(
                f"Search term must be at least {MIN_SEARCH_LENGTH} characters"
            )

        conversation_ids = await self._conversations.active_conversation_ids(user_id)
        if not conversation_ids:
            return []
        return await self._messages.search(conversation_ids, term, limit)

    async def count_sent(self, user_id: UserId) -> int:
        return await self._messages.count_by_author(user_id)
