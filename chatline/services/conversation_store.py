"""
Conversation store - conversations and participant membership.

Rules enforced here:
- a direct conversation has exactly two participants for its whole life
  (nobody leaves or is removed) and is unique per pair, backed by the
  ``direct_key`` unique column rather than a read-then-write check
- a group needs a name and at most ``max_participants`` active members
- anyone without an active participant row gets EntityNotFoundError, so the
  existence of a conversation never leaks
"""

import logging
from typing import Any, Optional

from chatline.config.settings import ChatConfig
from chatline.domain.entities.conversation import Conversation, ConversationType
from chatline.domain.entities.participant import Participant, ParticipantRole
from chatline.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
    FeatureDisabledError,
)
from chatline.domain.ports.repositories import (
    ConversationRepository,
    ParticipantRepository,
    UserRepository,
)
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.user_id import UserId
from chatline.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)

GROUP_FALLBACK_NAME = "Group Chat"
DIRECT_FALLBACK_NAME = "Direct Chat"


def _unique(user_ids: list[UserId]) -> list[UserId]:
    seen: set[UserId] = set()
    result = []
    for user_id in user_ids:
        if user_id not in seen:
            seen.add(user_id)
            result.append(user_id)
    return result


class ConversationStore:
    def __init__(
        self,
        config: ChatConfig,
        conversations: ConversationRepository,
        participants: ParticipantRepository,
        users: UserRepository,
        clock: Clock = utc_now,
    ):
        self._config = config
        self._conversations = conversations
        self._participants = participants
        self._users = users
        self._clock = clock

    # ==================== Lookup ====================

    async def _load(self, conversation_id: ConversationId) -> Conversation:
        conversation = await self._conversations.get_by_id(conversation_id)
        if conversation is None or conversation.is_deleted:
            raise EntityNotFoundError("Conversation not found")
        return conversation

    async def require_active_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> tuple[Conversation, Participant]:
        conversation = await self._load(conversation_id)
        participant = await self._participants.get(conversation_id, user_id)
        if participant is None or not participant.is_active:
            raise EntityNotFoundError("Conversation not found")
        return conversation, participant

    async def is_active_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> bool:
        try:
            await self.require_active_participant(conversation_id, user_id)
        except EntityNotFoundError:
            return False
        return True

    @staticmethod
    def can_manage(conversation: Conversation, participant: Participant) -> bool:
        return participant.user_id == conversation.created_by or participant.is_admin

    async def get(
        self, conversation_id: ConversationId, requester_id: UserId
    ) -> tuple[Conversation, list[Participant]]:
        conversation, _ = await self.require_active_participant(
            conversation_id, requester_id
        )
        participants = await self._participants.list_for_conversation(conversation_id)
        return conversation, participants

    async def list_for_user(
        self, user_id: UserId, limit: Optional[int] = None
    ) -> list[Conversation]:
        limit = min(limit or self._config.conversations_limit, self._config.conversations_limit)
        return await self._conversations.list_for_user(user_id, limit)

    async def active_conversation_ids(self, user_id: UserId) -> list[ConversationId]:
        conversations = await self._conversations.list_for_user(user_id, None)
        return [conversation.id for conversation in conversations]

    async def search_for_user(
        self, user_id: UserId, term: str, limit: int = 10
    ) -> list[Conversation]:
        return await self._conversations.search_for_user(user_id, term, limit)

    async def display_name_for(
        self, conversation: Conversation, viewer_id: UserId
    ) -> str:
        if not conversation.is_direct:
            return conversation.name or GROUP_FALLBACK_NAME

        for participant in await self._participants.list_for_conversation(
            conversation.id
        ):
            if participant.user_id == viewer_id:
                continue
            profile = await self._users.get_by_id(participant.user_id)
            if profile is not None and profile.name:
                return profile.name
        return DIRECT_FALLBACK_NAME

    # ==================== Mutations ====================

    async def create(
        self,
        creator_id: UserId,
        type: ConversationType,
        participant_ids: list[UserId],
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_private: bool = True,
        settings: Optional[dict[str, Any]] = None,
    ) -> Conversation:
        if creator_id in participant_ids:
            raise DomainValidationError("Creator cannot be listed as a participant")
        others = _unique(participant_ids)
        if not others:
            raise DomainValidationError("At least one participant is required")

        now = self._clock()
        if type == ConversationType.DIRECT:
            if len(others) != 1:
                raise DomainValidationError(
                    "Direct conversations require exactly one other participant"
                )
            conversation = Conversation.create(
                type=type,
                created_by=creator_id,
                now=now,
                description=description,
                is_private=is_private,
                settings=settings,
                other_user_id=others[0],
            )
            if await self._conversations.get_by_direct_key(conversation.direct_key):
                raise ConflictError("Direct conversation already exists")
        else:
            if not self._config.group_chats_enabled:
                raise FeatureDisabledError("group_chats")
            if not name or not name.strip():
                raise DomainValidationError("Group conversations require a name")
            if len(others) + 1 > self._config.max_participants:
                raise ConflictError(
                    f"Conversations are limited to {self._config.max_participants} participants"
                )
            conversation = Conversation.create(
                type=type,
                created_by=creator_id,
                now=now,
                name=name.strip(),
                description=description,
                is_private=is_private,
                settings=settings,
            )

        participants = [
            Participant(
                conversation_id=conversation.id,
                user_id=creator_id,
                role=ParticipantRole.ADMIN,
                joined_at=now,
            )
        ] + [
            Participant(
                conversation_id=conversation.id,
                user_id=user_id,
                role=ParticipantRole.MEMBER,
                joined_at=now,
            )
            for user_id in others
        ]
        # Raises ConflictError if a concurrent request took the direct_key first
        await self._conversations.create(conversation, participants)

        logger.info(
            f"[Conversation] {creator_id} created {type.value} conversation "
            f"{conversation.id} with {len(participants)} participants"
        )
        return conversation

    async def get_or_create_direct(
        self, requester_id: UserId, other_id: UserId
    ) -> tuple[Conversation, bool]:
        """
        Return the live direct conversation between the pair, creating it if
        needed. The flag is True when this call created it.
        """
        direct_key = Conversation.direct_key_for(requester_id, other_id)
        existing = await self._conversations.get_by_direct_key(direct_key)
        if existing is not None:
            return existing, False

        try:
            conversation = await self.create(
                requester_id, ConversationType.DIRECT, [other_id]
            )
        except ConflictError:
            # Lost the race to a concurrent create for the same pair
            existing = await self._conversations.get_by_direct_key(direct_key)
            if existing is None:
                raise
            return existing, False
        return conversation, True

    async def add_participants(
        self,
        conversation_id: ConversationId,
        requester_id: UserId,
        user_ids: list[UserId],
    ) -> Conversation:
        conversation, requester = await self.require_active_participant(
            conversation_id, requester_id
        )
        if not self.can_manage(conversation, requester):
            raise AccessDeniedError("Only the creator or an admin can add participants")
        if conversation.is_direct:
            raise DomainValidationError("Cannot add participants to a direct conversation")

        active = {
            participant.user_id
            for participant in await self._participants.list_for_conversation(
                conversation_id
            )
        }
        newcomers = [user_id for user_id in _unique(user_ids) if user_id not in active]
        if not newcomers:
            return conversation

        if len(active) + len(newcomers) > self._config.max_participants:
            raise ConflictError(
                f"Conversations are limited to {self._config.max_participants} participants"
            )

        now = self._clock()
        for user_id in newcomers:
            await self._participants.add_or_rejoin(
                conversation_id, user_id, ParticipantRole.MEMBER, now
            )
        conversation.touch(now)
        await self._conversations.touch(conversation_id, now)

        logger.info(
            f"[Conversation] {requester_id} added {len(newcomers)} participants to {conversation_id}"
        )
        return conversation

    async def remove_participant(
        self,
        conversation_id: ConversationId,
        requester_id: UserId,
        target_user_id: UserId,
    ) -> None:
        conversation, requester = await self.require_active_participant(
            conversation_id, requester_id
        )
        if conversation.is_direct:
            raise DomainValidationError(
                "Participants cannot be removed from a direct conversation"
            )
        if target_user_id == requester_id:
            if not self._config.participants_can_leave:
                raise AccessDeniedError("Participants cannot leave conversations")
        elif not self.can_manage(conversation, requester):
            raise AccessDeniedError("Only the creator or an admin can remove participants")

        target = await self._participants.get(conversation_id, target_user_id)
        if target is None or not target.is_active:
            raise EntityNotFoundError("Participant not found")

        target.leave(self._clock())
        await self._participants.save(target)
        logger.info(
            f"[Conversation] {target_user_id} left {conversation_id} (by {requester_id})"
        )

    async def leave(self, conversation_id: ConversationId, user_id: UserId) -> None:
        await self.remove_participant(conversation_id, user_id, user_id)

    async def update_settings(
        self,
        conversation_id: ConversationId,
        requester_id: UserId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        settings: Optional[dict[str, Any]] = None,
    ) -> Conversation:
        if not self._config.conversation_settings_enabled:
            raise FeatureDisabledError("conversation_settings")

        conversation, requester = await self.require_active_participant(
            conversation_id, requester_id
        )
        if not self.can_manage(conversation, requester):
            raise AccessDeniedError("Only the creator or an admin can update the conversation")
        if name is not None:
            name = name.strip()
            if not name and not conversation.is_direct:
                raise DomainValidationError("Group name cannot be blank")

        conversation.apply_patch(
            self._clock(), name=name or None, description=description, settings=settings
        )
        await self._conversations.save(conversation)
        return conversation

    async def delete(self, conversation_id: ConversationId, requester_id: UserId) -> None:
        conversation, _ = await self.require_active_participant(
            conversation_id, requester_id
        )
        if not self._config.creator_can_delete:
            raise AccessDeniedError("Conversations cannot be deleted")
        if conversation.created_by != requester_id:
            raise AccessDeniedError("Only the creator can delete the conversation")

        now = self._clock()
        conversation.soft_delete(now)
        await self._conversations.soft_delete(conversation_id, now)
        logger.info(f"[Conversation] {requester_id} deleted {conversation_id}")

    async def touch(self, conversation_id: ConversationId) -> None:
        await self._conversations.touch(conversation_id, self._clock())
