"""
List Conversations Query.

Each row carries what a conversation list needs: the viewer-specific display
name, the unread count and the newest message.
"""

from dataclasses import dataclass
from typing import Optional

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.entities.conversation import Conversation
from chatline.domain.entities.message import Message
from chatline.domain.value_objects.user_id import UserId
from chatline.services.conversation_store import ConversationStore
from chatline.services.message_store import MessageStore
from chatline.services.read_receipt_tracker import ReadReceiptTracker


@dataclass
class ConversationSummary:
    conversation: Conversation
    display_name: str
    unread_count: int
    last_message: Optional[Message] = None


@dataclass(frozen=True)
class ListConversationsQuery(Query[list[ConversationSummary]]):
    user_id: UserId
    limit: Optional[int] = None


class ListConversationsHandler(QueryHandler[list[ConversationSummary]]):
    def __init__(
        self,
        conversations: ConversationStore,
        messages: MessageStore,
        receipts: ReadReceiptTracker,
    ):
        self._conversations = conversations
        self._messages = messages
        self._receipts = receipts

    async def execute(self, query: ListConversationsQuery) -> list[ConversationSummary]:
        summaries = []
        for conversation in await self._conversations.list_for_user(
            query.user_id, query.limit
        ):
            latest = await self._messages.list_for_conversation(
                conversation.id, query.user_id, page=1, page_size=1
            )
            summaries.append(
                ConversationSummary(
                    conversation=conversation,
                    display_name=await self._conversations.display_name_for(
                        conversation, query.user_id
                    ),
                    unread_count=await self._receipts.unread_count(
                        conversation.id, query.user_id
                    ),
                    last_message=latest.items[0] if latest.items else None,
                )
            )
        return summaries
