"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
- Pure Python (no framework dependencies)
"""

from chatline.domain.value_objects.user_id import UserId
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.attachment import Attachment

__all__ = [
    "UserId",
    "ConversationId",
    "MessageId",
    "ChatParticipant",
    "Attachment",
]
