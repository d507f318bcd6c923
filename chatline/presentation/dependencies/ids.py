"""
Path parameter parsing.

A malformed id can never name an existing row, so it is reported the same
way as an unknown one.
"""

from chatline.domain.exceptions import EntityNotFoundError
from chatline.domain.value_objects.conversation_id import ConversationId
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId


def parse_conversation_id(conversation_id: str) -> ConversationId:
    try:
        return ConversationId(conversation_id)
    except ValueError as e:
        raise EntityNotFoundError("Conversation not found") from e


def parse_message_id(message_id: str) -> MessageId:
    try:
        return MessageId(message_id)
    except ValueError as e:
        raise EntityNotFoundError("Message not found") from e


def parse_user_id(user_id: str) -> UserId:
    try:
        return UserId(user_id)
    except ValueError as e:
        raise EntityNotFoundError("User not found") from e
