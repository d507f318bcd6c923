"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Can change state over time
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from chatline.domain.entities.conversation import Conversation, ConversationType
from chatline.domain.entities.participant import Participant, ParticipantRole
from chatline.domain.entities.message import Message, MessageType, attachment_url
from chatline.domain.entities.read_receipt import ReadReceipt

__all__ = [
    "Conversation",
    "ConversationType",
    "Participant",
    "ParticipantRole",
    "Message",
    "MessageType",
    "attachment_url",
    "ReadReceipt",
]
