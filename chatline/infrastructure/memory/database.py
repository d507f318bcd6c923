"""
Process-local tables shared by the in-memory repositories.

One lock guards every table so multi-table writes (conversation plus its
participants) are atomic. Rows are deep-copied on the way in and out so
callers never mutate stored state without calling ``save``.
"""

import threading
from dataclasses import dataclass, field

from chatline.domain.entities.conversation import Conversation
from chatline.domain.entities.message import Message
from chatline.domain.entities.participant import Participant
from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.domain.value_objects.chat_participant import ChatParticipant


@dataclass
class InMemoryDatabase:
    conversations: dict[str, Conversation] = field(default_factory=dict)
    direct_keys: dict[str, str] = field(default_factory=dict)
    # (conversation_id, user_id) -> row
    participants: dict[tuple[str, str], Participant] = field(default_factory=dict)
    messages: dict[str, Message] = field(default_factory=dict)
    # (message_id, user_id) -> row
    read_receipts: dict[tuple[str, str], ReadReceipt] = field(default_factory=dict)
    users: dict[str, ChatParticipant] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)
