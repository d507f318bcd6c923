"""
ReadReceipt Entity - A user has seen a message.
"""

from dataclasses import dataclass
from datetime import datetime

from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ReadReceipt:
    message_id: MessageId
    user_id: UserId
    read_at: datetime
