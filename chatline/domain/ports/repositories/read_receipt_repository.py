"""
Read Receipt Repository Port - one row per (message, user).
Implementation: chatline/infrastructure/persistence/prisma_read_receipt_repository.py
"""

from abc import ABC, abstractmethod

from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId


class ReadReceiptRepository(ABC):
    @abstractmethod
    async def create_if_absent(self, receipt: ReadReceipt) -> tuple[ReadReceipt, bool]:
        """
        Insert or no-op. Returns the stored row (first write wins) and whether
        this call inserted it.
        """
        ...

    @abstractmethod
    async def create_many(self, receipts: list[ReadReceipt]) -> int:
        """Bulk insert skipping duplicates; returns the number inserted."""
        ...

    @abstractmethod
    async def count(self, message_id: MessageId) -> int: ...

    @abstractmethod
    async def readers(self, message_id: MessageId) -> list[ReadReceipt]: ...

    @abstractmethod
    async def read_message_ids(
        self, user_id: UserId, message_ids: list[MessageId]
    ) -> set[MessageId]: ...
