"""In-memory ReadReceiptRepository for tests and STORAGE_BACKEND=memory."""

from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.domain.ports.repositories import ReadReceiptRepository
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId
from chatline.infrastructure.memory.database import InMemoryDatabase


class InMemoryReadReceiptRepository(ReadReceiptRepository):
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    async def create_if_absent(self, receipt: ReadReceipt) -> tuple[ReadReceipt, bool]:
        key = (receipt.message_id.value, receipt.user_id.value)
        with self._db.lock:
            existing = self._db.read_receipts.get(key)
            if existing is not None:
                return existing, False
            self._db.read_receipts[key] = receipt
            return receipt, True

    async def create_many(self, receipts: list[ReadReceipt]) -> int:
        inserted = 0
        with self._db.lock:
            for receipt in receipts:
                key = (receipt.message_id.value, receipt.user_id.value)
                if key not in self._db.read_receipts:
                    self._db.read_receipts[key] = receipt
                    inserted += 1
        return inserted

    async def count(self, message_id: MessageId) -> int:
        with self._db.lock:
            return sum(1 for key in self._db.read_receipts if key[0] == message_id.value)

    async def readers(self, message_id: MessageId) -> list[ReadReceipt]:
        with self._db.lock:
            rows = [
                receipt
                for key, receipt in self._db.read_receipts.items()
                if key[0] == message_id.value
            ]
        return sorted(rows, key=lambda r: r.read_at)

    async def read_message_ids(
        self, user_id: UserId, message_ids: list[MessageId]
    ) -> set[MessageId]:
        with self._db.lock:
            return {
                message_id
                for message_id in message_ids
                if (message_id.value, user_id.value) in self._db.read_receipts
            }
