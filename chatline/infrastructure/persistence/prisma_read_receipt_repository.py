"""
Prisma Read Receipt Repository Implementation.

``create_if_absent`` inserts and falls back to reading the existing row when
the (message_id, user_id) unique key is already taken, so the caller learns
whether this call wrote the receipt.
"""

from prisma import Prisma
from prisma.errors import UniqueViolationError
from prisma.models import ReadReceipt as PrismaReadReceipt

from chatline.domain.entities.read_receipt import ReadReceipt
from chatline.domain.ports.repositories import ReadReceiptRepository
from chatline.domain.value_objects.message_id import MessageId
from chatline.domain.value_objects.user_id import UserId


class PrismaReadReceiptRepository(ReadReceiptRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaReadReceipt) -> ReadReceipt:
        return ReadReceipt(
            message_id=MessageId(record.message_id),
            user_id=UserId(record.user_id),
            read_at=record.read_at,
        )

    async def create_if_absent(self, receipt: ReadReceipt) -> tuple[ReadReceipt, bool]:
        try:
            record = await self._prisma.readreceipt.create(
                data={
                    "message_id": receipt.message_id.value,
                    "user_id": receipt.user_id.value,
                    "read_at": receipt.read_at,
                }
            )
        except UniqueViolationError:
            record = await self._prisma.readreceipt.find_unique(
                where={
                    "message_id_user_id": {
                        "message_id": receipt.message_id.value,
                        "user_id": receipt.user_id.value,
                    }
                }
            )
            if record is None:
                # Row vanished between the insert and the read
                raise
            return self._to_entity(record), False
        return self._to_entity(record), True

    async def create_many(self, receipts: list[ReadReceipt]) -> int:
        if not receipts:
            return 0
        return await self._prisma.readreceipt.create_many(
            data=[
                {
                    "message_id": receipt.message_id.value,
                    "user_id": receipt.user_id.value,
                    "read_at": receipt.read_at,
                }
                for receipt in receipts
            ],
            skip_duplicates=True,
        )

    async def count(self, message_id: MessageId) -> int:
        return await self._prisma.readreceipt.count(
            where={"message_id": message_id.value}
        )

    async def readers(self, message_id: MessageId) -> list[ReadReceipt]:
        records = await self._prisma.readreceipt.find_many(
            where={"message_id": message_id.value}, order={"read_at": "asc"}
        )
        return [self._to_entity(record) for record in records]

    async def read_message_ids(
        self, user_id: UserId, message_ids: list[MessageId]
    ) -> set[MessageId]:
        if not message_ids:
            return set()
        records = await self._prisma.readreceipt.find_many(
            where={
                "user_id": user_id.value,
                "message_id": {"in": [m.value for m in message_ids]},
            }
        )
        return {MessageId(record.message_id) for record in records}
