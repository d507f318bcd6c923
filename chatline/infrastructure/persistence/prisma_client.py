"""Prisma Client holder: one client per process, connected by the container."""

import logging
from typing import Optional

from prisma import Prisma

logger = logging.getLogger(__name__)


class PrismaDatabase:
    def __init__(self, url: Optional[str] = None):
        self.client = Prisma(datasource={"url": url} if url else None)

    async def connect(self) -> None:
        await self.client.connect()
        logger.info("[Prisma] Connected")

    async def disconnect(self) -> None:
        if self.client.is_connected():
            await self.client.disconnect()
            logger.info("[Prisma] Disconnected")
