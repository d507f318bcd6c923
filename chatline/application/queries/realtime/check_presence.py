"""
Presence lookups.

- CheckPresenceQuery: bulk online check for a list of users
- GetPresenceQuery: online flag plus last-seen for one user
"""

from dataclasses import dataclass

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.value_objects.user_id import UserId
from chatline.services.presence_tracker import PresenceSummary, PresenceTracker


@dataclass(frozen=True)
class CheckPresenceQuery(Query[dict[UserId, bool]]):
    user_ids: tuple[UserId, ...]


class CheckPresenceHandler(QueryHandler[dict[UserId, bool]]):
    def __init__(self, presence: PresenceTracker):
        self._presence = presence

    async def execute(self, query: CheckPresenceQuery) -> dict[UserId, bool]:
        return await self._presence.bulk_check(list(query.user_ids))


@dataclass(frozen=True)
class GetPresenceQuery(Query[PresenceSummary]):
    user_id: UserId


class GetPresenceHandler(QueryHandler[PresenceSummary]):
    def __init__(self, presence: PresenceTracker):
        self._presence = presence

    async def execute(self, query: GetPresenceQuery) -> PresenceSummary:
        return await self._presence.summary(query.user_id)
