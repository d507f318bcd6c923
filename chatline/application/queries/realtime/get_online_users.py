"""Get Online Users Query."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Query, QueryHandler
from chatline.domain.value_objects.user_id import UserId
from chatline.services.presence_tracker import PresenceTracker


@dataclass(frozen=True)
class GetOnlineUsersQuery(Query[set[UserId]]):
    pass


class GetOnlineUsersHandler(QueryHandler[set[UserId]]):
    def __init__(self, presence: PresenceTracker):
        self._presence = presence

    async def execute(self, query: GetOnlineUsersQuery) -> set[UserId]:
        return await self._presence.list_online()
