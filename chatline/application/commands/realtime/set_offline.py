"""Set Offline Command - explicit sign-off (TTL expiry covers the rest)."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.events import PRESENCE_TOPIC, UserOffline
from chatline.domain.value_objects.user_id import UserId
from chatline.services.event_broadcaster import EventBroadcaster
from chatline.services.presence_tracker import PresenceTracker


@dataclass(frozen=True)
class SetOfflineCommand(Command[None]):
    user_id: UserId


class SetOfflineHandler(CommandHandler[None]):
    def __init__(self, presence: PresenceTracker, broadcaster: EventBroadcaster):
        self._presence = presence
        self._broadcaster = broadcaster

    async def execute(self, command: SetOfflineCommand) -> None:
        await self._presence.set_offline(command.user_id)
        await self._broadcaster.publish(
            UserOffline(command.user_id, last_seen_at=await self._presence.last_seen(command.user_id)),
            [PRESENCE_TOPIC],
            originator_id=command.user_id,
        )
