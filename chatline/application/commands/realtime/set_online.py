"""Set Online Command - heartbeat that renews the presence TTL."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.events import PRESENCE_TOPIC, UserOnline
from chatline.domain.value_objects.user_id import UserId
from chatline.services.event_broadcaster import EventBroadcaster
from chatline.services.presence_tracker import PresenceTracker


@dataclass(frozen=True)
class SetOnlineCommand(Command[None]):
    user_id: UserId


class SetOnlineHandler(CommandHandler[None]):
    def __init__(self, presence: PresenceTracker, broadcaster: EventBroadcaster):
        self._presence = presence
        self._broadcaster = broadcaster

    async def execute(self, command: SetOnlineCommand) -> None:
        was_online = await self._presence.is_online(command.user_id)
        await self._presence.set_online(command.user_id)
        # Heartbeats only renew the TTL; announce the transition once
        if not was_online:
            await self._broadcaster.publish(
                UserOnline(command.user_id), [PRESENCE_TOPIC], originator_id=command.user_id
            )
