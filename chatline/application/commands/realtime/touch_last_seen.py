"""Touch Last Seen Command - records activity without changing presence."""

from dataclasses import dataclass

from chatline.application.common.interfaces import Command, CommandHandler
from chatline.domain.value_objects.user_id import UserId
from chatline.services.presence_tracker import PresenceTracker


@dataclass(frozen=True)
class TouchLastSeenCommand(Command[None]):
    user_id: UserId


class TouchLastSeenHandler(CommandHandler[None]):
    def __init__(self, presence: PresenceTracker):
        self._presence = presence

    async def execute(self, command: TouchLastSeenCommand) -> None:
        await self._presence.touch_last_seen(command.user_id)
