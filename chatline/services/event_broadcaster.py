"""
Event broadcaster - fans domain events out to authorized subscribers.

Delivery is fire-and-forget: no acknowledgement, retry or persistence. Every
send is bounded by ``broadcast_timeout``; failures are logged and counted and
never reach the caller, so a broken socket cannot fail a store mutation.
Subscribers are re-authorized on every publish, so someone who left a
conversation stops receiving its events even before they unsubscribe.
"""

import asyncio
import logging
from typing import Any, Iterable, Optional

from chatline.config.settings import ChatConfig
from chatline.domain.events import DomainEvent
from chatline.domain.ports.event_sink import EventSink
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.user_id import UserId
from chatline.observability.metrics import (
    BroadcastFailureReason,
    increment_broadcast_delivery,
    increment_broadcast_failure,
)
from chatline.services.channel_authorizer import Authorization, ChannelAuthorizer
from chatline.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class EventBroadcaster:
    def __init__(
        self,
        config: ChatConfig,
        authorizer: ChannelAuthorizer,
        sink: EventSink,
        clock: Clock = utc_now,
    ):
        self._config = config
        self._authorizer = authorizer
        self._sink = sink
        self._clock = clock
        # topic -> {user_id: participant}
        self._subscriptions: dict[str, dict[UserId, ChatParticipant]] = {}

    # ==================== Subscriptions ====================

    async def subscribe(self, topic: str, participant: ChatParticipant) -> Authorization:
        result = await self._authorizer.authorize(topic, participant)
        if result:
            self._subscriptions.setdefault(topic, {})[participant.id] = participant
            logger.debug(f"[Broadcast] {participant.id} subscribed to {topic}")
        else:
            logger.info(f"[Broadcast] {participant.id} denied subscription to {topic}")
        return result

    def unsubscribe(self, topic: str, user_id: UserId) -> None:
        subscribers = self._subscriptions.get(topic)
        if not subscribers:
            return
        subscribers.pop(user_id, None)
        if not subscribers:
            del self._subscriptions[topic]

    def unsubscribe_all(self, user_id: UserId) -> None:
        for topic in list(self._subscriptions):
            self.unsubscribe(topic, user_id)

    def subscribers(self, topic: str) -> set[UserId]:
        return set(self._subscriptions.get(topic, {}))

    # ==================== Publishing ====================

    def envelope(self, event: DomainEvent, topic: str) -> dict[str, Any]:
        return {
            "event": f"{self._config.event_prefix}.{event.name}",
            "topic": topic,
            "data": event.to_payload(),
            "timestamp": self._clock().isoformat(),
        }

    async def _deliver(
        self, event: DomainEvent, topic: str, participant: ChatParticipant
    ) -> bool:
        try:
            allowed = await self._authorizer.authorize(topic, participant)
        except Exception as e:
            logger.warning(f"[Broadcast] Authorization failed for {participant.id} on {topic}: {e}")
            increment_broadcast_failure(BroadcastFailureReason.AUTHORIZER_ERROR)
            return False
        if not allowed:
            return False

        try:
            await asyncio.wait_for(
                self._sink.send(participant.id, self.envelope(event, topic)),
                timeout=self._config.broadcast_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"[Broadcast] {event.name} to {participant.id} on {topic} timed out "
                f"after {self._config.broadcast_timeout}s"
            )
            increment_broadcast_failure(BroadcastFailureReason.TIMEOUT)
            return False
        except Exception as e:
            logger.warning(f"[Broadcast] {event.name} to {participant.id} on {topic} failed: {e}")
            increment_broadcast_failure(BroadcastFailureReason.SINK_ERROR)
            return False

        increment_broadcast_delivery(event.name)
        return True

    async def publish(
        self,
        event: DomainEvent,
        topics: Iterable[str],
        originator_id: Optional[UserId] = None,
    ) -> int:
        """Deliver ``event`` on ``topics``; returns the number of successful sends."""
        if not self._config.broadcasting_enabled:
            return 0

        deliveries = [
            self._deliver(event, topic, participant)
            for topic in topics
            for user_id, participant in list(self._subscriptions.get(topic, {}).items())
            if user_id != originator_id
        ]
        if not deliveries:
            return 0

        results = await asyncio.gather(*deliveries)
        delivered = sum(1 for ok in results if ok)
        logger.debug(f"[Broadcast] {event.name} delivered to {delivered}/{len(results)} subscribers")
        return delivered
