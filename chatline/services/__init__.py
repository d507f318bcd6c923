"""
Chat core services.

Stores own durable state, trackers own ephemeral TTL state, and the
broadcaster owns the subscription registry. None of them publishes events on
its own; command handlers compose mutation and publish explicitly.
"""

from chatline.services.conversation_store import ConversationStore
from chatline.services.message_store import MessageStore
from chatline.services.read_receipt_tracker import ReadReceiptTracker
from chatline.services.presence_tracker import PresenceSummary, PresenceTracker
from chatline.services.typing_tracker import TypingTracker
from chatline.services.channel_authorizer import ChannelAuthorizer
from chatline.services.event_broadcaster import EventBroadcaster

__all__ = [
    "ConversationStore",
    "MessageStore",
    "ReadReceiptTracker",
    "PresenceSummary",
    "PresenceTracker",
    "TypingTracker",
    "ChannelAuthorizer",
    "EventBroadcaster",
]
