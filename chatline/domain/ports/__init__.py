"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the domain needs,
without specifying HOW it's done.

Subfolders:
- repositories/    → Durable persistence (Prisma / in-memory)
- (root files)     → Ephemeral state and fan-out

Root ports:
- presence_store.py → online flag with TTL + last-seen (Redis / in-memory)
- typing_store.py   → per-conversation typing flags with TTL
- event_sink.py     → delivers one envelope to one connected user
"""

from chatline.domain.ports.presence_store import PresenceStore
from chatline.domain.ports.typing_store import TypingStore
from chatline.domain.ports.event_sink import EventSink

__all__ = ["PresenceStore", "TypingStore", "EventSink"]
