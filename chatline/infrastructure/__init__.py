"""
Infrastructure Layer - Technical implementations of domain ports.

This layer contains:
- persistence/: Prisma repositories (PostgreSQL)
- cache/: Redis client plus TTL presence and typing stores
- memory/: in-process repositories and TTL stores (tests, single node)
- realtime/: WebSocket EventSink
"""
