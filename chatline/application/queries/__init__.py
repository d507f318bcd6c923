"""
QUERIES - Read operations (CQRS)

Queries retrieve data without modifying state.

Subfolders:
- conversations/ → list, get, user stats
- messages/      → list, get, receipts, unread count, search
- realtime/      → typing users, online users, presence checks
"""
