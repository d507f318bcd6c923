"""
COMMANDS - Write operations (CQRS)

Each handler mutates through a store first and only then hands the resulting
event to the EventBroadcaster. Stores never publish on their own.

Subfolders:
- conversations/ → create, add/remove participants, update, delete
- messages/      → send, edit, delete, mark read, mark all read
- realtime/      → typing, online, offline
"""
