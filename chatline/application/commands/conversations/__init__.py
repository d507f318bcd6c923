"""Conversation commands."""

from .create_conversation import CreateConversationCommand, CreateConversationHandler
from .get_or_create_direct import (
    DirectConversationResult,
    GetOrCreateDirectCommand,
    GetOrCreateDirectHandler,
)
from .add_participants import AddParticipantsCommand, AddParticipantsHandler
from .remove_participant import RemoveParticipantCommand, RemoveParticipantHandler
from .update_conversation import UpdateConversationCommand, UpdateConversationHandler
from .delete_conversation import DeleteConversationCommand, DeleteConversationHandler

__all__ = [
    "CreateConversationCommand",
    "CreateConversationHandler",
    "DirectConversationResult",
    "GetOrCreateDirectCommand",
    "GetOrCreateDirectHandler",
    "AddParticipantsCommand",
    "AddParticipantsHandler",
    "RemoveParticipantCommand",
    "RemoveParticipantHandler",
    "UpdateConversationCommand",
    "UpdateConversationHandler",
    "DeleteConversationCommand",
    "DeleteConversationHandler",
]
