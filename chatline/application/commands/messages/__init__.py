"""Message commands."""

from .send_message import SendMessageCommand, SendMessageHandler
from .edit_message import EditMessageCommand, EditMessageHandler
from .delete_message import DeleteMessageCommand, DeleteMessageHandler
from .mark_read import MarkReadCommand, MarkReadHandler
from .mark_all_read import MarkAllReadCommand, MarkAllReadHandler

__all__ = [
    "SendMessageCommand",
    "SendMessageHandler",
    "EditMessageCommand",
    "EditMessageHandler",
    "DeleteMessageCommand",
    "DeleteMessageHandler",
    "MarkReadCommand",
    "MarkReadHandler",
    "MarkAllReadCommand",
    "MarkAllReadHandler",
]
