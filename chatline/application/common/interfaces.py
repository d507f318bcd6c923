"""
Base interfaces for CQRS pattern.

Usage:
    @dataclass(frozen=True)
    class SendMessageCommand(Command[Message]):
        conversation_id: ConversationId
        author: ChatParticipant
        content: str

    class SendMessageHandler(CommandHandler[Message]):
        def __init__(self, messages: MessageStore, broadcaster: EventBroadcaster):
            ...

        async def execute(self, cmd: SendMessageCommand) -> Message:
            message = await self._messages.append(...)
            await self._broadcaster.publish(MessageSent(message), [...], cmd.author.id)
            return message
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")
class Command(ABC, Generic[T]):
    """Base class for write operations"""
    pass

class CommandHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, command: Command[T]) -> T:
        """Execute the command and return a result of type T"""
        ...

class Query(ABC, Generic[T]):
    """Base class for read operations"""
    pass

class QueryHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, query: Query[T]) -> T:
        """Execute the query and return a result of type T"""
        ...
