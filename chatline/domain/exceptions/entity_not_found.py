"""
EntityNotFoundError - Raised when a conversation or message cannot be addressed.

Also raised when the entity exists but the caller has no active participant
row, so existence is never leaked to outsiders.
Maps to: HTTP 404 Not Found
"""


class EntityNotFoundError(Exception):
    """Exception raised when a requested entity is not found."""

    def __init__(self, message: str = "The requested entity was not found."):
        super().__init__(message)
