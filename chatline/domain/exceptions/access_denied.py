"""
AccessDeniedError - Raised when a participant lacks the required role or ownership.
Maps to: HTTP 403 Forbidden
"""


class AccessDeniedError(Exception):
    """Raised when user lacks permission to perform an action"""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)
