"""
ConflictError - Raised on duplicate direct conversations or exceeded participant caps.
Maps to: HTTP 409 Conflict
"""


class ConflictError(Exception):
    def __init__(self, message: str = "Conflict"):
        super().__init__(message)
        self.message = message
