"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by the chat stores and caught by presentation layer.
Presentation layer maps them to HTTP status codes (presentation/errors.py).
"""

from chatline.domain.exceptions.entity_not_found import EntityNotFoundError
from chatline.domain.exceptions.access_denied import AccessDeniedError
from chatline.domain.exceptions.validation_error import DomainValidationError
from chatline.domain.exceptions.conflict import ConflictError
from chatline.domain.exceptions.feature_disabled import FeatureDisabledError

__all__ = [
    "EntityNotFoundError",
    "AccessDeniedError",
    "DomainValidationError",
    "ConflictError",
    "FeatureDisabledError",
]
