"""
Utility modules for the Rural Properties API.
"""

from .exceptions import (
    ConfigurationError,
    PartialSeedFailure,
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
    QueryError,
    AuthError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InsufficientPermissionsError,
)

# Token helpers and dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "ConfigurationError",
    "PartialSeedFailure",
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "BadRequestError",
    "QueryError",
    "AuthError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InsufficientPermissionsError",
]
