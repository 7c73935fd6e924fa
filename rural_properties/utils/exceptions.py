"""
Exception types raised across the Rural Properties backend.

Everything derived from APIException is rendered into the error envelope by
ErrorHandlerService; the two plain exceptions at the top are process-level
failures that never reach an HTTP client.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class ConfigurationError(Exception):
    """Required startup configuration is missing. Fatal for the process."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}")


class PartialSeedFailure(Exception):
    """One or more fixture insert loops failed during a seed run."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(f"Seeding finished with {len(self.errors)} error(s): " + "; ".join(self.errors))


class APIException(HTTPException):
    """HTTP-facing failure carrying a machine readable error code."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Input rejected before any store access; field_errors end up in details."""

    def __init__(self, detail: str, field_errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(status.HTTP_422_UNPROCESSABLE_ENTITY, detail, "VALIDATION_ERROR")
        self.field_errors = field_errors or []


class NotFoundError(APIException):

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        message = f"{resource} not found" if not resource_id else f"{resource} not found with ID: {resource_id}"
        super().__init__(status.HTTP_404_NOT_FOUND, message, "NOT_FOUND")
        self.resource = resource


class UnauthorizedError(APIException):
    """
    The caller has no usable session.

    redirect_to names the page an interface should send the caller to,
    normally the sign-in page.
    """

    def __init__(self, detail: str = "Authentication required", redirect_to: Optional[str] = None):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            detail,
            "UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )
        self.redirect_to = redirect_to


class ForbiddenError(APIException):
    """The caller is signed in but their role or ownership does not allow the action."""

    def __init__(self, detail: str = "Access forbidden", redirect_to: Optional[str] = None):
        super().__init__(status.HTTP_403_FORBIDDEN, detail, "FORBIDDEN")
        self.redirect_to = redirect_to


class ConflictError(APIException):

    def __init__(self, detail: str):
        super().__init__(status.HTTP_409_CONFLICT, detail, "CONFLICT")


class BadRequestError(APIException):

    def __init__(self, detail: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, "BAD_REQUEST")


class QueryError(APIException):
    """Catalog store read failed. Retryable, and distinct from an empty result."""

    def __init__(self, detail: str = "Catalog query failed, please retry"):
        super().__init__(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            detail,
            "QUERY_ERROR",
            headers={"Retry-After": "1"}
        )


# Identity provider
class AuthError(UnauthorizedError):
    """Sign-in or sign-up rejected by the identity provider."""

    def __init__(self, detail: str = "Authentication failed"):
        super().__init__(detail)
        self.error_code = "AUTH_ERROR"


class InvalidCredentialsError(AuthError):

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)


class TokenExpiredError(UnauthorizedError):

    def __init__(self, detail: str = "Token has expired"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)


class InsufficientPermissionsError(ForbiddenError):
    """Role check failed for a named action, e.g. 'create listings'."""

    def __init__(self, action: str):
        super().__init__(f"Insufficient permissions to {action}")


# Listings
class PropertyNotFoundError(NotFoundError):

    def __init__(self, property_id: str):
        super().__init__("Property", property_id)


class PropertyOwnershipError(ForbiddenError):
    """An agent tried to change a listing another agent owns."""

    def __init__(self, detail: str = "Only the listing agent or an admin can change this listing"):
        super().__init__(detail)
