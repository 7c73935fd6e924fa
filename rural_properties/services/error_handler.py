"""
Renders every failure into the error envelope.

    {"error": {"code", "message", "timestamp", "request_id", "details"?, "redirect_to"?}}

The request id is the one the request logging middleware put on
request.state, so a client can quote it back and it matches the log line.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional, List
from fastapi import Request
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from pydantic import ValidationError as PydanticValidationError
from rural_properties.utils.exceptions import APIException, ValidationError
import logging
import uuid

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "An unexpected error occurred. Please try again later."

# Substrings of driver messages mapped to something safe to show a client
CONSTRAINT_MESSAGES = (
    ("unique", "Duplicate value for unique field"),
    ("not null", "Required field cannot be empty"),
    ("check constraint", "Value does not meet validation requirements"),
)


class ErrorHandlerService:
    """Builds envelope responses for API, validation, database and unexpected errors."""

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None,
        redirect_to: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the envelope dictionary.

        Optional members are left out entirely rather than sent as null.
        """
        body: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
        optional = {"details": details, "request_id": request_id, "redirect_to": redirect_to}
        body.update({key: value for key, value in optional.items() if value})
        return {"error": body}

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        request_id = _request_id(request)
        code = exception.error_code or "API_ERROR"
        logger.warning(f"[{request_id}] {exception.status_code} {code} on {_path(request)}: {exception.detail}")

        details = exception.field_errors if isinstance(exception, ValidationError) else None
        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                code,
                exception.detail,
                details=details,
                request_id=request_id,
                redirect_to=getattr(exception, "redirect_to", None)
            ),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(exception: PydanticValidationError, request: Optional[Request] = None) -> JSONResponse:
        """
        Flatten pydantic errors into one detail entry per offending field.

        Field paths are joined with " -> ", e.g. "query -> page_size".
        """
        request_id = _request_id(request)
        details = [
            {
                "field": " -> ".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
                "input": _jsonable(error.get("input")),
            }
            for error in exception.errors()
        ]
        logger.warning(f"[{request_id}] request validation failed on {_path(request)}: {len(details)} field(s)")

        return JSONResponse(
            status_code=422,
            content=ErrorHandlerService.format_error_response(
                "VALIDATION_ERROR", "Request validation failed", details=details, request_id=request_id
            )
        )

    @staticmethod
    def handle_database_error(exception: SQLAlchemyError, request: Optional[Request] = None) -> JSONResponse:
        """Integrity violations become 409; anything else from the store is a 500 with no driver text."""
        request_id = _request_id(request)

        if isinstance(exception, IntegrityError):
            status_code, code = 409, "INTEGRITY_ERROR"
            constraint = _describe_constraint(exception)
            message = f"Constraint violation: {constraint}" if constraint else "Data integrity constraint violation"
        else:
            status_code, code = 500, "DATABASE_ERROR"
            message = "Database operation failed"

        logger.error(f"[{request_id}] {code} on {_path(request)}: {exception}", exc_info=True)
        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(code, message, request_id=request_id)
        )

    @staticmethod
    def handle_http_exception(exception: HTTPException, request: Optional[Request] = None) -> JSONResponse:
        """Plain HTTP exceptions, mostly routing 404s and 405s."""
        request_id = _request_id(request)
        logger.warning(f"[{request_id}] HTTP {exception.status_code} on {_path(request)}: {exception.detail}")

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                f"HTTP_{exception.status_code}", str(exception.detail), request_id=request_id
            ),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(exception: Exception, request: Optional[Request] = None) -> JSONResponse:
        request_id = _request_id(request)
        logger.error(
            f"[{request_id}] unhandled {type(exception).__name__} on {_path(request)}: {exception}",
            exc_info=True
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(
                "INTERNAL_SERVER_ERROR", GENERIC_FAILURE_MESSAGE, request_id=request_id
            )
        )


def _request_id(request: Optional[Request]) -> str:
    """Id assigned by the middleware, or a fresh short one outside a request."""
    request_id = getattr(request.state, "request_id", None) if request is not None else None
    return request_id or str(uuid.uuid4())[:8]


def _path(request: Optional[Request]) -> str:
    return request.url.path if request is not None else "-"


def _describe_constraint(exception: IntegrityError) -> Optional[str]:
    driver_message = str(exception.orig).lower()
    for needle, message in CONSTRAINT_MESSAGES:
        if needle in driver_message:
            return message
    return None


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool, list, dict)):
        return value
    return str(value)
