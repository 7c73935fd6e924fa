"""
Error response schemas for API documentation.
Every error body has the shape {"error": {...}} produced by ErrorHandlerService.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""
    
    field: Optional[str] = Field(None, description="Field name that caused the error", examples=["email"])
    message: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error type identifier")
    input: Optional[Any] = Field(None, description="Input value that caused the error")


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""
    
    code: str = Field(..., description="Error code identifier", examples=["QUERY_ERROR"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking")
    redirect_to: Optional[str] = Field(None, description="Where a denied caller should be sent")
    details: Optional[List[ErrorDetail]] = Field(None, description="Detailed error information for validation errors")


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""
    
    error: ErrorResponse


_DESCRIPTIONS = {
    400: "Bad Request",
    401: "Unauthorized - sign in required",
    403: "Forbidden - role does not allow this action",
    404: "Not Found",
    409: "Conflict",
    422: "Validation Error",
    500: "Internal Server Error",
    503: "Catalog query failed - retry",
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Error response documentation for the given status codes.
    
    Returns:
        Mapping suitable for the responses argument of a route decorator
    """
    return {
        code: {"description": _DESCRIPTIONS.get(code, "Error"), "model": APIErrorResponse}
        for code in status_codes
    }


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for CRUD operations."""
    return get_error_responses(400, 401, 403, 404, 422, 500)
