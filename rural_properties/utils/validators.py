"""
Validation helpers shared by the service layer.
"""

import uuid
from typing import Any, Tuple

from rural_properties.utils.exceptions import NotFoundError, ValidationError


class ValidationUtils:
    """Reusable validation methods for request values."""
    
    @staticmethod
    def parse_id(value: Any, resource: str) -> uuid.UUID:
        """
        Parse a document id.
        
        Ids are weak references, so a malformed id is reported the same way
        as a missing document.
        
        Raises:
            NotFoundError: If the value is not a valid id
        """
        if isinstance(value, uuid.UUID):
            return value
        try:
            return uuid.UUID(str(value).strip())
        except (ValueError, AttributeError, TypeError):
            raise NotFoundError(resource, str(value))
    
    @staticmethod
    def validate_pagination(page: int, page_size: int, max_page_size: int = 100) -> Tuple[int, int]:
        """
        Validate pagination parameters.
        
        Raises:
            ValidationError: If pagination parameters are invalid
        """
        if page < 1:
            raise ValidationError("page must be at least 1")
        if page_size < 1 or page_size > max_page_size:
            raise ValidationError(f"page_size must be between 1 and {max_page_size}")
        return page, page_size
