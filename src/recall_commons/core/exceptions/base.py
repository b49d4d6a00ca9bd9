"""Base exceptions for recall-commons.

This module defines the root of the exception hierarchy. Every error raised
by the library inherits from RecallCommonsError and carries an error code and
a details mapping so callers can render a uniform error envelope.
"""

from typing import Any, Dict, Optional


class RecallCommonsError(Exception):
    """Base exception for all recall-commons errors.
    
    All exceptions in the library inherit from this base class and include
    structured error information for better debugging and API responses.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: RecallCommonsError) -> Dict[str, Any]:
    """Create standardized error response from exception.
    
    Args:
        exception: The recall-commons exception
        
    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
