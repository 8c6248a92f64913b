"""HTTP status code mapping for exceptions.

Two tables live here. RESPONSE_STATUS_MAP translates responses from the
authorization server into exceptions and is shared by every operation.
HTTP_STATUS_MAP goes the other way so callers can turn a raised exception
into the status of their own API response.
"""

from typing import Any, Dict, Optional, Type

from .base import NeoAuthzError, ConfigurationError
from .authz import (
    AuthzError,
    BadParameterError,
    NotFoundError,
    UnauthorizedError,
    InternalError,
)


# Authorization server response status -> exception
RESPONSE_STATUS_MAP: Dict[int, Type[AuthzError]] = {
    400: BadParameterError,
    401: UnauthorizedError,
    403: UnauthorizedError,
    404: NotFoundError,
    422: BadParameterError,
}


# Exception -> HTTP status code for API responses
HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    BadParameterError: 400,
    
    # 401 Unauthorized
    UnauthorizedError: 401,
    
    # 404 Not Found
    NotFoundError: 404,
    
    # 500 Internal Server Error
    InternalError: 500,
    ConfigurationError: 500,
    AuthzError: 500,
    
    # Default for NeoAuthzError
    NeoAuthzError: 500,
}


def is_success(status_code: int) -> bool:
    """Check whether a response status is 2xx."""
    return 200 <= status_code < 300


def error_class_for_status(status_code: int) -> Optional[Type[AuthzError]]:
    """Get the exception class for a response status.
    
    Args:
        status_code: Response status from the authorization server
        
    Returns:
        None for 2xx, otherwise the mapped exception class
        (InternalError for anything not in the table)
    """
    if is_success(status_code):
        return None
    return RESPONSE_STATUS_MAP.get(status_code, InternalError)


def error_for_status(
    status_code: int,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> Optional[AuthzError]:
    """Build the exception for a response status.
    
    Args:
        status_code: Response status from the authorization server
        message: Exception message
        details: Extra details; status_code is always added
        
    Returns:
        None for 2xx, otherwise an exception instance ready to raise
    """
    error_class = error_class_for_status(status_code)
    if error_class is None:
        return None
    
    error_details = dict(details or {})
    error_details["status_code"] = status_code
    return error_class(message, details=error_details)


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.
    
    Walks the exception's MRO so subclasses inherit the status of
    their nearest mapped parent.
    
    Args:
        exception: The exception instance
        
    Returns:
        HTTP status code, 500 when nothing matches
    """
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return 500
