"""Base exceptions for neo-authz.

All exceptions inherit from NeoAuthzError and carry an error code and a
details dictionary so callers can build API responses without parsing
messages.
"""

from typing import Any, Dict, Optional


class NeoAuthzError(Exception):
    """Base exception for all neo-authz errors."""
    
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


class ConfigurationError(NeoAuthzError):
    """Raised when settings cannot produce a usable endpoint."""
    pass


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.
    
    Args:
        exception: The exception instance
        
    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as get_mapped_status_code
    return get_mapped_status_code(exception)


def create_error_response(exception: NeoAuthzError) -> Dict[str, Any]:
    """Create standardized error response from exception.
    
    Args:
        exception: The neo-authz exception
        
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
