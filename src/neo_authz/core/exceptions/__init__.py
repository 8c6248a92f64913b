"""Exceptions module for neo-authz."""

from .base import (
    NeoAuthzError,
    ConfigurationError,
    get_http_status_code,
    create_error_response,
)

from .authz import (
    AuthzError,
    BadParameterError,
    NotFoundError,
    UnauthorizedError,
    InternalError,
)

from .http_mapping import (
    RESPONSE_STATUS_MAP,
    HTTP_STATUS_MAP,
    is_success,
    error_class_for_status,
    error_for_status,
)

__all__ = [
    # Base
    "NeoAuthzError",
    "ConfigurationError",
    
    # Authorization server errors
    "AuthzError",
    "BadParameterError",
    "NotFoundError",
    "UnauthorizedError",
    "InternalError",
    
    # Status mapping
    "RESPONSE_STATUS_MAP",
    "HTTP_STATUS_MAP",
    "is_success",
    "error_class_for_status",
    "error_for_status",
    
    # Utility Functions
    "get_http_status_code",
    "create_error_response",
]
