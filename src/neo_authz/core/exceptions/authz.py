"""Authorization server error taxonomy.

Every operation against the authorization server either returns its value
or raises exactly one of these.
"""

from .base import NeoAuthzError


class AuthzError(NeoAuthzError):
    """Base exception for authorization server errors."""
    pass


class BadParameterError(AuthzError):
    """Raised when the server rejects the request payload or an id."""
    pass


class NotFoundError(AuthzError):
    """Raised when a resource, policy, permission, client or user is absent."""
    pass


class UnauthorizedError(AuthzError):
    """Raised when authentication fails or an entitlement is denied."""
    pass


class InternalError(AuthzError):
    """Raised on transport failure, timeout or an unparseable response."""
    pass
