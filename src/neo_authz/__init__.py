"""Neo-Authz - Keycloak authorization integration for the NeoMultiTenant platform.

Manages resources, policies and permissions on Keycloak Authorization
Services and evaluates end-user entitlements against live policy state.
"""

from .__version__ import __version__

from .config import (
    KeycloakAuthzSettings,
    get_settings,
    setup_logging,
)

from .core.exceptions import (
    # Base Exception
    NeoAuthzError,
    ConfigurationError,
    
    # Authorization server errors
    AuthzError,
    BadParameterError,
    NotFoundError,
    UnauthorizedError,
    InternalError,
    
    # Utility Functions
    get_http_status_code,
    create_error_response,
)

from .integrations.keycloak import (
    KeycloakAuthzClient,
    TokenClient,
    ClientDirectory,
    ResourceManager,
    PolicyManager,
    PermissionManager,
    EntitlementEvaluator,
    UserDirectory,
    read_token,
    AuthzResource,
    Policy,
    PolicyConfig,
    Permission,
    PermissionConfig,
    EntitlementRequest,
    Token,
    UserInfo,
    PolicyLogic,
    DecisionStrategy,
)

__all__ = [
    "__version__",
    
    # Configuration
    "KeycloakAuthzSettings",
    "get_settings",
    "setup_logging",
    
    # Exceptions
    "NeoAuthzError",
    "ConfigurationError",
    "AuthzError",
    "BadParameterError",
    "NotFoundError",
    "UnauthorizedError",
    "InternalError",
    "get_http_status_code",
    "create_error_response",
    
    # Keycloak authorization
    "KeycloakAuthzClient",
    "TokenClient",
    "ClientDirectory",
    "ResourceManager",
    "PolicyManager",
    "PermissionManager",
    "EntitlementEvaluator",
    "UserDirectory",
    "read_token",
    
    # Records
    "AuthzResource",
    "Policy",
    "PolicyConfig",
    "Permission",
    "PermissionConfig",
    "EntitlementRequest",
    "Token",
    "UserInfo",
    "PolicyLogic",
    "DecisionStrategy",
]
