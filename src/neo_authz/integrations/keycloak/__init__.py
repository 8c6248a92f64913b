"""
Keycloak Authorization Services integration for neo-authz.

Manages protected resources, user policies and resource permissions on a
Keycloak resource server and evaluates end-user entitlements against them.
"""

from .client import KeycloakAuthzClient
from .clients import BaseAuthzClient, bearer_headers, join_path
from .codec import encode_id_list, decode_id_list
from .entities import (
    AuthzResource,
    DecisionStrategy,
    EntitlementRequest,
    Permission,
    PermissionConfig,
    PermissionType,
    Policy,
    PolicyConfig,
    PolicyLogic,
    PolicyType,
    RegisteredClient,
    ResourceSet,
    Token,
    UserInfo,
)
from .operations import (
    ClientDirectory,
    EntitlementEvaluator,
    PermissionManager,
    PolicyManager,
    ResourceManager,
    TokenClient,
    UserDirectory,
    read_token,
)

__all__ = [
    # Facade
    "KeycloakAuthzClient",
    # Clients
    "BaseAuthzClient",
    "bearer_headers",
    "join_path",
    # Codec
    "encode_id_list",
    "decode_id_list",
    # Entities
    "AuthzResource",
    "DecisionStrategy",
    "EntitlementRequest",
    "Permission",
    "PermissionConfig",
    "PermissionType",
    "Policy",
    "PolicyConfig",
    "PolicyLogic",
    "PolicyType",
    "RegisteredClient",
    "ResourceSet",
    "Token",
    "UserInfo",
    # Operations
    "ClientDirectory",
    "EntitlementEvaluator",
    "PermissionManager",
    "PolicyManager",
    "ResourceManager",
    "TokenClient",
    "UserDirectory",
    "read_token",
]
