"""Records exchanged with Keycloak Authorization Services."""

from .base import (
    KeycloakSchema,
    PolicyLogic,
    DecisionStrategy,
    PolicyType,
    PermissionType,
)
from .token import Token
from .resource import AuthzResource
from .policy import Policy, PolicyConfig
from .permission import Permission, PermissionConfig
from .entitlement import EntitlementRequest, ResourceSet
from .user import UserInfo, RegisteredClient

__all__ = [
    "KeycloakSchema",
    "PolicyLogic",
    "DecisionStrategy",
    "PolicyType",
    "PermissionType",
    "Token",
    "AuthzResource",
    "Policy",
    "PolicyConfig",
    "Permission",
    "PermissionConfig",
    "EntitlementRequest",
    "ResourceSet",
    "UserInfo",
    "RegisteredClient",
]
