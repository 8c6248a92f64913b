"""Keycloak Authorization Services operations."""

from .token_client import TokenClient, read_token
from .client_directory import ClientDirectory
from .resource_manager import ResourceManager
from .policy_manager import PolicyManager
from .permission_manager import PermissionManager
from .entitlement_evaluator import EntitlementEvaluator
from .user_directory import UserDirectory

__all__ = [
    "TokenClient",
    "read_token",
    "ClientDirectory",
    "ResourceManager",
    "PolicyManager",
    "PermissionManager",
    "EntitlementEvaluator",
    "UserDirectory",
]
