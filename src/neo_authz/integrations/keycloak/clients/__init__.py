"""Keycloak client building blocks."""

from .base_client import BaseAuthzClient, bearer_headers, join_path

__all__ = [
    "BaseAuthzClient",
    "bearer_headers",
    "join_path",
]
