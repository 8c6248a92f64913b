"""Entitlement request sent under an end-user token."""
from typing import List

from pydantic import Field

from .base import KeycloakSchema


class ResourceSet(KeycloakSchema):
    name: str = Field(alias="resource_set_name")


class EntitlementRequest(KeycloakSchema):
    """Names of the resource sets the user asks access to."""
    
    permissions: List[ResourceSet] = Field(default_factory=list)
    
    @classmethod
    def for_resources(cls, *names: str) -> "EntitlementRequest":
        """Build a request for the given resource set names."""
        return cls(permissions=[ResourceSet(name=name) for name in names])
