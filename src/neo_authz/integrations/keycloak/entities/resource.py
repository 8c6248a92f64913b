"""Protected resource record."""
from typing import Any, List, Optional

from pydantic import AliasChoices, Field, field_validator

from .base import KeycloakSchema


class AuthzResource(KeycloakSchema):
    """A protected entity (e.g. a space) registered with Keycloak.
    
    `id` is assigned by the server and only known after creation. Keycloak
    reports it as `_id`, older admin endpoints as `id`; both are accepted.
    """
    
    id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    name: str
    type: Optional[str] = None
    uri: Optional[str] = None
    scopes: List[str] = Field(default_factory=list)
    
    @field_validator("scopes", mode="before")
    @classmethod
    def normalize_scopes(cls, value: Any) -> List[str]:
        """Reduce scope objects to names and drop duplicates, keeping order."""
        if value is None:
            return []
        
        names = []
        for scope in value:
            name = scope.get("name") if isinstance(scope, dict) else scope
            if name not in names:
                names.append(name)
        return names
    
    def to_create_payload(self) -> dict:
        """Payload for resource creation; never carries an id."""
        payload = self.to_wire()
        payload.pop("_id", None)
        return payload
