"""User and client directory records."""
from typing import Optional

from pydantic import ConfigDict, Field

from .base import KeycloakSchema


class UserInfo(KeycloakSchema):
    """OpenID Connect userinfo claims; claims not listed are kept as extras."""
    
    model_config = ConfigDict(extra="allow")
    
    sub: str
    preferred_username: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    
    @property
    def subject_id(self) -> str:
        return self.sub


class RegisteredClient(KeycloakSchema):
    """Entry of the realm's clients collection."""
    
    id: str
    client_id: str = Field(alias="clientId")
