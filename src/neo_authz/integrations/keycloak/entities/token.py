"""Token record returned by the OpenID Connect token endpoint."""
from typing import Optional

from pydantic import Field

from .base import KeycloakSchema


class Token(KeycloakSchema):
    """Bearer token set.
    
    Expiry fields are informational; nothing in this library refreshes
    tokens. A token without `access_token` never gets built: the parser
    rejects it.
    """
    
    access_token: str
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    refresh_expires_in: Optional[int] = None
    token_type: Optional[str] = None
    not_before_policy: Optional[int] = Field(default=None, alias="not-before-policy")
    
    def __repr__(self) -> str:
        return f"Token(token_type={self.token_type!r}, expires_in={self.expires_in!r})"
    
    __str__ = __repr__
