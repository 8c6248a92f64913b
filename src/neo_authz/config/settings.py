"""
Keycloak authorization settings.

Endpoints used by the authorization core are derived from the server URL and
realm, so services only configure where Keycloak lives and which client they
act as.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import ConfigurationError


class KeycloakAuthzSettings(BaseSettings):
    """Settings for the Keycloak Authorization Services integration.
    
    Values are read from KEYCLOAK_* environment variables or a .env file.
    `server_url` may include the legacy `/auth` context path.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="KEYCLOAK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    server_url: str = Field(default="http://localhost:8080", description="Keycloak base URL")
    realm: str = Field(default="master", description="Realm holding the resource server")
    client_id: str = Field(default="", description="Public name of the resource server client")
    client_secret: SecretStr = Field(default=SecretStr(""), description="Resource server client secret")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    
    def _base(self) -> str:
        url = (self.server_url or "").rstrip("/")
        if not url:
            raise ConfigurationError("Keycloak server URL is not configured")
        if not self.realm:
            raise ConfigurationError("Keycloak realm is not configured")
        return url
    
    def _realm_url(self, path: str) -> str:
        return f"{self._base()}/realms/{self.realm}/{path}"
    
    @property
    def token_endpoint(self) -> str:
        """OpenID Connect token endpoint."""
        return self._realm_url("protocol/openid-connect/token")
    
    @property
    def userinfo_endpoint(self) -> str:
        """OpenID Connect userinfo endpoint."""
        return self._realm_url("protocol/openid-connect/userinfo")
    
    @property
    def authz_resourceset_endpoint(self) -> str:
        """Protection API resource set endpoint."""
        return self._realm_url("authz/protection/resource_set")
    
    @property
    def entitlement_endpoint(self) -> str:
        """Entitlement endpoint for the configured client."""
        if not self.client_id:
            raise ConfigurationError("Keycloak client ID is not configured")
        return self._realm_url(f"authz/entitlement/{self.client_id}")
    
    @property
    def admin_endpoint(self) -> str:
        """Admin REST API root for the realm."""
        return f"{self._base()}/admin/realms/{self.realm}"
    
    @property
    def clients_endpoint(self) -> str:
        """Admin REST API clients collection."""
        return f"{self.admin_endpoint}/clients"
    
    def get_client_secret(self) -> Optional[str]:
        """Plain client secret, None when unset."""
        secret = self.client_secret.get_secret_value()
        return secret or None


@lru_cache()
def get_settings() -> KeycloakAuthzSettings:
    """Get cached settings instance."""
    return KeycloakAuthzSettings()
