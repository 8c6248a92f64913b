"""
Settings-bound facade over the Keycloak authorization operations.

Fills in endpoints from `KeycloakAuthzSettings`, acquires the PAT and
resolves the internal client id for every call. It keeps configuration only:
no tokens, client ids or decisions survive between calls.
"""
import logging
from typing import List, Optional

import httpx

from ...config import KeycloakAuthzSettings, get_settings
from ...core.exceptions import ConfigurationError
from .entities import (
    AuthzResource,
    EntitlementRequest,
    Permission,
    Policy,
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
)

logger = logging.getLogger(__name__)


class KeycloakAuthzClient:
    """
    Keycloak Authorization Services client for one resource server.

    Use as an async context manager to share one pooled `httpx.AsyncClient`
    across calls; otherwise each call opens its own connection.

    Example:
        async with KeycloakAuthzClient(settings) as authz:
            resource_id = await authz.create_resource(AuthzResource(name=space_id))
    """

    def __init__(
        self,
        settings: Optional[KeycloakAuthzSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.settings = settings or get_settings()
        self._owns_http_client = False
        self._bind(http_client)

        logger.debug(
            f"Keycloak authz client initialized for realm {self.settings.realm} "
            f"at {self.settings.server_url}"
        )

    def _bind(self, http_client: Optional[httpx.AsyncClient]) -> None:
        options = {
            "http_client": http_client,
            "timeout": self.settings.timeout,
            "verify_ssl": self.settings.verify_ssl,
        }
        self.http_client = http_client
        self.tokens = TokenClient(**options)
        self.clients = ClientDirectory(**options)
        self.resources = ResourceManager(**options)
        self.policies = PolicyManager(**options)
        self.permissions = PermissionManager(**options)
        self.entitlements = EntitlementEvaluator(**options)
        self.users = UserDirectory(**options)

    async def __aenter__(self):
        """Async context manager entry."""
        if self.http_client is None:
            self._bind(httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.timeout),
                verify=self.settings.verify_ssl
            ))
            self._owns_http_client = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the pooled HTTP client when this instance created it."""
        if self._owns_http_client and self.http_client is not None:
            await self.http_client.aclose()
            self._owns_http_client = False
            self._bind(None)

    def _client_secret(self) -> str:
        secret = self.settings.get_client_secret()
        if not self.settings.client_id or not secret:
            raise ConfigurationError("Keycloak client ID and secret are required for a PAT")
        return secret

    # Tokens and identities

    async def protected_api_token(self) -> str:
        """Acquire a fresh PAT for the configured client."""
        return await self.tokens.get_protected_api_token(
            self.settings.token_endpoint,
            self.settings.client_id,
            self._client_secret()
        )

    async def user_token(self, username: str, password: str) -> Token:
        """Acquire an end-user token through the configured client."""
        return await self.tokens.get_user_token(
            self.settings.token_endpoint,
            username,
            password,
            client_id=self.settings.client_id or None,
            client_secret=self.settings.get_client_secret()
        )

    async def client_id(self, pat: Optional[str] = None) -> str:
        """Resolve the internal id of the configured client."""
        pat = pat or await self.protected_api_token()
        return await self.clients.resolve_client_id(
            self.settings.clients_endpoint,
            self.settings.client_id,
            pat
        )

    async def user_info(self, user_access_token: str) -> UserInfo:
        return await self.users.get_user_info(self.settings.userinfo_endpoint, user_access_token)

    async def user_exists(self, subject_id: str) -> bool:
        pat = await self.protected_api_token()
        return await self.users.validate_user_exists(self.settings.admin_endpoint, subject_id, pat)

    # Resources

    async def create_resource(self, resource: AuthzResource) -> str:
        pat = await self.protected_api_token()
        return await self.resources.create(resource, self.settings.authz_resourceset_endpoint, pat)

    async def get_resource(self, resource_id: str) -> AuthzResource:
        pat = await self.protected_api_token()
        return await self.resources.get(resource_id, self.settings.authz_resourceset_endpoint, pat)

    async def list_resources(self, first: int = 0, max_results: int = 1000) -> List[AuthzResource]:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        return await self.resources.list(
            self.settings.clients_endpoint, client_id, pat, first=first, max_results=max_results
        )

    async def delete_resource(self, resource_id: str) -> None:
        pat = await self.protected_api_token()
        await self.resources.delete(resource_id, self.settings.authz_resourceset_endpoint, pat)

    # Policies

    async def create_policy(self, policy: Policy) -> str:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        return await self.policies.create(self.settings.clients_endpoint, client_id, policy, pat)

    async def get_policy(self, policy_id: str) -> Policy:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        return await self.policies.get(self.settings.clients_endpoint, client_id, policy_id, pat)

    async def list_policies(self, first: int = 0, max_results: int = 1000) -> List[Policy]:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        return await self.policies.list(
            self.settings.clients_endpoint, client_id, pat, first=first, max_results=max_results
        )

    async def update_policy(self, policy: Policy) -> None:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        await self.policies.update(self.settings.clients_endpoint, client_id, policy, pat)

    async def delete_policy(self, policy_id: str) -> None:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        await self.policies.delete(self.settings.clients_endpoint, client_id, policy_id, pat)

    # Permissions

    async def create_permission(self, permission: Permission) -> str:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        return await self.permissions.create(self.settings.clients_endpoint, client_id, permission, pat)

    async def get_permission(self, permission_id: str) -> Permission:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        return await self.permissions.get(self.settings.clients_endpoint, client_id, permission_id, pat)

    async def update_permission(self, permission: Permission) -> None:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        await self.permissions.update(self.settings.clients_endpoint, client_id, permission, pat)

    async def delete_permission(self, permission_id: str) -> None:
        pat = await self.protected_api_token()
        client_id = await self.client_id(pat)
        await self.permissions.delete(self.settings.clients_endpoint, client_id, permission_id, pat)

    # Entitlements

    async def get_entitlement(self, resource_names: List[str], user_access_token: str) -> str:
        """Evaluate access to resource sets; raises UnauthorizedError on deny."""
        return await self.entitlements.evaluate(
            self.settings.entitlement_endpoint,
            EntitlementRequest.for_resources(*resource_names),
            user_access_token
        )

    async def is_allowed(self, resource_names: List[str], user_access_token: str) -> bool:
        return await self.entitlements.is_allowed(
            self.settings.entitlement_endpoint,
            EntitlementRequest.for_resources(*resource_names),
            user_access_token
        )
