"""
Protected resource operations for Keycloak integration.

Resources are registered through the protection API resource set endpoint;
listing goes through the admin resource-server endpoint of the client.
"""
import logging
from typing import List

from ....core.exceptions import InternalError
from ..clients.base_client import BaseAuthzClient, join_path
from ..entities import AuthzResource

logger = logging.getLogger(__name__)


def resource_server_url(clients_endpoint: str, client_id: str, path: str) -> str:
    """URL below a client's authorization resource server."""
    return join_path(clients_endpoint, client_id, "authz", "resource-server", path)


class ResourceManager(BaseAuthzClient):
    """Creates, loads, lists and deletes protected resources."""

    async def create(
        self,
        resource: AuthzResource,
        authz_endpoint: str,
        pat: str
    ) -> str:
        """
        Register a resource.

        Args:
            resource: Resource to register; its id is ignored
            authz_endpoint: Protection API resource set endpoint
            pat: Protected API token

        Returns:
            Id assigned by the server

        Raises:
            BadParameterError: If the server rejects the payload
            InternalError: On transport failure or when no id comes back
        """
        logger.debug(f"Creating resource {resource.name}")

        response = await self._send(
            "POST",
            authz_endpoint,
            token=pat,
            json=resource.to_create_payload()
        )
        self._raise_for_status(response, f"Failed to create resource {resource.name}")

        data = self._json(response, "Resource creation response is not valid JSON")
        if isinstance(data, dict) and not data.get("_id") and data.get("id"):
            data = {"_id": data["id"]}
        resource_id = self._field(data, "_id", "Resource creation response has no id")

        logger.info(f"Created resource {resource.name} with id {resource_id}")
        return resource_id

    async def get(
        self,
        resource_id: str,
        authz_endpoint: str,
        pat: str
    ) -> AuthzResource:
        """
        Load a resource by id.

        Raises:
            NotFoundError: If the resource does not exist
            BadParameterError: If the id is empty or not a single path segment
            InternalError: On transport failure or an unexpected body
        """
        response = await self._send(
            "GET",
            join_path(authz_endpoint, resource_id),
            token=pat
        )
        self._raise_for_status(response, f"Failed to load resource {resource_id}")

        data = self._json(response, "Resource response is not valid JSON")
        return self._parse(AuthzResource, data, "Resource response is malformed")

    async def list(
        self,
        clients_endpoint: str,
        client_id: str,
        pat: str,
        first: int = 0,
        max_results: int = 1000
    ) -> List[AuthzResource]:
        """
        List the resources of a client's resource server.

        Args:
            clients_endpoint: Admin clients collection of the realm
            client_id: Internal client id
            pat: Protected API token
            first: Offset of the first result
            max_results: Page size

        Returns:
            Resources with their server ids
        """
        response = await self._send(
            "GET",
            resource_server_url(clients_endpoint, client_id, "resource"),
            token=pat,
            params={"deep": "false", "first": first, "max": max_results}
        )
        self._raise_for_status(response, f"Failed to list resources of client {client_id}")

        data = self._json(response, "Resource list response is not valid JSON")
        if not isinstance(data, list):
            raise InternalError(
                "Resource list response is not a JSON array",
                details={"reason": "invalid_response"}
            )
        return [self._parse(AuthzResource, item, "Resource list entry is malformed") for item in data]

    async def delete(
        self,
        resource_id: str,
        authz_endpoint: str,
        pat: str
    ) -> None:
        """
        Delete a resource.

        Raises:
            NotFoundError: If the resource does not exist
            BadParameterError: If the id is empty or not a single path segment
            InternalError: On transport failure
        """
        response = await self._send(
            "DELETE",
            join_path(authz_endpoint, resource_id),
            token=pat
        )
        self._raise_for_status(response, f"Failed to delete resource {resource_id}")

        logger.info(f"Deleted resource {resource_id}")
