"""Resource permission operations for Keycloak integration."""
import logging

from ..entities import Permission
from .policy_manager import PolicyRecordClient

logger = logging.getLogger(__name__)


class PermissionManager(PolicyRecordClient):
    """Creates, loads, updates and deletes resource permissions."""

    record_type = Permission
    record_label = "permission"

    async def create(
        self,
        clients_endpoint: str,
        client_id: str,
        permission: Permission,
        pat: str
    ) -> str:
        """
        Create a permission binding resources to policies.

        The referenced resource and policy ids must already exist; the server
        checks them.

        Returns:
            Id assigned by the server

        Raises:
            BadParameterError: If the server rejects the payload or the ids
            InternalError: On transport failure or when no id comes back
        """
        logger.debug(
            f"Creating permission {permission.name} for resources {permission.resource_ids} "
            f"and policies {permission.policy_ids}"
        )
        return await self._create_record(clients_endpoint, client_id, permission, pat)

    async def get(
        self,
        clients_endpoint: str,
        client_id: str,
        permission_id: str,
        pat: str
    ) -> Permission:
        """
        Load a permission.

        Raises:
            NotFoundError: If the permission does not exist
        """
        return await self._get_record(clients_endpoint, client_id, permission_id, pat)

    async def update(
        self,
        clients_endpoint: str,
        client_id: str,
        permission: Permission,
        pat: str
    ) -> None:
        """Replace the permission identified by `permission.id`."""
        await self._update_record(clients_endpoint, client_id, permission, pat)

    async def delete(
        self,
        clients_endpoint: str,
        client_id: str,
        permission_id: str,
        pat: str
    ) -> None:
        """
        Delete a permission.

        Raises:
            NotFoundError: If the permission does not exist
        """
        await self._delete_record(clients_endpoint, client_id, permission_id, pat)
