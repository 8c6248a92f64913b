"""
User policy operations for Keycloak integration.

Policies and permissions share Keycloak's policy endpoint under the client's
resource server; the record type tells them apart.
"""
import logging
from typing import List, Optional, Type, TypeVar

from ....core.exceptions import BadParameterError, InternalError
from ..clients.base_client import BaseAuthzClient, join_path
from ..entities import KeycloakSchema, Policy
from .resource_manager import resource_server_url

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=KeycloakSchema)


def policy_url(clients_endpoint: str, client_id: str, record_id: Optional[str] = None) -> str:
    """URL of the policy collection, or of one policy when an id is given."""
    url = resource_server_url(clients_endpoint, client_id, "policy")
    if record_id is not None:
        url = join_path(url, record_id)
    return url


class PolicyRecordClient(BaseAuthzClient):
    """CRUD on Keycloak's policy endpoint for one record type."""

    record_type: Type[KeycloakSchema] = KeycloakSchema
    record_label = "record"

    async def _create_record(
        self,
        clients_endpoint: str,
        client_id: str,
        record: KeycloakSchema,
        pat: str
    ) -> str:
        payload = record.to_wire()
        payload.pop("id", None)

        response = await self._send(
            "POST",
            policy_url(clients_endpoint, client_id),
            token=pat,
            json=payload
        )
        self._raise_for_status(response, f"Failed to create {self.record_label} {record.name}")

        data = self._json(response, f"{self.record_label.capitalize()} creation response is not valid JSON")
        record_id = self._field(data, "id", f"{self.record_label.capitalize()} creation response has no id")

        logger.info(f"Created {self.record_label} {record.name} with id {record_id}")
        return record_id

    async def _get_record(
        self,
        clients_endpoint: str,
        client_id: str,
        record_id: str,
        pat: str
    ) -> RecordT:
        response = await self._send(
            "GET",
            policy_url(clients_endpoint, client_id, record_id),
            token=pat
        )
        self._raise_for_status(response, f"Failed to load {self.record_label} {record_id}")

        data = self._json(response, f"{self.record_label.capitalize()} response is not valid JSON")
        return self._parse(self.record_type, data, f"{self.record_label.capitalize()} response is malformed")

    async def _update_record(
        self,
        clients_endpoint: str,
        client_id: str,
        record: KeycloakSchema,
        pat: str
    ) -> None:
        if not record.id:
            raise BadParameterError(
                f"Cannot update a {self.record_label} without an id",
                details={"name": record.name}
            )

        response = await self._send(
            "PUT",
            policy_url(clients_endpoint, client_id, record.id),
            token=pat,
            json=record.to_wire()
        )
        self._raise_for_status(response, f"Failed to update {self.record_label} {record.id}")

        logger.info(f"Updated {self.record_label} {record.id}")

    async def _delete_record(
        self,
        clients_endpoint: str,
        client_id: str,
        record_id: str,
        pat: str
    ) -> None:
        response = await self._send(
            "DELETE",
            policy_url(clients_endpoint, client_id, record_id),
            token=pat
        )
        self._raise_for_status(response, f"Failed to delete {self.record_label} {record_id}")

        logger.info(f"Deleted {self.record_label} {record_id}")


class PolicyManager(PolicyRecordClient):
    """Creates, loads, lists, updates and deletes user policies."""

    record_type = Policy
    record_label = "policy"

    async def create(
        self,
        clients_endpoint: str,
        client_id: str,
        policy: Policy,
        pat: str
    ) -> str:
        """
        Create a policy.

        Args:
            clients_endpoint: Admin clients collection of the realm
            client_id: Internal client id
            policy: Policy to create; its id is ignored
            pat: Protected API token

        Returns:
            Id assigned by the server

        Raises:
            BadParameterError: If the server rejects the payload
            InternalError: On transport failure or when no id comes back
        """
        return await self._create_record(clients_endpoint, client_id, policy, pat)

    async def get(
        self,
        clients_endpoint: str,
        client_id: str,
        policy_id: str,
        pat: str
    ) -> Policy:
        """
        Load a policy.

        Raises:
            NotFoundError: If the policy does not exist
            InternalError: On transport failure or an unexpected body
        """
        return await self._get_record(clients_endpoint, client_id, policy_id, pat)

    async def update(
        self,
        clients_endpoint: str,
        client_id: str,
        policy: Policy,
        pat: str
    ) -> None:
        """
        Replace the policy identified by `policy.id`.

        Raises:
            BadParameterError: If the policy has no id or the server rejects it
            NotFoundError: If the policy does not exist
            InternalError: On transport failure
        """
        await self._update_record(clients_endpoint, client_id, policy, pat)

    async def delete(
        self,
        clients_endpoint: str,
        client_id: str,
        policy_id: str,
        pat: str
    ) -> None:
        """
        Delete a policy.

        Raises:
            NotFoundError: If the policy does not exist
            InternalError: On transport failure
        """
        await self._delete_record(clients_endpoint, client_id, policy_id, pat)

    async def list(
        self,
        clients_endpoint: str,
        client_id: str,
        pat: str,
        first: int = 0,
        max_results: int = 1000
    ) -> List[Policy]:
        """List the policies of a client's resource server, permissions excluded."""
        response = await self._send(
            "GET",
            policy_url(clients_endpoint, client_id),
            token=pat,
            params={"first": first, "max": max_results, "permission": "false"}
        )
        self._raise_for_status(response, f"Failed to list policies of client {client_id}")

        data = self._json(response, "Policy list response is not valid JSON")
        if not isinstance(data, list):
            raise InternalError(
                "Policy list response is not a JSON array",
                details={"reason": "invalid_response"}
            )
        return [self._parse(Policy, item, "Policy list entry is malformed") for item in data]
