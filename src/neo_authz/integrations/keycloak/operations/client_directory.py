"""
Client lookup for Keycloak integration.

Resource server operations are scoped by the client's internal id, which
differs from the public `clientId` services are configured with.
"""
import logging

from ....core.exceptions import NotFoundError
from ..clients.base_client import BaseAuthzClient
from ..entities import RegisteredClient

logger = logging.getLogger(__name__)


class ClientDirectory(BaseAuthzClient):
    """Resolves registered clients through the admin API."""

    async def resolve_client_id(
        self,
        clients_endpoint: str,
        public_client_name: str,
        pat: str
    ) -> str:
        """
        Resolve the internal id of a client from its public name.

        Args:
            clients_endpoint: Admin clients collection of the realm
            public_client_name: Public `clientId` of the client
            pat: Protected API token

        Returns:
            Internal client id

        Raises:
            NotFoundError: If no client has exactly that name
            InternalError: On transport failure or an unexpected body
        """
        logger.debug(f"Resolving client id for {public_client_name}")

        response = await self._send(
            "GET",
            clients_endpoint,
            token=pat,
            params={"clientId": public_client_name}
        )
        self._raise_for_status(response, f"Failed to list clients named {public_client_name}")

        data = self._json(response, "Clients response is not valid JSON")
        if not isinstance(data, list):
            data = [data]

        # The server filters loosely; only the exact match is validated
        for entry in data:
            if not isinstance(entry, dict) or entry.get("clientId") != public_client_name:
                continue
            client = self._parse(RegisteredClient, entry, "Clients response is malformed")
            if client.client_id == public_client_name:
                logger.debug(f"Resolved client {public_client_name} to {client.id}")
                return client.id

        raise NotFoundError(
            f"Client {public_client_name} not found",
            details={"client_id": public_client_name}
        )
