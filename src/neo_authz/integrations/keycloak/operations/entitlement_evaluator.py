"""
Entitlement evaluation for Keycloak integration.

Asks the server whether an end user may access named resource sets. The
answer always reflects live policy state; nothing is cached.
"""
import logging

from ....core.exceptions import UnauthorizedError
from ..clients.base_client import BaseAuthzClient
from ..entities import EntitlementRequest

logger = logging.getLogger(__name__)


class EntitlementEvaluator(BaseAuthzClient):
    """Evaluates entitlements under end-user tokens."""

    async def evaluate(
        self,
        entitlement_endpoint: str,
        request: EntitlementRequest,
        user_access_token: str
    ) -> str:
        """
        Request an entitlement for the given resource sets.

        Args:
            entitlement_endpoint: Entitlement endpoint of the resource server
            request: Resource set names to check
            user_access_token: End-user bearer token

        Returns:
            The RPT granted by the server, an opaque grant marker

        Raises:
            UnauthorizedError: On 401/403; callers treat this as a deny
            InternalError: On transport failure or when no RPT comes back
        """
        names = [resource_set.name for resource_set in request.permissions]
        logger.debug(f"Evaluating entitlement for resource sets {names}")

        response = await self._send(
            "POST",
            entitlement_endpoint,
            token=user_access_token,
            json=request.to_wire()
        )
        self._raise_for_status(response, f"Entitlement request for {names} failed")

        data = self._json(response, "Entitlement response is not valid JSON")
        rpt = self._field(data, "rpt", "Entitlement response has no RPT")

        logger.debug(f"Entitlement granted for resource sets {names}")
        return rpt

    async def is_allowed(
        self,
        entitlement_endpoint: str,
        request: EntitlementRequest,
        user_access_token: str
    ) -> bool:
        """Boolean form of `evaluate`: False on deny, other errors propagate."""
        try:
            await self.evaluate(entitlement_endpoint, request, user_access_token)
        except UnauthorizedError:
            return False
        return True
