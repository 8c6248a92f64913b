"""User lookups for Keycloak integration."""
import logging

from ..clients.base_client import BaseAuthzClient, join_path
from ..entities import UserInfo

logger = logging.getLogger(__name__)


class UserDirectory(BaseAuthzClient):
    """Resolves user identities known to Keycloak."""

    async def get_user_info(self, userinfo_endpoint: str, user_access_token: str) -> UserInfo:
        """
        Get the claims of the user owning a token.

        Raises:
            UnauthorizedError: If the token is rejected
            InternalError: On transport failure or a body without `sub`
        """
        response = await self._send("GET", userinfo_endpoint, token=user_access_token)
        self._raise_for_status(response, "Failed to get user info")

        data = self._json(response, "User info response is not valid JSON")
        return self._parse(UserInfo, data, "User info response is malformed")

    async def validate_user_exists(self, admin_endpoint: str, subject_id: str, pat: str) -> bool:
        """
        Check that a user id is known to the realm.

        Returns:
            True when the user exists, False when the server reports 404

        Raises:
            BadParameterError: If the id is empty or not a single path segment
            InternalError: On transport failure or an unexpected status
        """
        response = await self._send(
            "GET",
            join_path(admin_endpoint, "users", subject_id),
            token=pat
        )
        if response.status_code == 404:
            logger.debug(f"User {subject_id} does not exist")
            return False

        self._raise_for_status(response, f"Failed to look up user {subject_id}")
        return True
