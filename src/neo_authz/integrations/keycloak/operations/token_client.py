"""
Token operations for Keycloak integration.

Acquires bearer tokens with the client-credentials and password grants.
Nothing is cached: every call is a fresh round trip to the token endpoint.
"""
import json
import logging
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import ValidationError

from ....core.exceptions import InternalError, UnauthorizedError
from ..clients.base_client import BaseAuthzClient
from ..entities import Token

logger = logging.getLogger(__name__)


def read_token(raw_body: Union[bytes, str, httpx.Response]) -> Token:
    """
    Parse a token endpoint response body.

    Args:
        raw_body: Raw JSON body, or the response carrying it

    Returns:
        Parsed token

    Raises:
        InternalError: If the body is not a JSON object, a field has the
            wrong type, or `access_token` is missing
    """
    if isinstance(raw_body, httpx.Response):
        raw_body = raw_body.content

    try:
        data = json.loads(raw_body)
    except (TypeError, ValueError) as e:
        raise InternalError(
            "Token response is not valid JSON",
            details={"reason": "invalid_json"}
        ) from e

    if not isinstance(data, dict):
        raise InternalError(
            "Token response is not a JSON object",
            details={"reason": "invalid_response"}
        )

    if not data.get("access_token"):
        raise InternalError(
            "Token response has no access token",
            details={"reason": "missing_field", "field": "access_token"}
        )

    try:
        return Token.model_validate(data)
    except ValidationError as e:
        raise InternalError(
            "Token response is malformed",
            details={"reason": "invalid_response", "error": str(e)}
        ) from e


class TokenClient(BaseAuthzClient):
    """Acquires tokens from the OpenID Connect token endpoint."""

    async def _grant(self, token_endpoint: str, form: Dict[str, Any], grant: str) -> Token:
        response = await self._send("POST", token_endpoint, data=form)
        self._raise_for_status(
            response,
            f"Token request ({grant}) was rejected",
            client_error=UnauthorizedError
        )
        return read_token(response)

    async def get_service_token(
        self,
        token_endpoint: str,
        client_id: str,
        client_secret: str
    ) -> Token:
        """
        Get a service-account token with the client-credentials grant.

        Args:
            token_endpoint: OpenID Connect token endpoint
            client_id: Public name of the confidential client
            client_secret: Client secret

        Returns:
            Token issued to the service account

        Raises:
            UnauthorizedError: On any 4xx response
            InternalError: On transport failure, other statuses or a malformed body
        """
        logger.debug(f"Requesting service token for client {client_id}")

        token = await self._grant(
            token_endpoint,
            {
                "grant_type": "client_credentials",
                "client_id": client_id,
                "client_secret": client_secret,
            },
            "client_credentials"
        )

        logger.debug(f"Obtained service token for client {client_id}")
        return token

    async def get_protected_api_token(
        self,
        token_endpoint: str,
        client_id: str,
        client_secret: str
    ) -> str:
        """Get a PAT (protected API token) as a plain access token string."""
        token = await self.get_service_token(token_endpoint, client_id, client_secret)
        return token.access_token

    async def get_user_token(
        self,
        token_endpoint: str,
        username: str,
        password: str,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None
    ) -> Token:
        """
        Get an end-user token with the password grant.

        Args:
            token_endpoint: OpenID Connect token endpoint
            username: End-user name
            password: End-user password
            client_id: Client the user logs in through
            client_secret: Secret of a confidential client

        Returns:
            Token issued to the user

        Raises:
            UnauthorizedError: On any 4xx response
            InternalError: On transport failure, other statuses or a malformed body
        """
        logger.debug(f"Requesting user token for {username}")

        form = {
            "grant_type": "password",
            "username": username,
            "password": password,
        }
        if client_id:
            form["client_id"] = client_id
        if client_secret:
            form["client_secret"] = client_secret

        token = await self._grant(token_endpoint, form, "password")

        logger.debug(f"Obtained user token for {username}")
        return token
