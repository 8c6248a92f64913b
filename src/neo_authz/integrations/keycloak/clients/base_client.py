"""
Base client for Keycloak Authorization Services calls.

Provides request sending, bearer authentication, status translation and
response parsing shared by every operation.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ....core.exceptions import (
    AuthzError,
    BadParameterError,
    InternalError,
    error_for_status,
    is_success,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_TIMEOUT = 30.0
MAX_ERROR_BODY = 500


def bearer_headers(token: str) -> Dict[str, str]:
    """Authorization header for a bearer token."""
    return {"Authorization": f"Bearer {token}"}


def join_path(base: str, *segments: str) -> str:
    """Append path segments to a URL, each percent-encoded as a single segment.

    Raises:
        BadParameterError: If a segment is empty, `.` or `..`
    """
    parts = [base.rstrip("/")]
    for segment in segments:
        if not isinstance(segment, str) or segment in ("", ".", ".."):
            raise BadParameterError(
                f"Invalid path segment: {segment!r}",
                details={"segment": segment}
            )
        parts.append(quote(segment, safe=""))
    return "/".join(parts)


class BaseAuthzClient:
    """
    Base client shared by the authorization operations.

    Holds no per-call state. When an `httpx.AsyncClient` is injected it is
    reused (the caller owns its lifecycle); otherwise every call opens and
    closes its own client. Cancelling the awaiting task aborts the request
    and `asyncio.CancelledError` propagates untouched.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        verify_ssl: bool = True
    ):
        """Initialize base client.

        Args:
            http_client: Shared client to reuse across calls
            timeout: Request timeout in seconds for owned clients
            verify_ssl: Whether owned clients verify TLS certificates
        """
        self.http_client = http_client
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.http_client is not None:
            yield self.http_client
            return

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            verify=self.verify_ssl
        ) as client:
            yield client

    async def _send(
        self,
        method: str,
        url: str,
        *,
        token: Optional[str] = None,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """Perform a single request.

        Raises:
            InternalError: On timeout or any transport failure
        """
        headers = {"Accept": "application/json"}
        if token is not None:
            headers.update(bearer_headers(token))

        logger.debug(f"{method} {url}")

        try:
            async with self._client() as client:
                return await client.request(
                    method,
                    url,
                    headers=headers,
                    json=json,
                    data=data,
                    params=params
                )
        except httpx.TimeoutException as e:
            logger.error(f"Timed out calling {method} {url}: {e}")
            raise InternalError(
                f"Request to authorization server timed out: {method} {url}",
                details={"reason": "timeout", "method": method, "url": url}
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Transport error calling {method} {url}: {e}")
            raise InternalError(
                f"Request to authorization server failed: {method} {url}",
                details={"reason": "transport", "method": method, "url": url, "error": str(e)}
            ) from e

    def _raise_for_status(
        self,
        response: httpx.Response,
        message: str,
        client_error: Optional[Type[AuthzError]] = None
    ) -> None:
        """Translate a non-2xx response using the shared status table.

        Args:
            response: Response from the authorization server
            message: Message for the raised exception
            client_error: When set, every 4xx status raises this class instead
        """
        if is_success(response.status_code):
            return

        details = {
            "method": response.request.method,
            "url": str(response.request.url),
            "body": response.text[:MAX_ERROR_BODY],
        }

        if client_error is not None and 400 <= response.status_code < 500:
            details["status_code"] = response.status_code
            error = client_error(message, details=details)
        else:
            error = error_for_status(response.status_code, message, details)

        logger.warning(f"{message}: HTTP {response.status_code} from {details['url']}")
        raise error

    def _json(self, response: httpx.Response, message: str) -> Any:
        """Decode a JSON body.

        Raises:
            InternalError: If the body is not JSON
        """
        try:
            return response.json()
        except ValueError as e:
            raise InternalError(
                message,
                details={
                    "reason": "invalid_json",
                    "status_code": response.status_code,
                    "body": response.text[:MAX_ERROR_BODY],
                }
            ) from e

    def _parse(self, model: Type[ModelT], data: Any, message: str) -> ModelT:
        """Validate decoded JSON into a model.

        Raises:
            InternalError: If the data does not have the expected shape
        """
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise InternalError(
                message,
                details={"reason": "invalid_response", "error": str(e)}
            ) from e

    def _field(self, data: Any, name: str, message: str) -> str:
        """Extract a non-empty string field from a decoded JSON object.

        Raises:
            InternalError: If the field is missing or empty
        """
        value = data.get(name) if isinstance(data, dict) else None
        if not isinstance(value, str) or not value:
            raise InternalError(message, details={"reason": "missing_field", "field": name})
        return value
