"""Pytest configuration and fixtures for neo-authz tests.

The authorization server is emulated by FakeKeycloak, an httpx.MockTransport
handler holding resources, policies, permissions and users in memory. It
evaluates entitlements for user policies the way Keycloak does for positive
and negative logic under the three decision strategies.
"""

import json
import re
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from neo_authz.config import KeycloakAuthzSettings


SERVER_URL = "http://keycloak.test"
REALM = "neo"
PUBLIC_CLIENT_ID = "neo-api"
CLIENT_SECRET = "neo-secret"
INTERNAL_CLIENT_ID = "65d23f35-c532-4493-a860-39e851abe397"

TEST_USERS = {
    "alice": "alice-password",
    "bob": "bob-password",
}


def _json_response(status_code: int, payload: Any = None) -> httpx.Response:
    if payload is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, json=payload)


class FakeKeycloak:
    """In-memory Keycloak realm with one resource server client."""

    def __init__(self):
        self.clients = [
            {"id": INTERNAL_CLIENT_ID, "clientId": PUBLIC_CLIENT_ID},
            {"id": str(uuid4()), "clientId": f"{PUBLIC_CLIENT_ID}-admin"},
        ]
        self.users: Dict[str, Dict[str, str]] = {
            username: {"id": str(uuid4()), "password": password}
            for username, password in TEST_USERS.items()
        }
        self.resources: Dict[str, Dict[str, Any]] = {}
        self.policies: Dict[str, Dict[str, Any]] = {}
        self.pats: set = set()
        self.user_tokens: Dict[str, str] = {}
        self.requests: List[httpx.Request] = []

    # Helpers used by tests

    def user_id(self, username: str) -> str:
        return self.users[username]["id"]

    def count(self, method: str, path_fragment: str) -> int:
        return sum(
            1 for request in self.requests
            if request.method == method and path_fragment in request.url.path
        )

    # Routing

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        realm = f"/realms/{REALM}"
        admin = f"/admin/realms/{REALM}"

        if path == f"{realm}/protocol/openid-connect/token":
            return self._token(request)
        if path == f"{realm}/protocol/openid-connect/userinfo":
            return self._userinfo(request)
        if path == f"{realm}/authz/entitlement/{PUBLIC_CLIENT_ID}":
            return self._entitlement(request)

        # Everything below requires a PAT
        if self._bearer(request) not in self.pats:
            return _json_response(401, {"error": "HTTP 401 Unauthorized"})

        if path.startswith(f"{realm}/authz/protection/resource_set"):
            return self._resource_set(request, path[len(f"{realm}/authz/protection/resource_set"):])
        if path == f"{admin}/clients":
            return self._clients(request)

        match = re.fullmatch(rf"{admin}/users/([^/]+)", path)
        if match:
            known = {user["id"] for user in self.users.values()}
            return _json_response(200, {"id": match.group(1)}) if match.group(1) in known \
                else _json_response(404, {"error": "User not found"})

        match = re.fullmatch(rf"{admin}/clients/([^/]+)/authz/resource-server/(resource|policy)(?:/([^/]+))?", path)
        if match:
            if match.group(1) != INTERNAL_CLIENT_ID:
                return _json_response(404, {"error": "Could not find client"})
            if match.group(2) == "resource":
                return self._list_resources(request)
            return self._policy(request, match.group(3))

        return _json_response(404, {"error": "unknown endpoint"})

    @staticmethod
    def _bearer(request: httpx.Request) -> Optional[str]:
        header = request.headers.get("Authorization", "")
        return header[len("Bearer "):] if header.startswith("Bearer ") else None

    # Token and users

    def _token(self, request: httpx.Request) -> httpx.Response:
        form = {key: values[0] for key, values in parse_qs(request.content.decode()).items()}
        grant_type = form.get("grant_type")

        if grant_type == "client_credentials":
            if form.get("client_id") != PUBLIC_CLIENT_ID or form.get("client_secret") != CLIENT_SECRET:
                return _json_response(401, {"error": "unauthorized_client"})
            access_token = f"pat-{uuid4()}"
            self.pats.add(access_token)
        elif grant_type == "password":
            user = self.users.get(form.get("username"))
            if user is None or user["password"] != form.get("password"):
                return _json_response(401, {"error": "invalid_grant"})
            access_token = f"user-{uuid4()}"
            self.user_tokens[access_token] = user["id"]
        else:
            return _json_response(400, {"error": "unsupported_grant_type"})

        return _json_response(200, {
            "access_token": access_token,
            "expires_in": 300,
            "refresh_expires_in": 1800,
            "refresh_token": f"refresh-{uuid4()}",
            "token_type": "bearer",
            "not-before-policy": 0,
        })

    def _userinfo(self, request: httpx.Request) -> httpx.Response:
        user_id = self.user_tokens.get(self._bearer(request))
        if user_id is None:
            return _json_response(401, {"error": "invalid_token"})
        username = next(name for name, user in self.users.items() if user["id"] == user_id)
        return _json_response(200, {"sub": user_id, "preferred_username": username, "email_verified": False})

    def _clients(self, request: httpx.Request) -> httpx.Response:
        # Keycloak filters loosely here; callers must match the name exactly
        wanted = request.url.params.get("clientId", "")
        return _json_response(200, [client for client in self.clients if wanted in client["clientId"]])

    # Resources

    def _resource_set(self, request: httpx.Request, suffix: str) -> httpx.Response:
        resource_id = suffix.strip("/") or None

        if request.method == "POST" and resource_id is None:
            body = json.loads(request.content)
            if not body.get("name"):
                return _json_response(400, {"error": "invalid_request", "error_description": "Name is required"})
            if any(resource["name"] == body["name"] for resource in self.resources.values()):
                return _json_response(409, {"error": "invalid_request", "error_description": "Resource already exists"})
            resource_id = str(uuid4())
            self.resources[resource_id] = {**body, "_id": resource_id}
            return _json_response(201, {"_id": resource_id, "name": body["name"]})

        if resource_id is None:
            return _json_response(200, list(self.resources))

        if resource_id not in self.resources:
            return _json_response(404, {"error": "not_found"})

        if request.method == "GET":
            resource = dict(self.resources[resource_id])
            resource["scopes"] = [{"name": scope} for scope in resource.get("scopes", [])]
            return _json_response(200, resource)
        if request.method == "DELETE":
            del self.resources[resource_id]
            return _json_response(204)
        return _json_response(405)

    def _list_resources(self, request: httpx.Request) -> httpx.Response:
        first = int(request.url.params.get("first", 0))
        maximum = int(request.url.params.get("max", 100))
        return _json_response(200, list(self.resources.values())[first:first + maximum])

    # Policies and permissions

    def _validate_policy(self, body: Dict[str, Any]) -> Optional[httpx.Response]:
        try:
            if body.get("type") == "user":
                users = json.loads(body["config"]["users"])
                known = {user["id"] for user in self.users.values()}
                if not set(users) <= known:
                    return _json_response(400, {"error": "User does not exist"})
            elif body.get("type") == "resource":
                resources = json.loads(body["config"]["resources"])
                policies = json.loads(body["config"]["applyPolicies"])
                if not set(resources) <= set(self.resources):
                    return _json_response(400, {"error": "Resource does not exist"})
                if not set(policies) <= set(self.policies):
                    return _json_response(400, {"error": "Policy does not exist"})
            else:
                return _json_response(400, {"error": "Unknown policy type"})
        except (KeyError, TypeError, ValueError):
            return _json_response(400, {"error": "Invalid policy config"})
        return None

    def _policy(self, request: httpx.Request, policy_id: Optional[str]) -> httpx.Response:
        if policy_id is None:
            if request.method == "POST":
                body = json.loads(request.content)
                rejected = self._validate_policy(body)
                if rejected is not None:
                    return rejected
                policy_id = str(uuid4())
                self.policies[policy_id] = {**body, "id": policy_id}
                return _json_response(201, self.policies[policy_id])
            if request.method == "GET":
                include_permissions = request.url.params.get("permission") != "false"
                return _json_response(200, [
                    policy for policy in self.policies.values()
                    if include_permissions or policy["type"] != "resource"
                ])
            return _json_response(405)

        if policy_id not in self.policies:
            return _json_response(404, {"error": "Could not find policy"})

        if request.method == "GET":
            return _json_response(200, self.policies[policy_id])
        if request.method == "PUT":
            body = json.loads(request.content)
            rejected = self._validate_policy(body)
            if rejected is not None:
                return rejected
            self.policies[policy_id] = {**body, "id": policy_id}
            return _json_response(201)
        if request.method == "DELETE":
            del self.policies[policy_id]
            return _json_response(204)
        return _json_response(405)

    # Entitlement

    def _policy_grants(self, policy: Dict[str, Any], user_id: str) -> bool:
        granted = user_id in json.loads(policy["config"]["users"])
        return granted if policy.get("logic", "POSITIVE") == "POSITIVE" else not granted

    def _permission_grants(self, permission: Dict[str, Any], user_id: str) -> bool:
        policy_ids = json.loads(permission["config"]["applyPolicies"])
        results = [
            self._policy_grants(self.policies[policy_id], user_id)
            for policy_id in policy_ids if policy_id in self.policies
        ]
        strategy = permission.get("decisionStrategy", "UNANIMOUS")
        if not results:
            granted = False
        elif strategy == "AFFIRMATIVE":
            granted = any(results)
        elif strategy == "CONSENSUS":
            granted = results.count(True) > results.count(False)
        else:
            granted = all(results)
        return granted if permission.get("logic", "POSITIVE") == "POSITIVE" else not granted

    def _entitlement(self, request: httpx.Request) -> httpx.Response:
        user_id = self.user_tokens.get(self._bearer(request))
        if user_id is None:
            return _json_response(401, {"error": "invalid_bearer_token"})

        body = json.loads(request.content)
        for wanted in body.get("permissions", []):
            resource_ids = [
                resource_id for resource_id, resource in self.resources.items()
                if resource["name"] == wanted.get("resource_set_name")
            ]
            permissions = [
                policy for policy in self.policies.values()
                if policy["type"] == "resource"
                and set(resource_ids) & set(json.loads(policy["config"]["resources"]))
            ]
            if not any(self._permission_grants(permission, user_id) for permission in permissions):
                return _json_response(403, {"error": "not_authorized"})

        return _json_response(200, {"rpt": f"rpt-{uuid4()}"})


@pytest.fixture
def fake_keycloak():
    """Fresh in-memory Keycloak realm."""
    return FakeKeycloak()


@pytest_asyncio.fixture
async def http_client(fake_keycloak):
    """Async HTTP client routed to the fake realm."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_keycloak))
    yield client
    await client.aclose()


@pytest.fixture
def settings():
    """Settings pointing at the fake realm."""
    return KeycloakAuthzSettings(
        server_url=SERVER_URL,
        realm=REALM,
        client_id=PUBLIC_CLIENT_ID,
        client_secret=CLIENT_SECRET,
        timeout=5.0,
    )


@pytest_asyncio.fixture
async def pat(http_client, settings):
    """Protected API token issued by the fake realm."""
    from neo_authz.integrations.keycloak import TokenClient

    return await TokenClient(http_client=http_client).get_protected_api_token(
        settings.token_endpoint, PUBLIC_CLIENT_ID, CLIENT_SECRET
    )


@pytest.fixture
def client_id():
    """Internal id of the resource server client."""
    return INTERNAL_CLIENT_ID


@pytest_asyncio.fixture
async def canned_client():
    """Factory for async HTTP clients answering with one canned outcome.

    Pass `status_code` (plus httpx.Response kwargs) for a fixed response,
    or `raises` with a callable building the exception from the request.
    """
    clients = []

    def factory(status_code: int = 200, raises=None, **kwargs) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            if raises is not None:
                raise raises(request)
            return httpx.Response(status_code, **kwargs)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()
