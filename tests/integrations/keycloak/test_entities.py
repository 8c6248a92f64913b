"""Tests for Keycloak authorization records and their wire format."""

import pytest
from pydantic import ValidationError

from neo_authz.integrations.keycloak import (
    AuthzResource,
    DecisionStrategy,
    EntitlementRequest,
    Permission,
    PermissionConfig,
    Policy,
    PolicyConfig,
    PolicyLogic,
    UserInfo,
)


class TestPolicy:

    def test_defaults(self):
        policy = Policy(name="space-members")

        assert policy.type == "user"
        assert policy.logic == PolicyLogic.POSITIVE
        assert policy.decision_strategy == DecisionStrategy.UNANIMOUS
        assert policy.user_ids == []

    def test_wire_format_double_encodes_users(self):
        policy = Policy(
            name="space-members",
            logic=PolicyLogic.POSITIVE,
            decision_strategy=DecisionStrategy.AFFIRMATIVE,
            config=PolicyConfig(user_ids=["u1", "u2"]),
        )

        assert policy.to_wire() == {
            "name": "space-members",
            "type": "user",
            "logic": "POSITIVE",
            "decisionStrategy": "AFFIRMATIVE",
            "config": {"users": '["u1","u2"]'},
        }

    def test_reads_wire_format(self):
        policy = Policy.model_validate({
            "id": "p1",
            "name": "space-members",
            "type": "user",
            "logic": "NEGATIVE",
            "decisionStrategy": "CONSENSUS",
            "config": {"users": '["u2","u1"]'},
            "owner": "ignored",
        })

        assert policy.id == "p1"
        assert policy.logic == "NEGATIVE"
        assert policy.decision_strategy == "CONSENSUS"
        assert policy.user_ids == ["u2", "u1"]

    def test_config_update_keeps_plain_list(self):
        policy = Policy(name="p", config=PolicyConfig(user_ids=["a", "b"]))
        policy.config = PolicyConfig(user_ids=["b"])

        assert policy.user_ids == ["b"]
        assert policy.to_wire()["config"] == {"users": '["b"]'}

    def test_rejects_malformed_config(self):
        with pytest.raises(ValidationError):
            Policy.model_validate({"name": "p", "config": {"users": "not-json"}})

    def test_rejects_unknown_logic(self):
        with pytest.raises(ValidationError):
            Policy(name="p", logic="MAYBE")


class TestPermission:

    def test_wire_format_double_encodes_ids(self):
        permission = Permission(
            name="space-access",
            config=PermissionConfig(resource_ids=["r1"], policy_ids=["p1", "p2"]),
        )

        assert permission.to_wire() == {
            "name": "space-access",
            "type": "resource",
            "logic": "POSITIVE",
            "decisionStrategy": "UNANIMOUS",
            "config": {"resources": '["r1"]', "applyPolicies": '["p1","p2"]'},
        }

    def test_reads_wire_format(self):
        permission = Permission.model_validate({
            "id": "perm1",
            "name": "space-access",
            "type": "resource",
            "logic": "POSITIVE",
            "decisionStrategy": "UNANIMOUS",
            "config": {"resources": '["r1"]', "applyPolicies": '["p1"]'},
        })

        assert permission.resource_ids == ["r1"]
        assert permission.policy_ids == ["p1"]


class TestAuthzResource:

    def test_reads_underscore_id(self):
        resource = AuthzResource.model_validate({"_id": "r1", "name": "space", "type": "space"})
        assert resource.id == "r1"

    def test_reads_plain_id(self):
        resource = AuthzResource.model_validate({"id": "r1", "name": "space"})
        assert resource.id == "r1"

    def test_scope_objects_become_names(self):
        resource = AuthzResource.model_validate({
            "name": "space",
            "scopes": [{"id": "s1", "name": "read:space"}, {"name": "admin:space"}, "read:space"],
        })
        assert resource.scopes == ["read:space", "admin:space"]

    def test_create_payload_never_carries_id(self):
        resource = AuthzResource(id="r1", name="space", type="space", uri="/spaces/1", scopes=["read"])

        assert resource.to_create_payload() == {
            "name": "space",
            "type": "space",
            "uri": "/spaces/1",
            "scopes": ["read"],
        }

    def test_optional_fields_left_out(self):
        assert AuthzResource(name="space").to_create_payload() == {"name": "space", "scopes": []}


def test_entitlement_request_wire_format():
    request = EntitlementRequest.for_resources("space-1", "space-2")

    assert request.to_wire() == {
        "permissions": [
            {"resource_set_name": "space-1"},
            {"resource_set_name": "space-2"},
        ]
    }


def test_user_info_keeps_extra_claims():
    info = UserInfo.model_validate({"sub": "u1", "email": "a@example.com", "email_verified": True})

    assert info.subject_id == "u1"
    assert info.email == "a@example.com"
    assert info.model_extra == {"email_verified": True}
