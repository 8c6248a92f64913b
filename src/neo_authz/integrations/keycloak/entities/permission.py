"""Resource permission record binding resources to policies."""
from typing import Any, List, Optional

from pydantic import Field, field_serializer, field_validator

from ..codec import decode_id_list, encode_id_list
from .base import KeycloakSchema, PolicyLogic, DecisionStrategy, PermissionType


class PermissionConfig(KeycloakSchema):
    """Permission config; both id lists travel as JSON strings."""
    
    resource_ids: List[str] = Field(default_factory=list, alias="resources")
    policy_ids: List[str] = Field(default_factory=list, alias="applyPolicies")
    
    @field_validator("resource_ids", "policy_ids", mode="before")
    @classmethod
    def decode_ids(cls, value: Any) -> List[str]:
        return decode_id_list(value)
    
    @field_serializer("resource_ids", "policy_ids")
    def encode_ids(self, ids: List[str]) -> str:
        return encode_id_list(ids)


class Permission(KeycloakSchema):
    """Effective access rule: which policies guard which resources."""
    
    id: Optional[str] = None
    name: str
    type: str = PermissionType.RESOURCE.value
    logic: PolicyLogic = PolicyLogic.POSITIVE
    decision_strategy: DecisionStrategy = Field(
        default=DecisionStrategy.UNANIMOUS,
        alias="decisionStrategy"
    )
    description: Optional[str] = None
    config: PermissionConfig = Field(default_factory=PermissionConfig)
    
    @property
    def resource_ids(self) -> List[str]:
        return self.config.resource_ids
    
    @property
    def policy_ids(self) -> List[str]:
        return self.config.policy_ids
