"""User policy record and its double-encoded config."""
from typing import Any, List, Optional

from pydantic import Field, field_serializer, field_validator

from ..codec import decode_id_list, encode_id_list
from .base import KeycloakSchema, PolicyLogic, DecisionStrategy, PolicyType


class PolicyConfig(KeycloakSchema):
    """Policy config; `users` travels as a JSON string."""
    
    user_ids: List[str] = Field(default_factory=list, alias="users")
    
    @field_validator("user_ids", mode="before")
    @classmethod
    def decode_user_ids(cls, value: Any) -> List[str]:
        return decode_id_list(value)
    
    @field_serializer("user_ids")
    def encode_user_ids(self, user_ids: List[str]) -> str:
        return encode_id_list(user_ids)


class Policy(KeycloakSchema):
    """A set of principals plus the logic and strategy used to match them."""
    
    id: Optional[str] = None
    name: str
    type: str = PolicyType.USER.value
    logic: PolicyLogic = PolicyLogic.POSITIVE
    decision_strategy: DecisionStrategy = Field(
        default=DecisionStrategy.UNANIMOUS,
        alias="decisionStrategy"
    )
    description: Optional[str] = None
    config: PolicyConfig = Field(default_factory=PolicyConfig)
    
    @property
    def user_ids(self) -> List[str]:
        return self.config.user_ids
