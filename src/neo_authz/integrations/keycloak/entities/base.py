"""Base schema and shared enumerations for Keycloak authorization records."""
from enum import Enum

from pydantic import BaseModel, ConfigDict


class KeycloakSchema(BaseModel):
    """Base schema for records exchanged with Keycloak.
    
    Fields are populated by attribute name or by their wire alias, and
    unknown wire fields are ignored.
    """
    
    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        extra="ignore",
    )
    
    def to_wire(self) -> dict:
        """Serialize using wire field names, leaving out unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PolicyLogic(str, Enum):
    """Whether a policy grants (positive) or revokes (negative) access."""
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"


class DecisionStrategy(str, Enum):
    """How Keycloak combines the policies attached to a permission."""
    UNANIMOUS = "UNANIMOUS"
    AFFIRMATIVE = "AFFIRMATIVE"
    CONSENSUS = "CONSENSUS"


class PolicyType(str, Enum):
    """Policy types created by this library."""
    USER = "user"


class PermissionType(str, Enum):
    """Permission types created by this library."""
    RESOURCE = "resource"
