"""
Codec for Keycloak's double-encoded policy config fields.

Keycloak stores list-valued policy config (`users`, `resources`,
`applyPolicies`) as a JSON string inside the JSON document, e.g.
``{"config": {"users": "[\\"id1\\",\\"id2\\"]"}}``. Models hold plain lists and
go through these two functions on every read and write.
"""
import json
from typing import Any, List, Optional


def encode_id_list(ids: Optional[List[str]]) -> str:
    """Encode a list of ids as the JSON string Keycloak expects."""
    return json.dumps(list(ids or []), separators=(",", ":"))


def decode_id_list(value: Any) -> List[str]:
    """Decode a double-encoded id list.
    
    Accepts the JSON string form sent by Keycloak, an already decoded list,
    or None/empty string (no ids).
    
    Raises:
        ValueError: If the value is not a JSON array of strings
    """
    if value is None or value == "":
        return []
    
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"config value is not valid JSON: {e}") from e
    
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError("config value must be a JSON array of strings")
    
    return list(value)
