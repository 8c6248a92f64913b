"""External system integrations for neo-authz."""
