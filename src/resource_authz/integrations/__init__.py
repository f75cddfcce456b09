"""Framework integrations for resource-authz (optional extras)."""
