"""Domain layer for the Workspaces bounded context."""
