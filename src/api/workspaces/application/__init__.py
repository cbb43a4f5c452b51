"""Application layer for the Workspaces bounded context."""
