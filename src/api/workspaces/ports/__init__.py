"""Ports (repository and identity-provider protocols) for Workspaces."""
