"""Workspaces bounded context.

Owns workspaces, their membership and invites, and keeps each workspace
in sync with a group in the external identity provider.
"""
