"""Aggregates for the Workspaces bounded context."""

from workspaces.domain.aggregates.invite import Invite, generate_invite_token
from workspaces.domain.aggregates.workspace import Workspace

__all__ = ["Invite", "Workspace", "generate_invite_token"]
