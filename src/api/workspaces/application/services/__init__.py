"""Application services for the Workspaces bounded context."""

from workspaces.application.services.invite_service import InviteService
from workspaces.application.services.workspace_service import WorkspaceService

__all__ = ["WorkspaceService", "InviteService"]
