"""Domain-Oriented Observability for the Workspaces application layer."""

from workspaces.application.observability.invite_service_probe import (
    DefaultInviteServiceProbe,
    InviteServiceProbe,
)
from workspaces.application.observability.workspace_service_probe import (
    DefaultWorkspaceServiceProbe,
    WorkspaceServiceProbe,
)

__all__ = [
    "WorkspaceServiceProbe",
    "DefaultWorkspaceServiceProbe",
    "InviteServiceProbe",
    "DefaultInviteServiceProbe",
]
