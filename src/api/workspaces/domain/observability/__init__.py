"""Domain probes for the Workspaces bounded context."""

from workspaces.domain.observability.workspace_probe import (
    DefaultWorkspaceProbe,
    WorkspaceProbe,
)

__all__ = ["WorkspaceProbe", "DefaultWorkspaceProbe"]
