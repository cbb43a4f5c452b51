"""Domain events for the Workspaces bounded context."""

from workspaces.domain.events.workspace import (
    INVITE_AGGREGATE_TYPE,
    WORKSPACE_AGGREGATE_TYPE,
    InviteCreated,
    InviteRevoked,
    InviteUsed,
    WorkspaceCreated,
    WorkspaceDeleted,
    WorkspaceUpdated,
)

WorkspaceEvent = (
    WorkspaceCreated
    | WorkspaceUpdated
    | WorkspaceDeleted
    | InviteCreated
    | InviteUsed
    | InviteRevoked
)

WORKSPACE_EVENT_TYPES: tuple[type, ...] = (
    WorkspaceCreated,
    WorkspaceUpdated,
    WorkspaceDeleted,
    InviteCreated,
    InviteUsed,
    InviteRevoked,
)

__all__ = [
    "INVITE_AGGREGATE_TYPE",
    "WORKSPACE_AGGREGATE_TYPE",
    "WORKSPACE_EVENT_TYPES",
    "InviteCreated",
    "InviteRevoked",
    "InviteUsed",
    "WorkspaceCreated",
    "WorkspaceDeleted",
    "WorkspaceEvent",
    "WorkspaceUpdated",
]
