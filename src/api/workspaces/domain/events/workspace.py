"""Domain events for the Workspace aggregate and its invites."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from shared_kernel.events import DomainEvent

WORKSPACE_AGGREGATE_TYPE = "Workspace"
INVITE_AGGREGATE_TYPE = "Invite"


@dataclass(frozen=True, kw_only=True)
class WorkspaceCreated(DomainEvent):
    """Event raised when a workspace is created.

    Attributes:
        name: The workspace name
        keycloak_group_id: The identity-provider group backing the workspace
        created_by: The creating user
    """

    event_type: ClassVar[str] = "workspace.created"
    aggregate_type: ClassVar[str] = WORKSPACE_AGGREGATE_TYPE

    name: str
    keycloak_group_id: str
    created_by: str


@dataclass(frozen=True, kw_only=True)
class WorkspaceUpdated(DomainEvent):
    event_type: ClassVar[str] = "workspace.updated"
    aggregate_type: ClassVar[str] = WORKSPACE_AGGREGATE_TYPE

    name: str


@dataclass(frozen=True, kw_only=True)
class WorkspaceDeleted(DomainEvent):
    """Event raised when a workspace is deleted.

    The identity-provider group has already been removed when this is
    published.
    """

    event_type: ClassVar[str] = "workspace.deleted"
    aggregate_type: ClassVar[str] = WORKSPACE_AGGREGATE_TYPE

    deleted_by: str
    keycloak_group_id: str


@dataclass(frozen=True, kw_only=True)
class InviteCreated(DomainEvent):
    """Event raised when an invite is created.

    aggregate_id is the invite id; version is the invite's own version.

    Attributes:
        workspace_id: Workspace the invite admits to
        token: The opaque invite token
        created_by: User who created the invite
        expires_at: Expiry time
        max_uses: Maximum number of uses, 0 for unlimited
    """

    event_type: ClassVar[str] = "workspace.invite.created"
    aggregate_type: ClassVar[str] = INVITE_AGGREGATE_TYPE

    workspace_id: str
    token: str
    created_by: str
    expires_at: datetime
    max_uses: int


@dataclass(frozen=True, kw_only=True)
class InviteUsed(DomainEvent):
    event_type: ClassVar[str] = "workspace.invite.used"
    aggregate_type: ClassVar[str] = INVITE_AGGREGATE_TYPE

    workspace_id: str
    used_by: str
    used_count: int


@dataclass(frozen=True, kw_only=True)
class InviteRevoked(DomainEvent):
    event_type: ClassVar[str] = "workspace.invite.revoked"
    aggregate_type: ClassVar[str] = INVITE_AGGREGATE_TYPE

    workspace_id: str
    revoked_by: str
