"""Commands accepted by WorkspaceService and InviteService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from shared_kernel.identifiers import UserId
from workspaces.domain.value_objects import InviteId, WorkspaceId


@dataclass(frozen=True)
class CreateWorkspaceCommand:
    name: str
    created_by: UserId
    description: str = ""


@dataclass(frozen=True)
class UpdateWorkspaceCommand:
    workspace_id: WorkspaceId
    name: str
    updated_by: UserId


@dataclass(frozen=True)
class DeleteWorkspaceCommand:
    workspace_id: WorkspaceId
    deleted_by: UserId


@dataclass(frozen=True)
class CreateInviteCommand:
    """Create an invite to a workspace.

    Attributes:
        workspace_id: Workspace to invite to
        created_by: Inviting user; must be allowed to invite
        expires_at: Expiry time; defaults to now plus the configured TTL
        max_uses: Maximum uses; defaults to the configured value (0 means
            unlimited)
    """

    workspace_id: WorkspaceId
    created_by: UserId
    expires_at: datetime | None = None
    max_uses: int | None = None


@dataclass(frozen=True)
class AcceptInviteCommand:
    token: str
    user_id: UserId


@dataclass(frozen=True)
class RevokeInviteCommand:
    invite_id: InviteId
    revoked_by: UserId
