"""Value objects for the Workspaces domain."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from enum import StrEnum

from shared_kernel.identifiers import UlidIdentifier, UserId
from shared_kernel.validation import required_id

MAX_WORKSPACE_NAME_LENGTH = 100
DEFAULT_INVITE_TTL = timedelta(days=7)
DEFAULT_INVITE_MAX_USES = 0


@dataclass(frozen=True)
class WorkspaceId(UlidIdentifier):
    """Identifier for a Workspace aggregate."""


@dataclass(frozen=True)
class InviteId(UlidIdentifier):
    """Identifier for an Invite owned by a Workspace."""


class Role(StrEnum):
    """Roles for workspace membership, from most to least privileged."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"


@dataclass(frozen=True)
class Member:
    """A user's membership in a workspace.

    Owners and admins may manage members and create invites; plain
    members may not.
    """

    user_id: UserId
    workspace_id: WorkspaceId
    role: Role
    joined_at: datetime

    @classmethod
    def create(
        cls,
        user_id: UserId,
        workspace_id: WorkspaceId,
        role: Role = Role.MEMBER,
    ) -> Member:
        """Create a membership starting now.

        Raises:
            ValidationError: If user_id or workspace_id is missing
        """
        required_id("user_id", user_id)
        required_id("workspace_id", workspace_id)
        return cls(
            user_id=user_id,
            workspace_id=workspace_id,
            role=Role(role),
            joined_at=datetime.now(UTC),
        )

    def is_owner(self) -> bool:
        return self.role == Role.OWNER

    def is_admin(self) -> bool:
        """Owners count as admins."""
        return self.role in (Role.OWNER, Role.ADMIN)

    def can_manage_members(self) -> bool:
        return self.is_admin()

    def can_invite(self) -> bool:
        return self.is_admin()

    def with_role(self, role: Role) -> Member:
        """Return a copy with a different role; joined_at is kept."""
        return replace(self, role=Role(role))
