"""Repository protocols (ports) for the Workspaces bounded context.

Workspaces, with their invites, are persisted as one aggregate. Membership
rows are stored alongside but written through dedicated methods, because
they change independently of the workspace itself. Lookups return None
when nothing matches.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.identifiers import UserId
from workspaces.domain.aggregates import Invite, Workspace
from workspaces.domain.value_objects import InviteId, Member, WorkspaceId


@runtime_checkable
class IWorkspaceCommandRepository(Protocol):
    """Write side of workspace persistence."""

    async def save(self, workspace: Workspace) -> None:
        """Persist a workspace aggregate and its invites.

        Implementations must compare workspace.persisted_version with the
        stored version, reject the write on mismatch and call
        workspace.mark_persisted() on success.

        Raises:
            ConcurrencyConflictError: If the stored workspace changed since it
                was loaded
            PersistenceError: If the write failed
        """
        ...

    async def delete(self, workspace_id: WorkspaceId) -> None:
        """Delete a workspace with its invites and memberships."""
        ...

    async def add_member(self, member: Member) -> None:
        ...

    async def remove_member(self, workspace_id: WorkspaceId, user_id: UserId) -> None:
        ...

    async def update_member(self, member: Member) -> None:
        """Replace the stored role of an existing member."""
        ...


@runtime_checkable
class IWorkspaceQueryRepository(Protocol):
    """Read side of workspace persistence."""

    async def get_by_id(self, workspace_id: WorkspaceId) -> Workspace | None:
        """Retrieve a workspace by ID.

        Returns:
            The Workspace aggregate with its invites, or None if not found
        """
        ...

    async def find_by_keycloak_group(self, group_id: str) -> Workspace | None:
        ...

    async def find_by_invite_id(self, invite_id: InviteId) -> Workspace | None:
        """Retrieve the workspace owning an invite.

        Returns:
            The owning Workspace, or None if no workspace owns the invite
        """
        ...

    async def find_invite_by_token(self, token: str) -> Invite | None:
        """Retrieve an invite by its token across all workspaces."""
        ...

    async def list_all(self, offset: int, limit: int) -> list[Workspace]:
        ...

    async def count(self) -> int:
        ...

    async def get_member(
        self, workspace_id: WorkspaceId, user_id: UserId
    ) -> Member | None:
        ...

    async def is_member(self, workspace_id: WorkspaceId, user_id: UserId) -> bool:
        ...

    async def list_workspaces_by_user(
        self, user_id: UserId, offset: int, limit: int
    ) -> list[Workspace]:
        """List the workspaces a user is a member of, oldest membership first."""
        ...

    async def count_workspaces_by_user(self, user_id: UserId) -> int:
        ...

    async def list_members(
        self, workspace_id: WorkspaceId, offset: int, limit: int
    ) -> list[Member]:
        ...

    async def count_members(self, workspace_id: WorkspaceId) -> int:
        ...


@runtime_checkable
class IWorkspaceRepository(
    IWorkspaceCommandRepository, IWorkspaceQueryRepository, Protocol
):
    """Full workspace repository contract."""
