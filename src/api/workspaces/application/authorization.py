"""Membership-based authorization for workspace operations."""

from __future__ import annotations

from collections.abc import Callable

from shared_kernel.errors import operation_context
from shared_kernel.identifiers import UserId
from workspaces.domain.value_objects import Member, WorkspaceId
from workspaces.ports.exceptions import NotWorkspaceAdminError
from workspaces.ports.repositories import IWorkspaceQueryRepository


async def require_member(
    repository: IWorkspaceQueryRepository,
    workspace_id: WorkspaceId,
    user_id: UserId,
    allowed: Callable[[Member], bool],
) -> Member:
    """Load the user's membership and check it against a capability.

    Args:
        repository: Repository holding membership records
        workspace_id: The workspace being acted on
        user_id: The acting user
        allowed: Capability predicate, e.g. Member.can_invite

    Returns:
        The acting user's membership

    Raises:
        NotWorkspaceAdminError: If the user is not a member or lacks the
            capability
    """
    with operation_context("failed to load workspace member"):
        member = await repository.get_member(workspace_id, user_id)
    if member is None or not allowed(member):
        raise NotWorkspaceAdminError()
    return member
