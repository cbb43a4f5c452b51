"""Queries accepted by WorkspaceService, and their results."""

from __future__ import annotations

from dataclasses import dataclass

from shared_kernel.identifiers import UserId
from workspaces.domain.aggregates import Workspace
from workspaces.domain.value_objects import WorkspaceId

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class GetWorkspaceQuery:
    workspace_id: WorkspaceId


@dataclass(frozen=True)
class ListUserWorkspacesQuery:
    """List the workspaces a user belongs to.

    Attributes:
        user_id: The member
        offset: Workspaces to skip (>= 0)
        limit: Page size (1 to MAX_PAGE_SIZE)
    """

    user_id: UserId
    offset: int = 0
    limit: int = 20


@dataclass(frozen=True)
class WorkspaceList:
    workspaces: list[Workspace]
    total_count: int
    offset: int
    limit: int
