"""Protocol for workspace application service observability.

Defines the interface for domain probes that capture application-level
events for workspace operations, including compensation of the identity
provider when a workspace cannot be stored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class WorkspaceServiceProbe(Protocol):
    """Domain probe for workspace application service operations."""

    def workspace_created(
        self,
        workspace_id: str,
        name: str,
        keycloak_group_id: str,
        created_by: str,
    ) -> None:
        """Record workspace creation."""
        ...

    def workspace_creation_failed(self, name: str, error: str) -> None:
        """Record failed workspace creation."""
        ...

    def compensation_failed(
        self,
        keycloak_group_id: str,
        error: str,
        workspace_id: str | None = None,
    ) -> None:
        """Record that undoing a partial workspace creation failed.

        The identity-provider group (and possibly the stored workspace) is
        left behind and needs manual cleanup.
        """
        ...

    def group_membership_sync_failed(
        self,
        user_id: str,
        keycloak_group_id: str,
        error: str,
    ) -> None:
        """Record a best-effort group membership update that failed."""
        ...

    def workspace_updated(self, workspace_id: str, name: str, updated_by: str) -> None:
        ...

    def workspace_retrieved(self, workspace_id: str, name: str) -> None:
        ...

    def workspace_not_found(self, workspace_id: str) -> None:
        ...

    def workspaces_listed(self, user_id: str, count: int, total_count: int) -> None:
        ...

    def workspace_deleted(self, workspace_id: str, deleted_by: str) -> None:
        ...

    def workspace_deletion_failed(self, workspace_id: str, error: str) -> None:
        ...

    def workspace_deletion_incomplete(
        self, workspace_id: str, keycloak_group_id: str, error: str
    ) -> None:
        """Record that the group was released but the workspace was not deleted.

        The stored workspace points at a group that no longer exists until
        the deletion is retried.
        """
        ...

    def operation_failed(
        self,
        operation: str,
        error: str,
        workspace_id: str | None = None,
    ) -> None:
        """Record a rejected or failed operation."""
        ...

    def with_context(self, context: ObservationContext) -> WorkspaceServiceProbe:
        """Return a new probe with additional context."""
        ...


class DefaultWorkspaceServiceProbe:
    """Default implementation of WorkspaceServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Get context as kwargs dict, excluding specified keys.

        Args:
            exclude: Set of keys to exclude from context (avoids parameter collision)

        Returns:
            Context dict with excluded keys filtered out
        """
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultWorkspaceServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultWorkspaceServiceProbe(logger=self._logger, context=context)

    def workspace_created(
        self,
        workspace_id: str,
        name: str,
        keycloak_group_id: str,
        created_by: str,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "name", "keycloak_group_id", "created_by"}
        )
        self._logger.info(
            "workspace_created",
            workspace_id=workspace_id,
            name=name,
            keycloak_group_id=keycloak_group_id,
            created_by=created_by,
            **context_kwargs,
        )

    def workspace_creation_failed(self, name: str, error: str) -> None:
        context_kwargs = self._get_context_kwargs(exclude={"name", "error"})
        self._logger.error(
            "workspace_creation_failed",
            name=name,
            error=error,
            **context_kwargs,
        )

    def compensation_failed(
        self,
        keycloak_group_id: str,
        error: str,
        workspace_id: str | None = None,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"keycloak_group_id", "error", "workspace_id"}
        )
        self._logger.error(
            "workspace_compensation_failed",
            keycloak_group_id=keycloak_group_id,
            workspace_id=workspace_id,
            error=error,
            **context_kwargs,
        )

    def group_membership_sync_failed(
        self,
        user_id: str,
        keycloak_group_id: str,
        error: str,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"user_id", "keycloak_group_id", "error"}
        )
        self._logger.warning(
            "workspace_group_membership_sync_failed",
            user_id=user_id,
            keycloak_group_id=keycloak_group_id,
            error=error,
            **context_kwargs,
        )

    def workspace_updated(self, workspace_id: str, name: str, updated_by: str) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "name", "updated_by"}
        )
        self._logger.info(
            "workspace_updated",
            workspace_id=workspace_id,
            name=name,
            updated_by=updated_by,
            **context_kwargs,
        )

    def workspace_retrieved(self, workspace_id: str, name: str) -> None:
        context_kwargs = self._get_context_kwargs(exclude={"workspace_id", "name"})
        self._logger.debug(
            "workspace_retrieved",
            workspace_id=workspace_id,
            name=name,
            **context_kwargs,
        )

    def workspace_not_found(self, workspace_id: str) -> None:
        context_kwargs = self._get_context_kwargs(exclude={"workspace_id"})
        self._logger.debug(
            "workspace_not_found",
            workspace_id=workspace_id,
            **context_kwargs,
        )

    def workspaces_listed(self, user_id: str, count: int, total_count: int) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"user_id", "count", "total_count"}
        )
        self._logger.debug(
            "workspaces_listed",
            user_id=user_id,
            count=count,
            total_count=total_count,
            **context_kwargs,
        )

    def workspace_deleted(self, workspace_id: str, deleted_by: str) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "deleted_by"}
        )
        self._logger.info(
            "workspace_deleted",
            workspace_id=workspace_id,
            deleted_by=deleted_by,
            **context_kwargs,
        )

    def workspace_deletion_failed(self, workspace_id: str, error: str) -> None:
        context_kwargs = self._get_context_kwargs(exclude={"workspace_id", "error"})
        self._logger.error(
            "workspace_deletion_failed",
            workspace_id=workspace_id,
            error=error,
            **context_kwargs,
        )

    def workspace_deletion_incomplete(
        self, workspace_id: str, keycloak_group_id: str, error: str
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "keycloak_group_id", "error"}
        )
        self._logger.error(
            "workspace_deletion_incomplete",
            workspace_id=workspace_id,
            keycloak_group_id=keycloak_group_id,
            error=error,
            **context_kwargs,
        )

    def operation_failed(
        self,
        operation: str,
        error: str,
        workspace_id: str | None = None,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"operation", "error", "workspace_id"}
        )
        self._logger.warning(
            "workspace_operation_failed",
            operation=operation,
            error=error,
            workspace_id=workspace_id,
            **context_kwargs,
        )
