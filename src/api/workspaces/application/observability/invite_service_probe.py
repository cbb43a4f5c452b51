"""Protocol for invite application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class InviteServiceProbe(Protocol):
    """Domain probe for invite operations. Tokens are never passed to probes."""

    def invite_created(
        self,
        workspace_id: str,
        invite_id: str,
        created_by: str,
        max_uses: int,
    ) -> None:
        ...

    def invite_accepted(
        self,
        workspace_id: str,
        invite_id: str,
        user_id: str,
        used_count: int,
    ) -> None:
        ...

    def invite_revoked(
        self, workspace_id: str, invite_id: str, revoked_by: str
    ) -> None:
        ...

    def operation_failed(self, operation: str, error: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> InviteServiceProbe:
        ...


class DefaultInviteServiceProbe:
    """Default implementation of InviteServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultInviteServiceProbe:
        return DefaultInviteServiceProbe(logger=self._logger, context=context)

    def invite_created(
        self,
        workspace_id: str,
        invite_id: str,
        created_by: str,
        max_uses: int,
    ) -> None:
        self._logger.info(
            "invite_created",
            workspace_id=workspace_id,
            invite_id=invite_id,
            created_by=created_by,
            max_uses=max_uses,
            **self._get_context_kwargs(
                exclude={"workspace_id", "invite_id", "created_by", "max_uses"}
            ),
        )

    def invite_accepted(
        self,
        workspace_id: str,
        invite_id: str,
        user_id: str,
        used_count: int,
    ) -> None:
        self._logger.info(
            "invite_accepted",
            workspace_id=workspace_id,
            invite_id=invite_id,
            user_id=user_id,
            used_count=used_count,
            **self._get_context_kwargs(
                exclude={"workspace_id", "invite_id", "user_id", "used_count"}
            ),
        )

    def invite_revoked(
        self, workspace_id: str, invite_id: str, revoked_by: str
    ) -> None:
        self._logger.info(
            "invite_revoked",
            workspace_id=workspace_id,
            invite_id=invite_id,
            revoked_by=revoked_by,
            **self._get_context_kwargs(
                exclude={"workspace_id", "invite_id", "revoked_by"}
            ),
        )

    def operation_failed(self, operation: str, error: str) -> None:
        self._logger.warning(
            "invite_operation_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(exclude={"operation", "error"}),
        )
