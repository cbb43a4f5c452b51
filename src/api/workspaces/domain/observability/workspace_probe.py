"""Observability probes for the Workspace aggregate.

Domain probes following the Domain Oriented Observability pattern. They
record the invite lifecycle as structured log events.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class WorkspaceProbe(Protocol):
    """Protocol for workspace aggregate observability probes."""

    def renamed(self, workspace_id: str, old_name: str, new_name: str) -> None:
        ...

    def invite_created(
        self,
        workspace_id: str,
        invite_id: str,
        max_uses: int,
        expires_at: str,
    ) -> None:
        """Probe emitted when an invite is created.

        Args:
            workspace_id: The workspace ID
            invite_id: The new invite
            max_uses: Maximum uses, 0 for unlimited
            expires_at: ISO-8601 expiry time
        """
        ...

    def invite_used(self, workspace_id: str, invite_id: str, used_count: int) -> None:
        ...

    def invite_revoked(self, workspace_id: str, invite_id: str) -> None:
        ...


class DefaultWorkspaceProbe:
    """Default implementation of WorkspaceProbe using structlog.

    Invite tokens are never logged.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._logger = logger or structlog.get_logger()

    def renamed(self, workspace_id: str, old_name: str, new_name: str) -> None:
        self._logger.info(
            "workspace_renamed",
            workspace_id=workspace_id,
            old_name=old_name,
            new_name=new_name,
        )

    def invite_created(
        self,
        workspace_id: str,
        invite_id: str,
        max_uses: int,
        expires_at: str,
    ) -> None:
        self._logger.info(
            "workspace_invite_created",
            workspace_id=workspace_id,
            invite_id=invite_id,
            max_uses=max_uses,
            expires_at=expires_at,
        )

    def invite_used(self, workspace_id: str, invite_id: str, used_count: int) -> None:
        self._logger.info(
            "workspace_invite_used",
            workspace_id=workspace_id,
            invite_id=invite_id,
            used_count=used_count,
        )

    def invite_revoked(self, workspace_id: str, invite_id: str) -> None:
        self._logger.info(
            "workspace_invite_revoked",
            workspace_id=workspace_id,
            invite_id=invite_id,
        )
