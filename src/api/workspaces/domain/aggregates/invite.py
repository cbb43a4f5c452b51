"""Invite entity, owned by the Workspace aggregate."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime

from shared_kernel.identifiers import UserId
from shared_kernel.validation import date_in_future, non_negative, required_id
from workspaces.domain.value_objects import InviteId, WorkspaceId
from workspaces.ports.exceptions import (
    InviteExpiredError,
    InviteMaxUsesReachedError,
    InviteRevokedError,
)

# 32 random bytes, base64url encoded
INVITE_TOKEN_BYTES = 32


def generate_invite_token() -> str:
    """Generate an opaque, URL-safe invite token with 256 bits of entropy."""
    return secrets.token_urlsafe(INVITE_TOKEN_BYTES)


@dataclass
class Invite:
    """An invitation that admits its holder to a workspace.

    Lifecycle:
    - Active: not revoked, not expired and not exhausted; accepts use()
    - Revoked: terminal, reached via revoke()
    - Exhausted: max_uses > 0 and used_count == max_uses
    - Expired: the current time is at or after expires_at

    Invites are changed through their Workspace (use_invite, revoke_invite)
    so that the change is versioned and recorded as an event.
    """

    id: InviteId
    workspace_id: WorkspaceId
    token: str
    created_by: UserId
    created_at: datetime
    expires_at: datetime
    max_uses: int = 0
    used_count: int = 0
    is_revoked: bool = False
    version: int = 1

    @classmethod
    def create(
        cls,
        workspace_id: WorkspaceId,
        created_by: UserId,
        expires_at: datetime,
        max_uses: int = 0,
    ) -> Invite:
        """Create an active invite with a fresh token.

        Args:
            workspace_id: The owning workspace
            created_by: User creating the invite
            expires_at: Expiry time, strictly in the future
            max_uses: Maximum number of uses, 0 for unlimited

        Raises:
            ValidationError: If an id is missing, expires_at is not in the
                future (or is naive) or max_uses is negative
        """
        required_id("workspace_id", workspace_id)
        required_id("created_by", created_by)
        now = datetime.now(UTC)
        date_in_future("expires_at", expires_at, now=now)
        non_negative("max_uses", max_uses)

        return cls(
            id=InviteId.generate(),
            workspace_id=workspace_id,
            token=generate_invite_token(),
            created_by=created_by,
            created_at=now,
            expires_at=expires_at,
            max_uses=max_uses,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_exhausted(self) -> bool:
        return self.max_uses > 0 and self.used_count >= self.max_uses

    def is_valid(self, now: datetime | None = None) -> bool:
        """True if the invite may be used right now."""
        return (
            not self.is_revoked
            and not self.is_expired(now)
            and not self.is_exhausted()
        )

    def use(self) -> None:
        """Count one use of the invite.

        Raises:
            InviteRevokedError: If the invite was revoked
            InviteExpiredError: If the invite has expired
            InviteMaxUsesReachedError: If the invite is exhausted
        """
        if self.is_revoked:
            raise InviteRevokedError()
        if self.is_expired():
            raise InviteExpiredError()
        if self.is_exhausted():
            raise InviteMaxUsesReachedError()

        self.used_count += 1
        self.version += 1

    def revoke(self) -> None:
        """Revoke the invite permanently.

        Raises:
            InviteRevokedError: If the invite is already revoked
        """
        if self.is_revoked:
            raise InviteRevokedError("invite is already revoked")

        self.is_revoked = True
        self.version += 1
