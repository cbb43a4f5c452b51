"""Workspace aggregate for the Workspaces context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from shared_kernel.identifiers import UserId
from shared_kernel.validation import max_length, required, required_id
from workspaces.domain.aggregates.invite import Invite
from workspaces.domain.events import (
    InviteCreated,
    InviteRevoked,
    InviteUsed,
    WorkspaceCreated,
    WorkspaceDeleted,
    WorkspaceUpdated,
)
from workspaces.domain.observability import DefaultWorkspaceProbe, WorkspaceProbe
from workspaces.domain.value_objects import (
    MAX_WORKSPACE_NAME_LENGTH,
    InviteId,
    WorkspaceId,
)
from workspaces.ports.exceptions import InviteNotFoundError

if TYPE_CHECKING:
    from shared_kernel.events import DomainEvent


def _validate_name(name: str) -> None:
    required("name", name)
    max_length("name", name, MAX_WORKSPACE_NAME_LENGTH)


@dataclass
class Workspace:
    """Workspace aggregate: a team unit backed by an identity-provider group.

    The workspace owns its invites. Membership records are stored through
    the repository and are not part of the aggregate state.

    Business rules:
    - name is 1-100 characters
    - keycloak_group_id and created_by are required
    - Invites expire strictly in the future and have max_uses >= 0
    - Only active invites can be used; a revoked invite stays revoked

    Versioning:
    - version is 1 after create() and increases by one per mutation,
      including changes to owned invites
    - persisted_version is the version last read from or written to storage

    Event collection:
    - All mutating operations record domain events
    - Invite events use the invite id and the invite's own version
    """

    id: WorkspaceId
    name: str
    keycloak_group_id: str
    created_by: UserId
    created_at: datetime
    updated_at: datetime
    description: str = ""
    invites: list[Invite] = field(default_factory=list)
    version: int = 1
    persisted_version: int = 0
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)
    _probe: WorkspaceProbe = field(
        default_factory=DefaultWorkspaceProbe,
        repr=False,
    )

    @classmethod
    def create(
        cls,
        name: str,
        keycloak_group_id: str,
        created_by: UserId,
        description: str = "",
        probe: WorkspaceProbe | None = None,
    ) -> Workspace:
        """Factory method for creating a new workspace.

        The identity-provider group must already exist; its id is passed in.

        Args:
            name: Workspace name (1-100 characters)
            keycloak_group_id: Identity-provider group backing the workspace
            created_by: The creating user
            description: Optional free-text description
            probe: Optional observability probe for domain events

        Returns:
            A new Workspace aggregate with WorkspaceCreated event recorded

        Raises:
            ValidationError: If any required value is missing or name is
                too long
        """
        _validate_name(name)
        required("keycloak_group_id", keycloak_group_id)
        required_id("created_by", created_by)

        now = datetime.now(UTC)
        workspace = cls(
            id=WorkspaceId.generate(),
            name=name,
            keycloak_group_id=keycloak_group_id,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            description=description,
            _probe=probe or DefaultWorkspaceProbe(),
        )
        workspace._pending_events.append(
            WorkspaceCreated(
                aggregate_id=workspace.id.value,
                version=workspace.version,
                occurred_at=now,
                name=name,
                keycloak_group_id=keycloak_group_id,
                created_by=created_by.value,
            )
        )
        return workspace

    @classmethod
    def reconstruct(
        cls,
        *,
        id: WorkspaceId,
        name: str,
        keycloak_group_id: str,
        created_by: UserId,
        created_at: datetime,
        updated_at: datetime,
        description: str,
        invites: list[Invite],
        version: int,
        probe: WorkspaceProbe | None = None,
    ) -> Workspace:
        """Rebuild a workspace from stored state without checks or events."""
        return cls(
            id=id,
            name=name,
            keycloak_group_id=keycloak_group_id,
            created_by=created_by,
            created_at=created_at,
            updated_at=updated_at,
            description=description,
            invites=list(invites),
            version=version,
            persisted_version=version,
            _probe=probe or DefaultWorkspaceProbe(),
        )

    def _touch(self) -> datetime:
        now = datetime.now(UTC)
        self.updated_at = now
        self.version += 1
        return now

    def update_name(self, name: str) -> None:
        """Rename the workspace.

        Raises:
            ValidationError: If name is empty or longer than 100 characters
        """
        _validate_name(name)

        old_name = self.name
        self.name = name
        now = self._touch()

        self._pending_events.append(
            WorkspaceUpdated(
                aggregate_id=self.id.value,
                version=self.version,
                occurred_at=now,
                name=name,
            )
        )
        self._probe.renamed(
            workspace_id=self.id.value, old_name=old_name, new_name=name
        )

    def create_invite(
        self,
        created_by: UserId,
        expires_at: datetime,
        max_uses: int = 0,
    ) -> Invite:
        """Create a new active invite with a fresh token.

        Args:
            created_by: User creating the invite
            expires_at: Expiry time, strictly in the future
            max_uses: Maximum number of uses, 0 for unlimited

        Returns:
            The new Invite, now owned by this workspace

        Raises:
            ValidationError: If the invite parameters are invalid
        """
        invite = Invite.create(
            workspace_id=self.id,
            created_by=created_by,
            expires_at=expires_at,
            max_uses=max_uses,
        )
        self.invites.append(invite)
        now = self._touch()

        self._pending_events.append(
            InviteCreated(
                aggregate_id=invite.id.value,
                version=invite.version,
                occurred_at=now,
                workspace_id=self.id.value,
                token=invite.token,
                created_by=created_by.value,
                expires_at=expires_at,
                max_uses=max_uses,
            )
        )
        self._probe.invite_created(
            workspace_id=self.id.value,
            invite_id=invite.id.value,
            max_uses=max_uses,
            expires_at=expires_at.isoformat(),
        )
        return invite

    def find_invite_by_token(self, token: str) -> Invite:
        """Find an owned invite by token.

        Raises:
            InviteNotFoundError: If no invite has this token
        """
        for invite in self.invites:
            if invite.token == token:
                return invite
        raise InviteNotFoundError()

    def find_invite_by_id(self, invite_id: InviteId) -> Invite:
        """Find an owned invite by id.

        Raises:
            InviteNotFoundError: If no invite has this id
        """
        for invite in self.invites:
            if invite.id == invite_id:
                return invite
        raise InviteNotFoundError()

    def has_invite(self, invite_id: InviteId) -> bool:
        return any(invite.id == invite_id for invite in self.invites)

    def use_invite(self, invite_id: InviteId, used_by: UserId) -> Invite:
        """Count one use of an owned invite.

        Raises:
            InviteNotFoundError: If the invite is not owned by this workspace
            InviteRevokedError, InviteExpiredError, InviteMaxUsesReachedError:
                If the invite is not active
        """
        invite = self.find_invite_by_id(invite_id)
        invite.use()
        now = self._touch()

        self._pending_events.append(
            InviteUsed(
                aggregate_id=invite.id.value,
                version=invite.version,
                occurred_at=now,
                workspace_id=self.id.value,
                used_by=used_by.value,
                used_count=invite.used_count,
            )
        )
        self._probe.invite_used(
            workspace_id=self.id.value,
            invite_id=invite.id.value,
            used_count=invite.used_count,
        )
        return invite

    def revoke_invite(self, invite_id: InviteId, revoked_by: UserId) -> Invite:
        """Revoke an owned invite.

        Raises:
            InviteNotFoundError: If the invite is not owned by this workspace
            InviteRevokedError: If the invite is already revoked
        """
        invite = self.find_invite_by_id(invite_id)
        invite.revoke()
        now = self._touch()

        self._pending_events.append(
            InviteRevoked(
                aggregate_id=invite.id.value,
                version=invite.version,
                occurred_at=now,
                workspace_id=self.id.value,
                revoked_by=revoked_by.value,
            )
        )
        self._probe.invite_revoked(
            workspace_id=self.id.value, invite_id=invite.id.value
        )
        return invite

    def mark_for_deletion(self, deleted_by: UserId) -> None:
        """Record the WorkspaceDeleted event ahead of repository deletion."""
        now = self._touch()
        self._pending_events.append(
            WorkspaceDeleted(
                aggregate_id=self.id.value,
                version=self.version,
                occurred_at=now,
                deleted_by=deleted_by.value,
                keycloak_group_id=self.keycloak_group_id,
            )
        )

    def mark_persisted(self) -> None:
        """Record that the current version has been written to storage."""
        self.persisted_version = self.version

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
