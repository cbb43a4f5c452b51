"""Invite application service.

Creates, accepts and revokes workspace invites. Accepting an invite spans
this system and the identity provider: the use is counted and saved first,
then the user is added to the workspace's group. If the group call fails
the use stays counted and the caller gets KeycloakUserAddFailedError.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from shared_kernel.errors import DomainError, InvalidInputError, operation_context
from shared_kernel.events import EventDispatcher, IEventPublisher
from shared_kernel.events.observability import EventDispatchProbe
from shared_kernel.execution_context import ensure_active
from shared_kernel.observability_context import ObservationContext
from shared_kernel.validation import (
    date_in_future,
    non_negative,
    required,
    required_id,
)
from workspaces.application.authorization import require_member
from workspaces.application.commands import (
    AcceptInviteCommand,
    CreateInviteCommand,
    RevokeInviteCommand,
)
from workspaces.application.observability import (
    DefaultInviteServiceProbe,
    InviteServiceProbe,
)
from workspaces.domain.aggregates import Invite, Workspace
from workspaces.domain.value_objects import (
    DEFAULT_INVITE_MAX_USES,
    DEFAULT_INVITE_TTL,
    Member,
    Role,
)
from workspaces.ports.exceptions import (
    InviteExpiredError,
    InviteNotFoundError,
    InviteRevokedError,
    KeycloakUserAddFailedError,
    WorkspaceNotFoundError,
)
from workspaces.ports.identity import IIdentityProviderClient
from workspaces.ports.repositories import IWorkspaceRepository


class InviteService:
    """Application service for workspace invites."""

    def __init__(
        self,
        workspace_repository: IWorkspaceRepository,
        identity_client: IIdentityProviderClient,
        event_publisher: IEventPublisher,
        invite_ttl: timedelta = DEFAULT_INVITE_TTL,
        default_max_uses: int = DEFAULT_INVITE_MAX_USES,
        probe: InviteServiceProbe | None = None,
        dispatch_probe: EventDispatchProbe | None = None,
    ):
        """Initialize InviteService with dependencies.

        Args:
            workspace_repository: Repository for workspaces and memberships
            identity_client: Client for the identity provider's groups
            event_publisher: Publisher for invite events
            invite_ttl: Lifetime of invites created without an expiry
            default_max_uses: max_uses for invites created without one
            probe: Optional domain probe for observability
            dispatch_probe: Optional probe for event publication outcomes
        """
        self._workspace_repository = workspace_repository
        self._identity_client = identity_client
        self._dispatcher = EventDispatcher(event_publisher, probe=dispatch_probe)
        self._invite_ttl = invite_ttl
        self._default_max_uses = default_max_uses
        self._probe = probe or DefaultInviteServiceProbe()

    def _observed_probe(self) -> InviteServiceProbe:
        context = ensure_active()
        return self._probe.with_context(
            ObservationContext.from_execution_context(context)
        )

    async def _save(self, workspace: Workspace) -> None:
        with operation_context("failed to save workspace"):
            await self._workspace_repository.save(workspace)

    async def create_invite(self, command: CreateInviteCommand) -> Invite:
        """Create an invite. Requires a member who can invite.

        Args:
            command: Workspace, inviting user and optional expiry/max uses

        Returns:
            The new Invite, including its token

        Raises:
            InvalidInputError: If the command is invalid
            WorkspaceNotFoundError: If the workspace does not exist
            NotWorkspaceAdminError: If the user may not invite
        """
        probe = self._observed_probe()
        expires_at = command.expires_at or datetime.now(UTC) + self._invite_ttl
        max_uses = (
            command.max_uses
            if command.max_uses is not None
            else self._default_max_uses
        )
        try:
            try:
                required_id("workspace_id", command.workspace_id)
                required_id("created_by", command.created_by)
                date_in_future("expires_at", expires_at)
                non_negative("max_uses", max_uses)
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            with operation_context("failed to load workspace"):
                workspace = await self._workspace_repository.get_by_id(
                    command.workspace_id
                )
            if workspace is None:
                raise WorkspaceNotFoundError()
            await require_member(
                self._workspace_repository,
                workspace.id,
                command.created_by,
                Member.can_invite,
            )

            invite = workspace.create_invite(
                created_by=command.created_by,
                expires_at=expires_at,
                max_uses=max_uses,
            )
            await self._save(workspace)
        except DomainError as e:
            probe.operation_failed(operation="create_invite", error=str(e))
            raise

        await self._dispatcher.dispatch(
            workspace.collect_events(), actor_id=command.created_by.value
        )
        probe.invite_created(
            workspace_id=workspace.id.value,
            invite_id=invite.id.value,
            created_by=command.created_by.value,
            max_uses=max_uses,
        )
        return invite

    async def accept_invite(self, command: AcceptInviteCommand) -> Workspace:
        """Redeem an invite token and join its workspace.

        Sequence: count the use and save, publish, record the membership,
        then add the user to the identity-provider group. Once saved, the
        use stays counted whichever later step fails.

        Returns:
            The workspace the user joined

        Raises:
            InvalidInputError: If the command is invalid
            InviteNotFoundError: If no invite has this token
            InviteRevokedError: If the invite was revoked
            InviteExpiredError: If the invite expired or has no uses left
            WorkspaceNotFoundError: If the invite's workspace is gone
            PersistenceError: If the membership could not be recorded (the
                use remains counted and the user is not added to the group)
            KeycloakUserAddFailedError: If the group membership could not be
                added (the use remains counted)
        """
        probe = self._observed_probe()
        try:
            try:
                required("token", command.token)
                required_id("user_id", command.user_id)
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            with operation_context("failed to find invite"):
                found = await self._workspace_repository.find_invite_by_token(
                    command.token
                )
            if found is None:
                raise InviteNotFoundError()
            if not found.is_valid():
                if found.is_revoked:
                    raise InviteRevokedError()
                raise InviteExpiredError()

            with operation_context("failed to load workspace"):
                workspace = await self._workspace_repository.get_by_id(
                    found.workspace_id
                )
            if workspace is None:
                raise WorkspaceNotFoundError()

            invite = workspace.use_invite(found.id, used_by=command.user_id)
            await self._save(workspace)
        except DomainError as e:
            probe.operation_failed(operation="accept_invite", error=str(e))
            raise

        # The use is stored, so it is published whatever happens next
        await self._dispatcher.dispatch(
            workspace.collect_events(), actor_id=command.user_id.value
        )

        try:
            with operation_context("failed to record workspace member"):
                if not await self._workspace_repository.is_member(
                    workspace.id, command.user_id
                ):
                    await self._workspace_repository.add_member(
                        Member.create(
                            user_id=command.user_id,
                            workspace_id=workspace.id,
                            role=Role.MEMBER,
                        )
                    )
        except DomainError as e:
            probe.operation_failed(operation="accept_invite", error=str(e))
            raise

        try:
            await self._identity_client.add_user_to_group(
                command.user_id.value, workspace.keycloak_group_id
            )
        except Exception as e:
            probe.operation_failed(operation="accept_invite", error=str(e))
            raise KeycloakUserAddFailedError(
                f"failed to add user to keycloak group: {e}"
            ) from e

        probe.invite_accepted(
            workspace_id=workspace.id.value,
            invite_id=invite.id.value,
            user_id=command.user_id.value,
            used_count=invite.used_count,
        )
        return workspace

    async def revoke_invite(self, command: RevokeInviteCommand) -> Invite:
        """Revoke an invite. Requires its creator or a member who can invite.

        Raises:
            InvalidInputError: If the command is invalid
            InviteNotFoundError: If no workspace owns the invite
            NotWorkspaceAdminError: If the user may not revoke the invite
            InviteRevokedError: If the invite is already revoked
        """
        probe = self._observed_probe()
        try:
            try:
                required_id("invite_id", command.invite_id)
                required_id("revoked_by", command.revoked_by)
            except InvalidInputError as e:
                raise e.with_context("validation failed")

            with operation_context("failed to find invite"):
                workspace = await self._workspace_repository.find_by_invite_id(
                    command.invite_id
                )
            if workspace is None:
                raise InviteNotFoundError()

            if workspace.find_invite_by_id(command.invite_id).created_by != (
                command.revoked_by
            ):
                await require_member(
                    self._workspace_repository,
                    workspace.id,
                    command.revoked_by,
                    Member.can_invite,
                )

            invite = workspace.revoke_invite(
                command.invite_id, revoked_by=command.revoked_by
            )
            await self._save(workspace)
        except DomainError as e:
            probe.operation_failed(operation="revoke_invite", error=str(e))
            raise

        await self._dispatcher.dispatch(
            workspace.collect_events(), actor_id=command.revoked_by.value
        )
        probe.invite_revoked(
            workspace_id=workspace.id.value,
            invite_id=invite.id.value,
            revoked_by=command.revoked_by.value,
        )
        return invite

