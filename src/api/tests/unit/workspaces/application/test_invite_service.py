"""Unit tests for InviteService."""

from datetime import UTC, datetime, timedelta
from unittest.mock import create_autospec

import pytest
import pytest_asyncio

from shared_kernel.errors import InvalidInputError, PersistenceError
from shared_kernel.identifiers import UserId
from workspaces.application.commands import (
    AcceptInviteCommand,
    CreateInviteCommand,
    RevokeInviteCommand,
)
from workspaces.application.observability import InviteServiceProbe
from workspaces.application.services import InviteService
from workspaces.domain.aggregates import Workspace
from workspaces.domain.value_objects import InviteId, Member, Role, WorkspaceId
from workspaces.ports.exceptions import (
    IdentityProviderError,
    InviteExpiredError,
    InviteNotFoundError,
    InviteRevokedError,
    KeycloakUserAddFailedError,
    NotWorkspaceAdminError,
    WorkspaceNotFoundError,
)


@pytest.fixture
def mock_probe():
    probe = create_autospec(InviteServiceProbe, instance=True)
    probe.with_context.return_value = probe
    return probe


@pytest.fixture
def service(
    workspace_repository, identity_client, event_publisher, mock_probe
) -> InviteService:
    return InviteService(
        workspace_repository=workspace_repository,
        identity_client=identity_client,
        event_publisher=event_publisher,
        invite_ttl=timedelta(days=3),
        probe=mock_probe,
    )


@pytest_asyncio.fixture
async def workspace(workspace_repository, identity_client, user_1) -> Workspace:
    """Workspace W1 owned by U1, backed by an existing group."""
    group_id = await identity_client.create_group("Platform")
    workspace = Workspace.create(
        name="Platform", keycloak_group_id=group_id, created_by=user_1
    )
    workspace.collect_events()
    await workspace_repository.save(workspace)
    await workspace_repository.add_member(
        Member.create(user_1, workspace.id, Role.OWNER)
    )
    return workspace


async def _invite(service, workspace, created_by, **kwargs):
    return await service.create_invite(
        CreateInviteCommand(workspace_id=workspace.id, created_by=created_by, **kwargs)
    )


class TestCreateInvite:
    @pytest.mark.asyncio
    async def test_owner_creates_invite_with_defaults(
        self, service, workspace_repository, event_publisher, workspace, user_1
    ):
        before = datetime.now(UTC)

        invite = await _invite(service, workspace, user_1)

        assert invite.max_uses == 0
        assert before + timedelta(days=3) <= invite.expires_at
        assert invite.expires_at <= datetime.now(UTC) + timedelta(days=3)
        stored = await workspace_repository.get_by_id(workspace.id)
        assert stored.has_invite(invite.id) is True
        assert event_publisher.event_types() == ["workspace.invite.created"]

    @pytest.mark.asyncio
    async def test_explicit_expiry_and_max_uses(self, service, workspace, user_1):
        expires_at = datetime.now(UTC) + timedelta(hours=2)

        invite = await _invite(
            service, workspace, user_1, expires_at=expires_at, max_uses=5
        )

        assert invite.expires_at == expires_at
        assert invite.max_uses == 5

    @pytest.mark.asyncio
    async def test_plain_member_cannot_invite(
        self, service, workspace_repository, workspace, user_2
    ):
        await workspace_repository.add_member(Member.create(user_2, workspace.id))

        with pytest.raises(NotWorkspaceAdminError):
            await _invite(service, workspace, user_2)

    @pytest.mark.asyncio
    async def test_past_expiry_fails_validation(self, service, workspace, user_1):
        with pytest.raises(InvalidInputError) as exc_info:
            await _invite(
                service,
                workspace,
                user_1,
                expires_at=datetime.now(UTC) - timedelta(minutes=1),
            )

        assert str(exc_info.value).startswith("validation failed: ")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "expires_at",
        [datetime.now() + timedelta(days=1), datetime(2999, 1, 1)],
        ids=["naive-soon", "naive-far"],
    )
    async def test_naive_expiry_fails_validation(
        self, service, workspace, user_1, expires_at
    ):
        with pytest.raises(InvalidInputError) as exc_info:
            await _invite(service, workspace, user_1, expires_at=expires_at)

        assert str(exc_info.value) == (
            "validation failed: validation error on field 'expires_at': "
            "must include a timezone"
        )

    @pytest.mark.asyncio
    async def test_negative_max_uses_fails_validation(
        self, service, workspace, user_1
    ):
        with pytest.raises(InvalidInputError):
            await _invite(service, workspace, user_1, max_uses=-1)

    @pytest.mark.asyncio
    async def test_missing_workspace(self, service, user_1):
        with pytest.raises(WorkspaceNotFoundError):
            await service.create_invite(
                CreateInviteCommand(
                    workspace_id=WorkspaceId.generate(), created_by=user_1
                )
            )


class TestAcceptInvite:
    """Accepting counts the use, records the member, then joins the group."""

    @pytest.mark.asyncio
    async def test_limited_invite_is_used_up(
        self,
        service,
        workspace_repository,
        identity_client,
        event_publisher,
        workspace,
        user_1,
    ):
        invite = await _invite(service, workspace, user_1, max_uses=2)

        await service.accept_invite(
            AcceptInviteCommand(token=invite.token, user_id=UserId("U2"))
        )
        stored = await workspace_repository.get_by_id(workspace.id)
        assert stored.find_invite_by_id(invite.id).used_count == 1

        await service.accept_invite(
            AcceptInviteCommand(token=invite.token, user_id=UserId("U3"))
        )
        stored = await workspace_repository.get_by_id(workspace.id)
        assert stored.find_invite_by_id(invite.id).used_count == 2

        with pytest.raises(InviteExpiredError):
            await service.accept_invite(
                AcceptInviteCommand(token=invite.token, user_id=UserId("U4"))
            )

        assert await workspace_repository.is_member(workspace.id, UserId("U2"))
        assert await workspace_repository.is_member(workspace.id, UserId("U3"))
        assert not await workspace_repository.is_member(workspace.id, UserId("U4"))
        assert ("U3", workspace.keycloak_group_id) in identity_client.memberships
        assert event_publisher.event_types() == [
            "workspace.invite.created",
            "workspace.invite.used",
            "workspace.invite.used",
        ]

    @pytest.mark.asyncio
    async def test_existing_member_is_not_added_twice(
        self, service, workspace_repository, workspace, user_1
    ):
        invite = await _invite(service, workspace, user_1)

        await service.accept_invite(
            AcceptInviteCommand(token=invite.token, user_id=user_1)
        )

        [owner] = workspace_repository.members_of(workspace.id)
        assert owner.role == Role.OWNER

    @pytest.mark.asyncio
    async def test_unknown_token(self, service):
        with pytest.raises(InviteNotFoundError):
            await service.accept_invite(
                AcceptInviteCommand(token="no-such-token", user_id=UserId("U2"))
            )

    @pytest.mark.asyncio
    async def test_revoked_invite(self, service, workspace, user_1):
        invite = await _invite(service, workspace, user_1)
        await service.revoke_invite(
            RevokeInviteCommand(invite_id=invite.id, revoked_by=user_1)
        )

        with pytest.raises(InviteRevokedError):
            await service.accept_invite(
                AcceptInviteCommand(token=invite.token, user_id=UserId("U2"))
            )

    @pytest.mark.asyncio
    async def test_expired_invite(
        self, service, workspace_repository, workspace, user_1
    ):
        invite = await _invite(service, workspace, user_1)
        stored = await workspace_repository.get_by_id(workspace.id)
        stale = stored.find_invite_by_id(invite.id)
        stale.expires_at = datetime.now(UTC) - timedelta(seconds=1)
        await workspace_repository.save(stored)

        with pytest.raises(InviteExpiredError):
            await service.accept_invite(
                AcceptInviteCommand(token=invite.token, user_id=UserId("U2"))
            )

    @pytest.mark.asyncio
    async def test_group_failure_keeps_use_counted(
        self,
        service,
        workspace_repository,
        identity_client,
        event_publisher,
        workspace,
        user_1,
    ):
        invite = await _invite(service, workspace, user_1)
        identity_client.add_user_error = IdentityProviderError("keycloak down")

        with pytest.raises(KeycloakUserAddFailedError) as exc_info:
            await service.accept_invite(
                AcceptInviteCommand(token=invite.token, user_id=UserId("U2"))
            )

        assert isinstance(exc_info.value.__cause__, IdentityProviderError)
        stored = await workspace_repository.get_by_id(workspace.id)
        assert stored.find_invite_by_id(invite.id).used_count == 1
        assert event_publisher.event_types()[-1] == "workspace.invite.used"

    @pytest.mark.asyncio
    async def test_membership_failure_keeps_use_counted_and_published(
        self,
        service,
        workspace_repository,
        identity_client,
        event_publisher,
        workspace,
        user_1,
    ):
        invite = await _invite(service, workspace, user_1)
        workspace_repository.add_member_error = RuntimeError("db down")

        with pytest.raises(
            PersistenceError, match="failed to record workspace member: db down"
        ):
            await service.accept_invite(
                AcceptInviteCommand(token=invite.token, user_id=UserId("U2"))
            )

        stored = await workspace_repository.get_by_id(workspace.id)
        assert stored.find_invite_by_id(invite.id).used_count == 1
        assert event_publisher.event_types()[-1] == "workspace.invite.used"
        assert not await workspace_repository.is_member(workspace.id, UserId("U2"))
        assert ("U2", workspace.keycloak_group_id) not in identity_client.memberships

    @pytest.mark.asyncio
    async def test_missing_token_fails_validation(self, service):
        with pytest.raises(InvalidInputError):
            await service.accept_invite(
                AcceptInviteCommand(token="", user_id=UserId("U2"))
            )


class TestRevokeInvite:
    @pytest.mark.asyncio
    async def test_creator_can_revoke(
        self, service, workspace_repository, event_publisher, workspace, user_1
    ):
        invite = await _invite(service, workspace, user_1)

        revoked = await service.revoke_invite(
            RevokeInviteCommand(invite_id=invite.id, revoked_by=user_1)
        )

        assert revoked.is_revoked is True
        stored = await workspace_repository.get_by_id(workspace.id)
        assert stored.find_invite_by_id(invite.id).is_revoked is True
        assert event_publisher.event_types()[-1] == "workspace.invite.revoked"

    @pytest.mark.asyncio
    async def test_other_admin_can_revoke(
        self, service, workspace_repository, workspace, user_1, user_2
    ):
        invite = await _invite(service, workspace, user_1)
        await workspace_repository.add_member(
            Member.create(user_2, workspace.id, Role.ADMIN)
        )

        revoked = await service.revoke_invite(
            RevokeInviteCommand(invite_id=invite.id, revoked_by=user_2)
        )

        assert revoked.is_revoked is True

    @pytest.mark.asyncio
    async def test_plain_member_cannot_revoke(
        self, service, workspace_repository, workspace, user_1, user_2
    ):
        invite = await _invite(service, workspace, user_1)
        await workspace_repository.add_member(Member.create(user_2, workspace.id))

        with pytest.raises(NotWorkspaceAdminError):
            await service.revoke_invite(
                RevokeInviteCommand(invite_id=invite.id, revoked_by=user_2)
            )

    @pytest.mark.asyncio
    async def test_revoking_twice(self, service, workspace, user_1):
        invite = await _invite(service, workspace, user_1)
        command = RevokeInviteCommand(invite_id=invite.id, revoked_by=user_1)
        await service.revoke_invite(command)

        with pytest.raises(InviteRevokedError):
            await service.revoke_invite(command)

    @pytest.mark.asyncio
    async def test_unknown_invite(self, service, user_1, mock_probe):
        with pytest.raises(InviteNotFoundError):
            await service.revoke_invite(
                RevokeInviteCommand(invite_id=InviteId.generate(), revoked_by=user_1)
            )

        mock_probe.operation_failed.assert_called_once()
