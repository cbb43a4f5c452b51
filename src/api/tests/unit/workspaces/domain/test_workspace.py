"""Unit tests for the Workspace aggregate."""

from datetime import UTC, datetime, timedelta
from unittest.mock import create_autospec

import pytest

from shared_kernel.errors import ValidationError
from shared_kernel.identifiers import UserId
from workspaces.domain.aggregates import Workspace
from workspaces.domain.events import (
    InviteCreated,
    InviteRevoked,
    InviteUsed,
    WorkspaceCreated,
    WorkspaceDeleted,
    WorkspaceUpdated,
)
from workspaces.domain.observability import WorkspaceProbe
from workspaces.domain.value_objects import MAX_WORKSPACE_NAME_LENGTH, InviteId
from workspaces.ports.exceptions import (
    InviteExpiredError,
    InviteMaxUsesReachedError,
    InviteNotFoundError,
    InviteRevokedError,
)

U1 = UserId("U1")
U2 = UserId("U2")


def _tomorrow() -> datetime:
    return datetime.now(UTC) + timedelta(days=1)


@pytest.fixture
def workspace() -> Workspace:
    ws = Workspace.create(name="Platform", keycloak_group_id="G1", created_by=U1)
    ws.collect_events()
    return ws


class TestWorkspaceCreation:
    def test_create_sets_fields(self):
        workspace = Workspace.create(
            name="Platform",
            keycloak_group_id="G1",
            created_by=U1,
            description="infra team",
        )

        assert workspace.name == "Platform"
        assert workspace.keycloak_group_id == "G1"
        assert workspace.created_by == U1
        assert workspace.description == "infra team"
        assert workspace.created_at == workspace.updated_at
        assert workspace.invites == []
        assert workspace.version == 1

        [event] = workspace.collect_events()
        assert isinstance(event, WorkspaceCreated)
        assert event.keycloak_group_id == "G1"
        assert event.created_by == "U1"

    @pytest.mark.parametrize(
        ("name", "group_id", "created_by"),
        [
            ("", "G1", U1),
            ("x" * (MAX_WORKSPACE_NAME_LENGTH + 1), "G1", U1),
            ("Platform", "", U1),
            ("Platform", "G1", UserId("")),
        ],
    )
    def test_invalid_input_is_rejected(self, name, group_id, created_by):
        with pytest.raises(ValidationError):
            Workspace.create(
                name=name, keycloak_group_id=group_id, created_by=created_by
            )

    def test_name_at_limit_is_accepted(self):
        name = "x" * MAX_WORKSPACE_NAME_LENGTH
        workspace = Workspace.create(name=name, keycloak_group_id="G1", created_by=U1)
        assert workspace.name == name


class TestUpdateName:
    def test_rename_bumps_version_and_records_event(self, workspace):
        before = workspace.updated_at

        workspace.update_name("Core")

        assert workspace.name == "Core"
        assert workspace.version == 2
        assert workspace.updated_at >= before
        [event] = workspace.collect_events()
        assert isinstance(event, WorkspaceUpdated)
        assert event.name == "Core"

    def test_invalid_name_leaves_workspace_unchanged(self, workspace):
        with pytest.raises(ValidationError):
            workspace.update_name("")

        assert workspace.name == "Platform"
        assert workspace.version == 1


class TestInvites:
    def test_create_invite_is_owned_and_recorded(self, workspace):
        expires_at = _tomorrow()

        invite = workspace.create_invite(U1, expires_at, max_uses=2)

        assert workspace.invites == [invite]
        assert invite.workspace_id == workspace.id
        assert workspace.version == 2
        [event] = workspace.collect_events()
        assert isinstance(event, InviteCreated)
        assert event.aggregate_id == invite.id.value
        assert event.workspace_id == workspace.id.value
        assert event.token == invite.token
        assert event.expires_at == expires_at

    def test_find_invite(self, workspace):
        invite = workspace.create_invite(U1, _tomorrow())

        assert workspace.find_invite_by_token(invite.token) is invite
        assert workspace.find_invite_by_id(invite.id) is invite
        assert workspace.has_invite(invite.id) is True
        with pytest.raises(InviteNotFoundError):
            workspace.find_invite_by_token("nope")
        with pytest.raises(InviteNotFoundError):
            workspace.find_invite_by_id(InviteId.generate())

    def test_use_invite_until_exhausted(self, workspace):
        invite = workspace.create_invite(U1, _tomorrow(), max_uses=2)
        workspace.collect_events()

        workspace.use_invite(invite.id, used_by=U2)
        workspace.use_invite(invite.id, used_by=UserId("U3"))

        assert invite.used_count == 2
        with pytest.raises(InviteMaxUsesReachedError):
            workspace.use_invite(invite.id, used_by=UserId("U4"))

        first, second = workspace.collect_events()
        assert isinstance(first, InviteUsed)
        assert (first.used_count, second.used_count) == (1, 2)
        assert second.used_by == "U3"
        assert workspace.version == 4

    def test_unlimited_invite_never_exhausts(self, workspace):
        invite = workspace.create_invite(U1, _tomorrow(), max_uses=0)

        for n in range(25):
            workspace.use_invite(invite.id, used_by=UserId(f"user-{n}"))

        assert invite.used_count == 25
        assert invite.is_valid() is True

    def test_revoke_invite(self, workspace):
        invite = workspace.create_invite(U1, _tomorrow())
        workspace.collect_events()

        workspace.revoke_invite(invite.id, revoked_by=U1)

        assert invite.is_revoked is True
        [event] = workspace.collect_events()
        assert isinstance(event, InviteRevoked)
        assert event.revoked_by == "U1"
        with pytest.raises(InviteRevokedError):
            workspace.use_invite(invite.id, used_by=U2)
        with pytest.raises(InviteRevokedError):
            workspace.revoke_invite(invite.id, revoked_by=U1)

    def test_expired_invite_cannot_be_used(self, workspace):
        invite = workspace.create_invite(U1, _tomorrow())
        invite.expires_at = datetime.now(UTC) - timedelta(seconds=1)

        with pytest.raises(InviteExpiredError):
            workspace.use_invite(invite.id, used_by=U2)


class TestDeletion:
    def test_mark_for_deletion_records_group(self, workspace):
        workspace.mark_for_deletion(U1)

        [event] = workspace.collect_events()
        assert isinstance(event, WorkspaceDeleted)
        assert event.keycloak_group_id == "G1"
        assert event.deleted_by == "U1"
        assert event.version == 2


class TestVersioning:
    def test_reconstruct_marks_version_persisted(self, workspace):
        restored = Workspace.reconstruct(
            id=workspace.id,
            name=workspace.name,
            keycloak_group_id=workspace.keycloak_group_id,
            created_by=workspace.created_by,
            created_at=workspace.created_at,
            updated_at=workspace.updated_at,
            description="",
            invites=[],
            version=5,
        )

        assert restored.persisted_version == 5
        assert restored.collect_events() == []

    def test_mark_persisted(self, workspace):
        workspace.update_name("Core")
        workspace.mark_persisted()
        assert workspace.persisted_version == workspace.version == 2


class TestWorkspaceProbe:
    def test_probe_observes_changes(self):
        probe = create_autospec(WorkspaceProbe, instance=True)
        workspace = Workspace.create(
            name="Platform", keycloak_group_id="G1", created_by=U1, probe=probe
        )

        workspace.update_name("Core")
        invite = workspace.create_invite(U1, _tomorrow())
        workspace.revoke_invite(invite.id, revoked_by=U1)

        probe.renamed.assert_called_once_with(
            workspace_id=workspace.id.value, old_name="Platform", new_name="Core"
        )
        probe.invite_created.assert_called_once()
        probe.invite_revoked.assert_called_once_with(
            workspace_id=workspace.id.value, invite_id=invite.id.value
        )
