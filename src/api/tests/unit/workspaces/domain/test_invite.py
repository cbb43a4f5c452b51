"""Unit tests for the Invite entity."""

from datetime import UTC, datetime, timedelta

import pytest

from shared_kernel.errors import ValidationError
from shared_kernel.identifiers import UserId
from workspaces.domain.aggregates import Invite, generate_invite_token
from workspaces.domain.value_objects import InviteId, WorkspaceId
from workspaces.ports.exceptions import (
    InviteExpiredError,
    InviteMaxUsesReachedError,
    InviteRevokedError,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def _invite(**overrides) -> Invite:
    values = {
        "id": InviteId.generate(),
        "workspace_id": WorkspaceId.generate(),
        "token": "token",
        "created_by": UserId("U1"),
        "created_at": NOW - timedelta(days=1),
        "expires_at": NOW + timedelta(days=1),
    }
    values.update(overrides)
    return Invite(**values)


class TestInviteCreate:
    def test_create_sets_defaults(self):
        expires_at = datetime.now(UTC) + timedelta(days=7)

        invite = Invite.create(
            workspace_id=WorkspaceId.generate(),
            created_by=UserId("U1"),
            expires_at=expires_at,
            max_uses=3,
        )

        assert invite.used_count == 0
        assert invite.is_revoked is False
        assert invite.max_uses == 3
        assert invite.version == 1
        assert invite.token
        assert invite.is_valid() is True

    def test_past_expiry_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Invite.create(
                workspace_id=WorkspaceId.generate(),
                created_by=UserId("U1"),
                expires_at=datetime.now(UTC) - timedelta(seconds=1),
            )
        assert exc_info.value.field == "expires_at"

    def test_naive_expiry_is_rejected(self):
        with pytest.raises(ValidationError, match="must include a timezone"):
            Invite.create(
                workspace_id=WorkspaceId.generate(),
                created_by=UserId("U1"),
                expires_at=datetime.now() + timedelta(days=1),
            )

    def test_negative_max_uses_is_rejected(self):
        with pytest.raises(ValidationError):
            Invite.create(
                workspace_id=WorkspaceId.generate(),
                created_by=UserId("U1"),
                expires_at=datetime.now(UTC) + timedelta(days=1),
                max_uses=-1,
            )


class TestInviteToken:
    def test_tokens_are_url_safe_and_unique(self):
        tokens = {generate_invite_token() for _ in range(50)}

        assert len(tokens) == 50
        for token in tokens:
            assert len(token) >= 43
            assert set(token) <= set(
                "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
            )


class TestInviteValidity:
    """An invite is valid iff not revoked, not expired and not exhausted."""

    @pytest.mark.parametrize(
        ("is_revoked", "expires_at", "max_uses", "used_count", "expected"),
        [
            (False, NOW + timedelta(hours=1), 0, 0, True),
            (False, NOW + timedelta(hours=1), 0, 500, True),
            (False, NOW + timedelta(hours=1), 2, 1, True),
            (False, NOW + timedelta(hours=1), 2, 2, False),
            (False, NOW, 0, 0, False),
            (False, NOW - timedelta(seconds=1), 0, 0, False),
            (True, NOW + timedelta(hours=1), 0, 0, False),
        ],
    )
    def test_is_valid(self, is_revoked, expires_at, max_uses, used_count, expected):
        invite = _invite(
            is_revoked=is_revoked,
            expires_at=expires_at,
            max_uses=max_uses,
            used_count=used_count,
        )

        assert invite.is_valid(now=NOW) is expected


class TestInviteUse:
    def test_use_counts_and_bumps_version(self):
        invite = _invite(expires_at=datetime.now(UTC) + timedelta(days=1))

        invite.use()
        invite.use()

        assert invite.used_count == 2
        assert invite.version == 3

    def test_exhausted_invite_cannot_be_used(self):
        invite = _invite(
            expires_at=datetime.now(UTC) + timedelta(days=1),
            max_uses=1,
            used_count=1,
        )

        with pytest.raises(InviteMaxUsesReachedError):
            invite.use()
        assert invite.used_count == 1

    def test_expired_invite_cannot_be_used(self):
        invite = _invite(expires_at=datetime.now(UTC) - timedelta(minutes=1))

        with pytest.raises(InviteExpiredError):
            invite.use()

    def test_revoked_invite_cannot_be_used(self):
        invite = _invite(
            expires_at=datetime.now(UTC) + timedelta(days=1), is_revoked=True
        )

        with pytest.raises(InviteRevokedError):
            invite.use()


class TestInviteRevoke:
    def test_revoke_is_terminal(self):
        invite = _invite()

        invite.revoke()

        assert invite.is_revoked is True
        assert invite.version == 2
        with pytest.raises(InviteRevokedError):
            invite.revoke()
        assert invite.version == 2
