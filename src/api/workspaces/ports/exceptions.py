"""Errors raised by the Workspaces bounded context."""

from shared_kernel.errors import (
    ExternalServiceError,
    ForbiddenError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)


class WorkspaceNotFoundError(NotFoundError):
    default_message = "workspace not found"


class InviteNotFoundError(NotFoundError):
    default_message = "invite not found"


class MemberNotFoundError(NotFoundError):
    default_message = "workspace member not found"


class InviteExpiredError(InvalidStateError):
    """The invite can no longer be used.

    Raised for expired invites, and by AcceptInvite for any invite that is
    invalid for a reason other than revocation.
    """

    default_message = "invite has expired"


class InviteRevokedError(InvalidStateError):
    default_message = "invite has been revoked"


class InviteMaxUsesReachedError(InvalidStateError):
    default_message = "invite has reached its maximum number of uses"


class InvalidInviteTokenError(InvalidInputError):
    default_message = "invalid invite token"


class NotWorkspaceAdminError(ForbiddenError):
    """The acting user lacks the workspace role the operation requires."""

    default_message = "user is not allowed to manage this workspace"


class IdentityProviderError(ExternalServiceError):
    """Base class for failures reported by the identity-provider client."""

    default_message = "identity provider request failed"


class GroupAlreadyExistsError(IdentityProviderError):
    default_message = "group already exists"


class GroupNotFoundError(IdentityProviderError):
    default_message = "group not found"


class UserNotFoundError(IdentityProviderError):
    default_message = "user not found"


class KeycloakGroupCreationFailedError(ExternalServiceError):
    default_message = "failed to create keycloak group"


class KeycloakGroupDeletionFailedError(ExternalServiceError):
    default_message = "failed to delete keycloak group"


class KeycloakUserAddFailedError(ExternalServiceError):
    default_message = "failed to add user to keycloak group"
