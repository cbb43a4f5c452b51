"""Dependency composition for the Workspaces bounded context.

Composes infrastructure resources (event bus, Keycloak HTTP client,
settings) with Workspaces-specific components.
"""

from functools import lru_cache

from infrastructure.dependencies import get_event_bus, get_keycloak_http_client
from infrastructure.settings import get_keycloak_settings, get_workspace_settings
from workspaces.application.services import InviteService, WorkspaceService
from workspaces.infrastructure import KeycloakGroupClient
from workspaces.ports.identity import IIdentityProviderClient
from workspaces.ports.repositories import IWorkspaceRepository


@lru_cache
def get_identity_client() -> IIdentityProviderClient:
    """Get the application-scoped Keycloak group client (singleton).

    Sharing one client also shares its cached admin token.

    Raises:
        pydantic.ValidationError: If no Keycloak admin credentials are set
    """
    return KeycloakGroupClient.from_settings(
        get_keycloak_settings(), http_client=get_keycloak_http_client()
    )


def get_workspace_service(
    workspace_repository: IWorkspaceRepository,
    identity_client: IIdentityProviderClient | None = None,
) -> WorkspaceService:
    return WorkspaceService(
        workspace_repository=workspace_repository,
        identity_client=identity_client or get_identity_client(),
        event_publisher=get_event_bus(),
    )


def get_invite_service(
    workspace_repository: IWorkspaceRepository,
    identity_client: IIdentityProviderClient | None = None,
) -> InviteService:
    """Build an InviteService using the configured invite defaults."""
    settings = get_workspace_settings()
    return InviteService(
        workspace_repository=workspace_repository,
        identity_client=identity_client or get_identity_client(),
        event_publisher=get_event_bus(),
        invite_ttl=settings.invite_ttl,
        default_max_uses=settings.default_invite_max_uses,
    )
