"""Infrastructure adapters for the Workspaces bounded context."""

from workspaces.infrastructure.admin_token import KeycloakAdminTokenProvider
from workspaces.infrastructure.keycloak_group_client import KeycloakGroupClient

__all__ = ["KeycloakAdminTokenProvider", "KeycloakGroupClient"]
