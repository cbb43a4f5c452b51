"""Domain-Oriented Observability for Workspaces infrastructure."""

from workspaces.infrastructure.observability.keycloak_probe import (
    DefaultKeycloakClientProbe,
    KeycloakClientProbe,
)

__all__ = ["KeycloakClientProbe", "DefaultKeycloakClientProbe"]
