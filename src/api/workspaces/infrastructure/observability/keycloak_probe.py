"""Domain probe for the Keycloak admin API client.

Captures requests against the identity provider so that failed group
operations can be traced back to the HTTP status Keycloak returned.
Tokens and credentials are never passed to this probe.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class KeycloakClientProbe(Protocol):
    """Domain probe for Keycloak admin API calls."""

    def admin_token_refreshed(self, expires_in: int) -> None:
        """Record that a new admin token was obtained."""
        ...

    def admin_token_failed(self, reason: str, status_code: int | None = None) -> None:
        """Record that the admin token could not be obtained."""
        ...

    def admin_token_rejected(self, operation: str) -> None:
        """Record that an admin API call was refused with the cached token."""
        ...

    def group_created(self, group_id: str, name: str) -> None:
        ...

    def group_deleted(self, group_id: str) -> None:
        ...

    def group_membership_changed(
        self, operation: str, user_id: str, group_id: str
    ) -> None:
        ...

    def request_failed(
        self, operation: str, reason: str, status_code: int | None = None
    ) -> None:
        """Record that an admin API request failed."""
        ...


class DefaultKeycloakClientProbe:
    """Default implementation of KeycloakClientProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger().bind(component="keycloak")

    def admin_token_refreshed(self, expires_in: int) -> None:
        self._logger.debug("keycloak_admin_token_refreshed", expires_in=expires_in)

    def admin_token_failed(self, reason: str, status_code: int | None = None) -> None:
        self._logger.error(
            "keycloak_admin_token_failed",
            reason=reason,
            status_code=status_code,
        )

    def admin_token_rejected(self, operation: str) -> None:
        self._logger.warning("keycloak_admin_token_rejected", operation=operation)

    def group_created(self, group_id: str, name: str) -> None:
        self._logger.info("keycloak_group_created", group_id=group_id, name=name)

    def group_deleted(self, group_id: str) -> None:
        self._logger.info("keycloak_group_deleted", group_id=group_id)

    def group_membership_changed(
        self, operation: str, user_id: str, group_id: str
    ) -> None:
        self._logger.info(
            "keycloak_group_membership_changed",
            operation=operation,
            user_id=user_id,
            group_id=group_id,
        )

    def request_failed(
        self, operation: str, reason: str, status_code: int | None = None
    ) -> None:
        self._logger.error(
            "keycloak_request_failed",
            operation=operation,
            reason=reason,
            status_code=status_code,
        )
