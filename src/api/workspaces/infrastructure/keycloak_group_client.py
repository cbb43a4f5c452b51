"""Keycloak implementation of the identity-provider port.

Talks to the Keycloak admin REST API:

- POST   /admin/realms/{realm}/groups                        create a group
- DELETE /admin/realms/{realm}/groups/{group}                delete a group
- PUT    /admin/realms/{realm}/users/{user}/groups/{group}   add a member
- DELETE /admin/realms/{realm}/users/{user}/groups/{group}   remove a member
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from workspaces.infrastructure.admin_token import KeycloakAdminTokenProvider
from workspaces.infrastructure.observability import (
    DefaultKeycloakClientProbe,
    KeycloakClientProbe,
)
from workspaces.ports.exceptions import (
    GroupAlreadyExistsError,
    GroupNotFoundError,
    IdentityProviderError,
    UserNotFoundError,
)
from workspaces.ports.identity import IIdentityProviderClient

if TYPE_CHECKING:
    from infrastructure.settings import KeycloakSettings


class KeycloakGroupClient(IIdentityProviderClient):
    """Manages workspace groups through the Keycloak admin API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_provider: KeycloakAdminTokenProvider,
        base_url: str,
        realm: str,
        probe: KeycloakClientProbe | None = None,
    ):
        self._http_client = http_client
        self._token_provider = token_provider
        self._admin_url = f"{base_url.rstrip('/')}/admin/realms/{realm}"
        self._probe = probe or DefaultKeycloakClientProbe()

    @classmethod
    def from_settings(
        cls,
        settings: KeycloakSettings,
        http_client: httpx.AsyncClient | None = None,
        probe: KeycloakClientProbe | None = None,
    ) -> KeycloakGroupClient:
        """Build a client and its token provider from KeycloakSettings."""
        client = http_client or httpx.AsyncClient(timeout=settings.timeout_seconds)
        probe = probe or DefaultKeycloakClientProbe()
        token_provider = KeycloakAdminTokenProvider(
            http_client=client,
            base_url=settings.url,
            realm=settings.realm,
            client_id=settings.client_id,
            client_secret=settings.client_secret.get_secret_value(),
            username=settings.username,
            password=settings.password.get_secret_value(),
            refresh_buffer_seconds=settings.token_refresh_buffer_seconds,
            probe=probe,
        )
        return cls(
            http_client=client,
            token_provider=token_provider,
            base_url=settings.url,
            realm=settings.realm,
            probe=probe,
        )

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        json: dict[str, str] | None = None,
    ) -> httpx.Response:
        response = await self._send(operation, method, path, json)
        if response.status_code == 401:
            # Token revoked or realm keys rotated before expiry; retry once
            self._probe.admin_token_rejected(operation=operation)
            self._token_provider.invalidate()
            response = await self._send(operation, method, path, json)
        return response

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        json: dict[str, str] | None,
    ) -> httpx.Response:
        token = await self._token_provider.get_token()
        try:
            return await self._http_client.request(
                method,
                f"{self._admin_url}{path}",
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            self._probe.request_failed(operation=operation, reason=repr(e))
            raise IdentityProviderError(f"{operation} request failed: {e}") from e

    def _unexpected(
        self, operation: str, response: httpx.Response
    ) -> IdentityProviderError:
        self._probe.request_failed(
            operation=operation,
            reason="HTTP error",
            status_code=response.status_code,
        )
        return IdentityProviderError(
            f"{operation} failed with status {response.status_code}: {response.text}"
        )

    async def create_group(self, name: str) -> str:
        if not name:
            raise IdentityProviderError("invalid group name")

        response = await self._request(
            "create group", "POST", "/groups", json={"name": name}
        )

        if response.status_code == 201:
            # Location: {base}/admin/realms/{realm}/groups/{id}
            location = response.headers.get("Location", "")
            group_id = location.rstrip("/").rsplit("/", 1)[-1]
            if not group_id:
                raise IdentityProviderError("missing Location header in response")
            self._probe.group_created(group_id=group_id, name=name)
            return group_id
        if response.status_code == 409:
            raise GroupAlreadyExistsError()
        raise self._unexpected("create group", response)

    async def delete_group(self, group_id: str) -> None:
        if not group_id:
            raise GroupNotFoundError()

        response = await self._request("delete group", "DELETE", f"/groups/{group_id}")

        if response.status_code in (200, 204):
            self._probe.group_deleted(group_id=group_id)
            return
        if response.status_code == 404:
            raise GroupNotFoundError()
        raise self._unexpected("delete group", response)

    async def add_user_to_group(self, user_id: str, group_id: str) -> None:
        await self._change_membership("add user to group", "PUT", user_id, group_id)

    async def remove_user_from_group(self, user_id: str, group_id: str) -> None:
        await self._change_membership(
            "remove user from group", "DELETE", user_id, group_id
        )

    async def _change_membership(
        self, operation: str, method: str, user_id: str, group_id: str
    ) -> None:
        if not user_id:
            raise UserNotFoundError()
        if not group_id:
            raise GroupNotFoundError()

        response = await self._request(
            operation, method, f"/users/{user_id}/groups/{group_id}"
        )

        if response.status_code in (200, 204):
            self._probe.group_membership_changed(
                operation=operation, user_id=user_id, group_id=group_id
            )
            return
        if response.status_code == 404:
            # Keycloak names the missing resource in the error body
            if "User" in response.text:
                raise UserNotFoundError()
            raise GroupNotFoundError()
        raise self._unexpected(operation, response)
