"""Admin API token for Keycloak.

Obtains an access token from the realm's OpenID Connect token endpoint and
caches it until shortly before it expires. A client secret selects the
client_credentials grant; without one the password grant is used.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

import httpx

from workspaces.infrastructure.observability import (
    DefaultKeycloakClientProbe,
    KeycloakClientProbe,
)
from workspaces.ports.exceptions import IdentityProviderError

DEFAULT_TOKEN_REFRESH_BUFFER_SECONDS = 30.0


class KeycloakAdminTokenProvider:
    """Caches a Keycloak admin access token and refreshes it on demand."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        username: str = "",
        password: str = "",
        refresh_buffer_seconds: float = DEFAULT_TOKEN_REFRESH_BUFFER_SECONDS,
        probe: KeycloakClientProbe | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._http_client = http_client
        self._token_url = (
            f"{base_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
        )
        self._client_id = client_id
        self._client_secret = client_secret
        self._username = username
        self._password = password
        self._refresh_buffer = refresh_buffer_seconds
        self._probe = probe or DefaultKeycloakClientProbe()
        self._clock = clock
        self._lock = asyncio.Lock()
        self._token = ""
        self._expires_at = 0.0

    def _is_fresh(self) -> bool:
        return bool(self._token) and (
            self._clock() + self._refresh_buffer < self._expires_at
        )

    def _form_data(self) -> dict[str, str]:
        data = {"client_id": self._client_id}
        if self._client_secret:
            data["grant_type"] = "client_credentials"
            data["client_secret"] = self._client_secret
        else:
            data["grant_type"] = "password"
            data["username"] = self._username
            data["password"] = self._password
        return data

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a new one."""
        self._token = ""
        self._expires_at = 0.0

    async def get_token(self) -> str:
        """Return a valid admin token, fetching a new one if needed.

        Raises:
            IdentityProviderError: If the token endpoint cannot be reached or
                does not return a token
        """
        if self._is_fresh():
            return self._token

        async with self._lock:
            # Another caller may have refreshed while we waited
            if self._is_fresh():
                return self._token
            return await self._refresh()

    async def _refresh(self) -> str:
        try:
            response = await self._http_client.post(
                self._token_url, data=self._form_data()
            )
        except httpx.HTTPError as e:
            self._probe.admin_token_failed(reason=repr(e))
            raise IdentityProviderError(f"admin token request failed: {e}") from e

        if response.status_code != 200:
            self._probe.admin_token_failed(
                reason="HTTP error", status_code=response.status_code
            )
            raise IdentityProviderError(
                f"admin token request failed with status "
                f"{response.status_code}: {response.text}"
            )

        try:
            payload = response.json()
            token = payload["access_token"]
            expires_in = int(payload.get("expires_in", 0))
        except (ValueError, KeyError, TypeError) as e:
            self._probe.admin_token_failed(reason=repr(e))
            raise IdentityProviderError(
                f"failed to decode admin token response: {e}"
            ) from e

        self._token = token
        self._expires_at = self._clock() + expires_in
        self._probe.admin_token_refreshed(expires_in=expires_in)
        return token
