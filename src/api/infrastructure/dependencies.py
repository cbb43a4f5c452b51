"""Shared infrastructure dependencies.

Provides ONLY shared infrastructure resources (event bus, HTTP clients).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from functools import lru_cache

import httpx

from infrastructure.event_bus import InProcessEventBus
from infrastructure.settings import get_keycloak_settings


@lru_cache
def get_event_bus() -> InProcessEventBus:
    """Get the application-scoped event bus (singleton).

    Every service publishes through this bus, and subscribers registered at
    startup see events from all bounded contexts.
    """
    return InProcessEventBus()


@lru_cache
def get_keycloak_http_client() -> httpx.AsyncClient:
    """Get the application-scoped HTTP client for the Keycloak admin API.

    The client is closed by the application lifespan.
    """
    settings = get_keycloak_settings()
    return httpx.AsyncClient(timeout=settings.timeout_seconds)
