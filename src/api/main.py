"""Application lifespan for the team-chat core.

Wires process-wide resources: logging, the post-send worker and the
shared Keycloak HTTP client. Hosts (an HTTP app, a worker process) enter
the lifespan once and build services through the per-context
dependencies modules while it is open.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog

from infrastructure.dependencies import get_keycloak_http_client
from infrastructure.logging import configure_logging
from infrastructure.settings import get_messaging_settings, get_settings
from messaging.application.post_send import PostSendWorker
from messaging.dependencies import get_post_send_worker
from messaging.ports.tags import ITagProcessor
from workspaces.dependencies import get_identity_client

logger = structlog.get_logger()


@asynccontextmanager
async def teamchat_lifespan(
    tag_processor: ITagProcessor | None = None,
) -> AsyncIterator[PostSendWorker | None]:
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Post-send worker lifecycle (started only with a tag processor and
      when post-send processing is enabled)
    - Keycloak HTTP client (created lazily, closed on shutdown)

    Yields:
        The running post-send worker, or None if none was started
    """
    settings = get_settings()
    configure_logging(debug=settings.debug, app_name=settings.app_name)

    worker: PostSendWorker | None = None
    if tag_processor is not None and get_messaging_settings().post_send_enabled:
        worker = get_post_send_worker(tag_processor)
        await worker.start()

    logger.info("application_started", app_name=settings.app_name)
    try:
        yield worker
    finally:
        if worker is not None:
            await worker.stop()

        # Only close the client if something created it
        if get_keycloak_http_client.cache_info().currsize:
            await get_keycloak_http_client().aclose()
            get_keycloak_http_client.cache_clear()
        # The identity client holds the closed HTTP client and its token
        get_identity_client.cache_clear()

        logger.info("application_stopped", app_name=settings.app_name)
