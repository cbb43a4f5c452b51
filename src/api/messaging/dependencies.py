"""Dependency composition for the Messaging bounded context.

Composes infrastructure resources (event bus, settings) with
Messaging-specific components. Repository adapters are supplied by the
caller, since storage lives outside this package.
"""

from functools import lru_cache

from infrastructure.dependencies import get_event_bus
from infrastructure.settings import get_messaging_settings
from messaging.application.post_send import PostSendQueue, PostSendWorker
from messaging.application.services import MessageQueryService, MessageService
from messaging.ports.chats import IChatReadModelRepository
from messaging.ports.repositories import IMessageQueryRepository, IMessageRepository
from messaging.ports.tags import ITagProcessor


@lru_cache
def get_post_send_queue() -> PostSendQueue:
    """Get the application-scoped post-send queue (singleton)."""
    settings = get_messaging_settings()
    return PostSendQueue(maxsize=settings.post_send_queue_size)


def get_message_service(
    message_repository: IMessageRepository,
    chat_repository: IChatReadModelRepository,
) -> MessageService:
    """Build a MessageService publishing to the shared event bus.

    Sent messages are queued for tag processing unless post-send
    processing is disabled in MessagingSettings.
    """
    settings = get_messaging_settings()
    return MessageService(
        message_repository=message_repository,
        chat_repository=chat_repository,
        event_publisher=get_event_bus(),
        post_send_queue=get_post_send_queue() if settings.post_send_enabled else None,
    )


def get_message_query_service(
    message_repository: IMessageQueryRepository,
) -> MessageQueryService:
    return MessageQueryService(message_repository=message_repository)


def get_post_send_worker(processor: ITagProcessor) -> PostSendWorker:
    """Build a worker draining the shared post-send queue into a processor."""
    return PostSendWorker(queue=get_post_send_queue(), processor=processor)
