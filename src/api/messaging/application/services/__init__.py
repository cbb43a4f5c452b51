"""Application services for the Messaging bounded context."""

from messaging.application.services.message_query_service import MessageQueryService
from messaging.application.services.message_service import MessageService

__all__ = ["MessageService", "MessageQueryService"]
