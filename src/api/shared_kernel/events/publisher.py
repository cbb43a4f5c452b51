"""Event publisher port.

The publisher is an outbound collaborator: application services hand it
events after the aggregate has been persisted. Delivery is best-effort
from the caller's point of view.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.errors import ExternalServiceError
from shared_kernel.events.envelope import DomainEvent


class EventPublishError(ExternalServiceError):
    """Raised by publishers when an event could not be delivered."""

    default_message = "failed to publish event"


@runtime_checkable
class IEventPublisher(Protocol):
    """Publishes domain events to downstream subscribers."""

    async def publish(self, event: DomainEvent) -> None:
        """Publish a single event.

        Args:
            event: The event to publish

        Raises:
            EventPublishError: If delivery failed
        """
        ...
