"""Best-effort dispatch of collected domain events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from shared_kernel.events.envelope import DomainEvent, EventMetadata
from shared_kernel.events.observability import (
    DefaultEventDispatchProbe,
    EventDispatchProbe,
)
from shared_kernel.events.publisher import IEventPublisher
from shared_kernel.execution_context import current_execution_context


class EventDispatcher:
    """Stamps request metadata onto events and publishes them.

    Publication happens after the aggregate has been saved. A publisher
    failure never rolls back the write and never reaches the caller; it is
    recorded through the probe and the remaining events are still published.
    """

    def __init__(
        self,
        publisher: IEventPublisher,
        probe: EventDispatchProbe | None = None,
    ) -> None:
        self._publisher = publisher
        self._probe = probe or DefaultEventDispatchProbe()

    async def dispatch(
        self,
        events: Sequence[DomainEvent],
        actor_id: str = "",
    ) -> list[DomainEvent]:
        """Publish events in order.

        Args:
            events: Events collected from an aggregate
            actor_id: User whose action produced the events; falls back to
                the user bound in the execution context

        Returns:
            The events that were delivered, with metadata stamped
        """
        context = current_execution_context()
        stamped_at = datetime.now(UTC)
        published: list[DomainEvent] = []

        for event in events:
            stamped = event.with_metadata(
                EventMetadata(
                    user_id=actor_id or context.user_id,
                    correlation_id=context.correlation_id,
                    causation_id=event.metadata.causation_id,
                    timestamp=stamped_at,
                )
            )
            try:
                await self._publisher.publish(stamped)
            except Exception as e:
                self._probe.event_publish_failed(
                    event_type=stamped.event_type,
                    aggregate_id=stamped.aggregate_id,
                    error=str(e),
                )
                continue

            self._probe.event_published(
                event_type=stamped.event_type,
                aggregate_id=stamped.aggregate_id,
                version=stamped.version,
            )
            published.append(stamped)

        return published
