"""Domain event envelope, publisher port and dispatch."""

from shared_kernel.events.dispatcher import EventDispatcher
from shared_kernel.events.envelope import DomainEvent, EventMetadata
from shared_kernel.events.publisher import EventPublishError, IEventPublisher
from shared_kernel.events.serialization import (
    EventRegistry,
    deserialize_event,
    serialize_event,
)

__all__ = [
    "DomainEvent",
    "EventDispatcher",
    "EventMetadata",
    "EventPublishError",
    "EventRegistry",
    "IEventPublisher",
    "deserialize_event",
    "serialize_event",
]
