"""Domain event envelope.

All domain events share one envelope: the wire-level event type, the
aggregate they belong to, the aggregate version reached by the change,
the time it happened and request metadata. Concrete events add their
payload fields as keyword-only dataclass fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import ClassVar, Self


@dataclass(frozen=True)
class EventMetadata:
    """Request metadata attached to an event when it is published.

    Attributes:
        user_id: The user whose action produced the event
        correlation_id: Identifier of the originating request
        causation_id: Identifier of the event or command that caused this one
        timestamp: When the event was stamped for publication
        ip_address: Client address, when the transport supplies it
        user_agent: Client user agent, when the transport supplies it
    """

    user_id: str = ""
    correlation_id: str = ""
    causation_id: str = ""
    timestamp: datetime | None = None
    ip_address: str = ""
    user_agent: str = ""


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for domain events.

    Subclasses set the ``event_type`` and ``aggregate_type`` class
    attributes and declare their payload fields.

    Attributes:
        aggregate_id: ID of the aggregate (or owned entity) that changed
        version: Version the aggregate reached with this change
        occurred_at: When the change happened (UTC)
        metadata: Request metadata, stamped by the application layer
    """

    event_type: ClassVar[str] = ""
    aggregate_type: ClassVar[str] = ""

    aggregate_id: str
    version: int
    occurred_at: datetime
    metadata: EventMetadata = field(default_factory=EventMetadata)

    def with_metadata(self, metadata: EventMetadata) -> Self:
        """Return a copy of this event carrying the given metadata."""
        return replace(self, metadata=metadata)
