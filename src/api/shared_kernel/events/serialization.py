"""Event serialization.

Converts domain events to JSON-compatible dictionaries and back. Event
classes are looked up by their wire-level ``event_type`` in a registry
that each bounded context populates with its own events.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any, get_args, get_type_hints

from shared_kernel.events.envelope import DomainEvent, EventMetadata

_ENVELOPE_KEYS = ("event_type", "aggregate_type")


class EventRegistry:
    """Maps wire-level event types to event classes."""

    def __init__(self) -> None:
        self._classes: dict[str, type[DomainEvent]] = {}

    def register(self, *event_classes: type[DomainEvent]) -> None:
        """Register event classes.

        Raises:
            ValueError: If a class has no event_type, or another class is
                already registered under the same event_type
        """
        for event_class in event_classes:
            event_type = event_class.event_type
            if not event_type:
                raise ValueError(f"{event_class.__name__} has no event_type")
            existing = self._classes.get(event_type)
            if existing is not None and existing is not event_class:
                raise ValueError(f"Event type already registered: {event_type}")
            self._classes[event_type] = event_class

    def get(self, event_type: str) -> type[DomainEvent] | None:
        return self._classes.get(event_type)

    @property
    def event_types(self) -> frozenset[str]:
        return frozenset(self._classes)


def _to_primitive(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _to_primitive(v) for k, v in value.items()}
    return value


def serialize_event(event: DomainEvent) -> dict[str, Any]:
    """Convert a domain event to a JSON-serializable dictionary.

    Args:
        event: The domain event to serialize

    Returns:
        A dictionary with the envelope (event_type, aggregate_type,
        aggregate_id, version, occurred_at, metadata) and payload fields
    """
    data = _to_primitive(dataclasses.asdict(event))
    data["event_type"] = event.event_type
    data["aggregate_type"] = event.aggregate_type
    return data


def deserialize_event(payload: dict[str, Any], registry: EventRegistry) -> DomainEvent:
    """Reconstruct a domain event from a dictionary.

    Args:
        payload: The serialized event data
        registry: Registry used to resolve the event class

    Returns:
        The reconstructed domain event

    Raises:
        KeyError: If event_type is missing from payload
        ValueError: If the event type is unknown
    """
    event_type = payload["event_type"]
    event_class = registry.get(event_type)
    if event_class is None:
        raise ValueError(f"Unknown event type: {event_type}")

    data = {k: v for k, v in payload.items() if k not in _ENVELOPE_KEYS}

    hints = get_type_hints(event_class)
    datetime_fields = {
        name
        for name, hint in hints.items()
        if hint is datetime or datetime in get_args(hint)
    }
    for key in datetime_fields:
        if isinstance(data.get(key), str):
            data[key] = datetime.fromisoformat(data[key])

    metadata = dict(data.get("metadata") or {})
    if isinstance(metadata.get("timestamp"), str):
        metadata["timestamp"] = datetime.fromisoformat(metadata["timestamp"])
    data["metadata"] = EventMetadata(**metadata)

    return event_class(**data)
