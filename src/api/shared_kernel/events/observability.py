"""Observability probe for event dispatch."""

from __future__ import annotations

from typing import Protocol

import structlog


class EventDispatchProbe(Protocol):
    """Records the outcome of publishing domain events."""

    def event_published(
        self, event_type: str, aggregate_id: str, version: int
    ) -> None:
        """Called after an event was handed to the publisher."""
        ...

    def event_publish_failed(
        self, event_type: str, aggregate_id: str, error: str
    ) -> None:
        """Called when the publisher rejected an event.

        The write that produced the event is already durable; the failure
        is recorded and not surfaced to the caller.
        """
        ...


class DefaultEventDispatchProbe:
    """Default implementation of EventDispatchProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._logger = logger or structlog.get_logger()

    def event_published(
        self, event_type: str, aggregate_id: str, version: int
    ) -> None:
        self._logger.debug(
            "event_published",
            event_type=event_type,
            aggregate_id=aggregate_id,
            version=version,
        )

    def event_publish_failed(
        self, event_type: str, aggregate_id: str, error: str
    ) -> None:
        self._logger.warning(
            "event_publish_failed",
            event_type=event_type,
            aggregate_id=aggregate_id,
            error=error,
        )
