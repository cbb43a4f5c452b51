"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class EventBusProbe(Protocol):
    """Domain probe for the in-process event bus.

    Captures subscription and delivery outcomes without exposing logging
    implementation details to the bus.
    """

    def handler_subscribed(self, event_type: str, handler: str) -> None:
        """Record that a handler was registered for an event type."""
        ...

    def event_delivered(
        self, event_type: str, aggregate_id: str, handlers: int
    ) -> None:
        """Record that an event reached all of its handlers."""
        ...

    def handler_failed(
        self, event_type: str, aggregate_id: str, handler: str, error: Exception
    ) -> None:
        """Record that a handler raised while processing an event."""
        ...


class DefaultEventBusProbe:
    """Default implementation of EventBusProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger().bind(component="event_bus")

    def handler_subscribed(self, event_type: str, handler: str) -> None:
        self._logger.debug(
            "event_handler_subscribed", event_type=event_type, handler=handler
        )

    def event_delivered(
        self, event_type: str, aggregate_id: str, handlers: int
    ) -> None:
        self._logger.debug(
            "event_delivered",
            event_type=event_type,
            aggregate_id=aggregate_id,
            handlers=handlers,
        )

    def handler_failed(
        self, event_type: str, aggregate_id: str, handler: str, error: Exception
    ) -> None:
        self._logger.error(
            "event_handler_failed",
            event_type=event_type,
            aggregate_id=aggregate_id,
            handler=handler,
            error=str(error),
            error_type=type(error).__name__,
        )
