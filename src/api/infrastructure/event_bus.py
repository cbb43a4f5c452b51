"""In-process implementation of the event publisher port.

Handlers subscribe to a wire-level event type, or to "*" for every event.
Each published event is handed to its handlers in subscription order. A
failing handler does not stop the others; once all handlers have run the
bus raises EventPublishError so the caller's best-effort policy applies.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Awaitable, Callable

from infrastructure.observability import DefaultEventBusProbe, EventBusProbe
from shared_kernel.events import DomainEvent, EventPublishError, IEventPublisher

EventHandler = Callable[[DomainEvent], Awaitable[None]]

ALL_EVENTS = "*"


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class InProcessEventBus(IEventPublisher):
    """Delivers events to subscribed async handlers within the process."""

    def __init__(self, probe: EventBusProbe | None = None):
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._probe = probe or DefaultEventBusProbe()

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Register a handler for an event type, or ALL_EVENTS for every event.

        Raises:
            ValueError: If event_type is empty
        """
        if not event_type:
            raise ValueError("event_type is required")
        self._handlers[event_type].append(handler)
        self._probe.handler_subscribed(
            event_type=event_type, handler=_handler_name(handler)
        )

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event_type: str) -> list[EventHandler]:
        """Handlers for an event type followed by the catch-all handlers."""
        return [
            *self._handlers.get(event_type, []),
            *self._handlers.get(ALL_EVENTS, []),
        ]

    async def publish(self, event: DomainEvent) -> None:
        """Deliver an event to every matching handler.

        Raises:
            EventPublishError: If one or more handlers raised; the first
                failure is chained as __cause__
        """
        handlers = self.handlers_for(event.event_type)
        failures: list[Exception] = []

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                self._probe.handler_failed(
                    event_type=event.event_type,
                    aggregate_id=event.aggregate_id,
                    handler=_handler_name(handler),
                    error=e,
                )
                failures.append(e)

        if failures:
            raise EventPublishError(
                f"{len(failures)} of {len(handlers)} handlers failed for "
                f"{event.event_type}"
            ) from failures[0]

        self._probe.event_delivered(
            event_type=event.event_type,
            aggregate_id=event.aggregate_id,
            handlers=len(handlers),
        )
