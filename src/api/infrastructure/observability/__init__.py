"""Probes for shared infrastructure adapters."""

from infrastructure.observability.probes import (
    DefaultEventBusProbe,
    EventBusProbe,
)

__all__ = [
    "DefaultEventBusProbe",
    "EventBusProbe",
]
