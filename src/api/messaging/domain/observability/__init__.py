"""Domain probes for the Messaging bounded context."""

from messaging.domain.observability.message_probe import (
    DefaultMessageProbe,
    MessageProbe,
)

__all__ = ["MessageProbe", "DefaultMessageProbe"]
