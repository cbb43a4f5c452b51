"""Domain-Oriented Observability for the Messaging application layer."""

from messaging.application.observability.message_query_service_probe import (
    DefaultMessageQueryServiceProbe,
    MessageQueryServiceProbe,
)
from messaging.application.observability.message_service_probe import (
    DefaultMessageServiceProbe,
    MessageServiceProbe,
)
from messaging.application.observability.post_send_probe import (
    DefaultPostSendProbe,
    PostSendProbe,
)

__all__ = [
    "MessageServiceProbe",
    "DefaultMessageServiceProbe",
    "MessageQueryServiceProbe",
    "DefaultMessageQueryServiceProbe",
    "PostSendProbe",
    "DefaultPostSendProbe",
]
