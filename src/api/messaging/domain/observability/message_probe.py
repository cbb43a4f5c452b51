"""Observability probes for the Message aggregate.

Domain probes following the Domain Oriented Observability pattern. They
capture state changes of a single message as structured log events.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class MessageProbe(Protocol):
    """Protocol for Message aggregate observability probes."""

    def content_edited(self, message_id: str, editor_id: str) -> None:
        ...

    def message_deleted(self, message_id: str, deleted_by: str) -> None:
        ...

    def reaction_added(self, message_id: str, user_id: str, emoji_code: str) -> None:
        ...

    def reaction_removed(
        self, message_id: str, user_id: str, emoji_code: str
    ) -> None:
        ...

    def attachment_added(
        self, message_id: str, file_id: str, file_size: int, mime_type: str
    ) -> None:
        """Probe emitted when a file is attached to a message.

        Args:
            message_id: The message ID
            file_id: The attached file
            file_size: Size in bytes
            mime_type: Reported MIME type
        """
        ...


class DefaultMessageProbe:
    """Default implementation of MessageProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._logger = logger or structlog.get_logger()

    def content_edited(self, message_id: str, editor_id: str) -> None:
        self._logger.info(
            "message_content_edited",
            message_id=message_id,
            editor_id=editor_id,
        )

    def message_deleted(self, message_id: str, deleted_by: str) -> None:
        self._logger.info(
            "message_deleted",
            message_id=message_id,
            deleted_by=deleted_by,
        )

    def reaction_added(self, message_id: str, user_id: str, emoji_code: str) -> None:
        self._logger.debug(
            "message_reaction_added",
            message_id=message_id,
            user_id=user_id,
            emoji_code=emoji_code,
        )

    def reaction_removed(
        self, message_id: str, user_id: str, emoji_code: str
    ) -> None:
        self._logger.debug(
            "message_reaction_removed",
            message_id=message_id,
            user_id=user_id,
            emoji_code=emoji_code,
        )

    def attachment_added(
        self, message_id: str, file_id: str, file_size: int, mime_type: str
    ) -> None:
        self._logger.info(
            "message_attachment_added",
            message_id=message_id,
            file_id=file_id,
            file_size=file_size,
            mime_type=mime_type,
        )
