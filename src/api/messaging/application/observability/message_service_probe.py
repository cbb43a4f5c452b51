"""Protocol for message application service observability.

Defines the interface for domain probes that capture application-level
events for message command operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MessageServiceProbe(Protocol):
    """Domain probe for message command operations."""

    def message_sent(
        self,
        message_id: str,
        chat_id: str,
        author_id: str,
        is_reply: bool,
    ) -> None:
        """Record a successfully sent message."""
        ...

    def message_edited(self, message_id: str, editor_id: str) -> None:
        ...

    def message_deleted(self, message_id: str, deleter_id: str) -> None:
        ...

    def reaction_added(self, message_id: str, user_id: str, emoji_code: str) -> None:
        ...

    def reaction_removed(
        self, message_id: str, user_id: str, emoji_code: str
    ) -> None:
        ...

    def attachment_added(self, message_id: str, user_id: str, file_id: str) -> None:
        ...

    def operation_failed(
        self,
        operation: str,
        error: str,
        message_id: str | None = None,
    ) -> None:
        """Record a rejected or failed command."""
        ...

    def with_context(self, context: ObservationContext) -> MessageServiceProbe:
        """Return a new probe with additional context."""
        ...


class DefaultMessageServiceProbe:
    """Default implementation of MessageServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Get context as kwargs dict, excluding keys passed explicitly."""
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultMessageServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultMessageServiceProbe(logger=self._logger, context=context)

    def message_sent(
        self,
        message_id: str,
        chat_id: str,
        author_id: str,
        is_reply: bool,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"message_id", "chat_id", "author_id", "is_reply"}
        )
        self._logger.info(
            "message_sent",
            message_id=message_id,
            chat_id=chat_id,
            author_id=author_id,
            is_reply=is_reply,
            **context_kwargs,
        )

    def message_edited(self, message_id: str, editor_id: str) -> None:
        context_kwargs = self._get_context_kwargs(exclude={"message_id", "editor_id"})
        self._logger.info(
            "message_edited",
            message_id=message_id,
            editor_id=editor_id,
            **context_kwargs,
        )

    def message_deleted(self, message_id: str, deleter_id: str) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"message_id", "deleter_id"}
        )
        self._logger.info(
            "message_deleted",
            message_id=message_id,
            deleter_id=deleter_id,
            **context_kwargs,
        )

    def reaction_added(self, message_id: str, user_id: str, emoji_code: str) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"message_id", "user_id", "emoji_code"}
        )
        self._logger.info(
            "message_reaction_added",
            message_id=message_id,
            user_id=user_id,
            emoji_code=emoji_code,
            **context_kwargs,
        )

    def reaction_removed(
        self, message_id: str, user_id: str, emoji_code: str
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"message_id", "user_id", "emoji_code"}
        )
        self._logger.info(
            "message_reaction_removed",
            message_id=message_id,
            user_id=user_id,
            emoji_code=emoji_code,
            **context_kwargs,
        )

    def attachment_added(self, message_id: str, user_id: str, file_id: str) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"message_id", "user_id", "file_id"}
        )
        self._logger.info(
            "message_attachment_added",
            message_id=message_id,
            user_id=user_id,
            file_id=file_id,
            **context_kwargs,
        )

    def operation_failed(
        self,
        operation: str,
        error: str,
        message_id: str | None = None,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"operation", "error", "message_id"}
        )
        self._logger.warning(
            "message_operation_failed",
            operation=operation,
            error=error,
            message_id=message_id,
            **context_kwargs,
        )

