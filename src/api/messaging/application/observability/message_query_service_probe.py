"""Protocol for message query service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MessageQueryServiceProbe(Protocol):
    """Domain probe for message read operations."""

    def message_retrieved(self, message_id: str) -> None:
        ...

    def message_not_found(self, message_id: str) -> None:
        ...

    def messages_listed(
        self, chat_id: str, count: int, limit: int, offset: int
    ) -> None:
        ...

    def thread_retrieved(self, parent_message_id: str, count: int) -> None:
        ...

    def messages_searched(self, chat_id: str, count: int) -> None:
        ...

    def with_context(self, context: ObservationContext) -> MessageQueryServiceProbe:
        ...


class DefaultMessageQueryServiceProbe:
    """Default implementation of MessageQueryServiceProbe using structlog.

    Read operations are logged at debug level.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(
        self, context: ObservationContext
    ) -> DefaultMessageQueryServiceProbe:
        return DefaultMessageQueryServiceProbe(logger=self._logger, context=context)

    def message_retrieved(self, message_id: str) -> None:
        self._logger.debug(
            "message_retrieved",
            message_id=message_id,
            **self._get_context_kwargs(exclude={"message_id"}),
        )

    def message_not_found(self, message_id: str) -> None:
        self._logger.debug(
            "message_not_found",
            message_id=message_id,
            **self._get_context_kwargs(exclude={"message_id"}),
        )

    def messages_listed(
        self, chat_id: str, count: int, limit: int, offset: int
    ) -> None:
        self._logger.debug(
            "messages_listed",
            chat_id=chat_id,
            count=count,
            limit=limit,
            offset=offset,
            **self._get_context_kwargs(exclude={"chat_id", "count", "limit", "offset"}),
        )

    def thread_retrieved(self, parent_message_id: str, count: int) -> None:
        self._logger.debug(
            "message_thread_retrieved",
            parent_message_id=parent_message_id,
            count=count,
            **self._get_context_kwargs(exclude={"parent_message_id", "count"}),
        )

    def messages_searched(self, chat_id: str, count: int) -> None:
        self._logger.debug(
            "messages_searched",
            chat_id=chat_id,
            count=count,
            **self._get_context_kwargs(exclude={"chat_id", "count"}),
        )
