"""Observability probe for post-send processing.

Following Domain Oriented Observability, the worker reports its lifecycle
and per-job outcomes through this probe instead of logging directly.
"""

from __future__ import annotations

from typing import Protocol

import structlog

logger = structlog.get_logger()


class PostSendProbe(Protocol):
    """Protocol for post-send queue and worker observability."""

    def worker_started(self) -> None:
        ...

    def worker_stopped(self) -> None:
        ...

    def job_dropped(self, message_id: str, queue_size: int) -> None:
        """Called when the queue is full and a job is discarded."""
        ...

    def job_processed(self, message_id: str) -> None:
        ...

    def job_failed(self, message_id: str, error: str) -> None:
        """Called when the tag processor raised. The job is not retried."""
        ...


class DefaultPostSendProbe:
    """Default implementation using structlog."""

    def __init__(self) -> None:
        self._log = logger.bind(component="post_send_worker")

    def worker_started(self) -> None:
        self._log.info("post_send_worker_started")

    def worker_stopped(self) -> None:
        self._log.info("post_send_worker_stopped")

    def job_dropped(self, message_id: str, queue_size: int) -> None:
        self._log.warning(
            "post_send_job_dropped",
            message_id=message_id,
            queue_size=queue_size,
        )

    def job_processed(self, message_id: str) -> None:
        self._log.debug("post_send_job_processed", message_id=message_id)

    def job_failed(self, message_id: str, error: str) -> None:
        self._log.warning(
            "post_send_job_failed",
            message_id=message_id,
            error=error,
        )
