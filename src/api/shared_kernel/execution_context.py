"""Request-scoped execution context.

The transport layer binds an ExecutionContext for each request. It carries
the acting user, the correlation id used to stitch logs and events together,
and an optional deadline. Application services call ensure_active() before
doing any work so that cancelled or expired requests fail fast.

Values bound here are also pushed into structlog's contextvars, so every log
line emitted while the context is bound carries them.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace

import structlog


@dataclass(frozen=True)
class ExecutionContext:
    """Ambient values for a single request.

    Attributes:
        user_id: Authenticated user performing the request
        workspace_id: Workspace the request is scoped to, if any
        correlation_id: Identifier of the originating request
        trace_id: Distributed tracing identifier, if any
        deadline: time.monotonic() value after which the request is expired
    """

    user_id: str = ""
    workspace_id: str = ""
    correlation_id: str = ""
    trace_id: str = ""
    deadline: float | None = None

    def with_timeout(self, seconds: float) -> ExecutionContext:
        """Return a copy whose deadline is `seconds` from now."""
        return replace(self, deadline=time.monotonic() + seconds)

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def as_log_context(self) -> dict[str, str]:
        """Non-empty identifying values, suitable for log binding."""
        values = {
            "user_id": self.user_id,
            "workspace_id": self.workspace_id,
            "correlation_id": self.correlation_id,
            "trace_id": self.trace_id,
        }
        return {k: v for k, v in values.items() if v}


_EMPTY_CONTEXT = ExecutionContext()

_current_context: ContextVar[ExecutionContext | None] = ContextVar(
    "execution_context", default=None
)


def current_execution_context() -> ExecutionContext:
    """Return the bound execution context, or an empty one."""
    return _current_context.get() or _EMPTY_CONTEXT


@contextmanager
def bind_execution_context(context: ExecutionContext) -> Iterator[ExecutionContext]:
    """Bind an execution context for the duration of the with-block.

    Example:
        with bind_execution_context(ExecutionContext(user_id="u1").with_timeout(5)):
            await message_service.send_message(command)
    """
    token = _current_context.set(context)
    try:
        with structlog.contextvars.bound_contextvars(**context.as_log_context()):
            yield context
    finally:
        _current_context.reset(token)


def ensure_active() -> ExecutionContext:
    """Fail fast if the current request was cancelled or is past its deadline.

    Returns:
        The bound execution context

    Raises:
        asyncio.CancelledError: If the running task is being cancelled
        TimeoutError: If the context deadline has passed
    """
    try:
        task = asyncio.current_task()
    except RuntimeError:
        task = None
    if task is not None and task.cancelling():
        raise asyncio.CancelledError()

    context = current_execution_context()
    if context.expired:
        raise TimeoutError("execution context deadline exceeded")
    return context
