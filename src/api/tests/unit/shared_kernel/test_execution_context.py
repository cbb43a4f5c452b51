"""Unit tests for the request-scoped execution context."""

import asyncio
import time

import pytest
import structlog

from shared_kernel.execution_context import (
    ExecutionContext,
    bind_execution_context,
    current_execution_context,
    ensure_active,
)
from shared_kernel.observability_context import ObservationContext


class TestExecutionContext:
    def test_unbound_context_is_empty(self):
        context = current_execution_context()
        assert context.user_id == ""
        assert context.deadline is None

    def test_bind_sets_and_restores_context(self):
        context = ExecutionContext(user_id="U1", correlation_id="req-1")

        with bind_execution_context(context):
            assert current_execution_context() is context

        assert current_execution_context().user_id == ""

    def test_bind_pushes_values_into_structlog_contextvars(self):
        context = ExecutionContext(user_id="U1", correlation_id="req-1")

        with bind_execution_context(context):
            bound = structlog.contextvars.get_contextvars()
            assert bound["user_id"] == "U1"
            assert bound["correlation_id"] == "req-1"
            assert "workspace_id" not in bound

        assert "correlation_id" not in structlog.contextvars.get_contextvars()

    def test_with_timeout_sets_future_deadline(self):
        context = ExecutionContext().with_timeout(10)
        assert context.deadline is not None
        assert context.deadline > time.monotonic()
        assert context.expired is False

    def test_past_deadline_is_expired(self):
        assert ExecutionContext(deadline=time.monotonic() - 1).expired is True


class TestEnsureActive:
    """Tests for the fail-fast check at the start of every use-case."""

    def test_returns_bound_context(self):
        context = ExecutionContext(user_id="U1")
        with bind_execution_context(context):
            assert ensure_active() is context

    def test_raises_timeout_when_deadline_passed(self):
        expired = ExecutionContext(deadline=time.monotonic() - 1)
        with bind_execution_context(expired):
            with pytest.raises(TimeoutError):
                ensure_active()

    @pytest.mark.asyncio
    async def test_raises_cancelled_when_task_is_cancelling(self):
        outcome: list[str] = []

        async def body():
            asyncio.current_task().cancel()
            try:
                ensure_active()
            except asyncio.CancelledError:
                outcome.append("cancelled")
                raise

        task = asyncio.create_task(body())
        with pytest.raises(asyncio.CancelledError):
            await task

        assert outcome == ["cancelled"]

    @pytest.mark.asyncio
    async def test_active_task_passes(self):
        assert ensure_active() == ExecutionContext()


class TestObservationContext:
    def test_from_execution_context_drops_empty_values(self):
        context = ExecutionContext(user_id="U1", correlation_id="req-1")

        observation = ObservationContext.from_execution_context(context)

        assert observation.as_dict() == {"correlation_id": "req-1", "user_id": "U1"}

    def test_with_extra_merges_metadata(self):
        observation = ObservationContext(user_id="U1").with_extra(chat_id="C1")
        assert observation.as_dict() == {"user_id": "U1", "chat_id": "C1"}
