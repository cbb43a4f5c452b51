"""Observation context for domain-oriented observability.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from shared_kernel.execution_context import ExecutionContext


@dataclass(frozen=True)
class ObservationContext:
    """Immutable metadata included with every probe event.

    Attributes:
        correlation_id: Identifier of the originating request
        user_id: User performing the operation
        workspace_id: Workspace the operation is scoped to
        extra: Additional contextual metadata

    Example:
        probe = DefaultMessageServiceProbe().with_context(
            ObservationContext(correlation_id="req-123", user_id="u-1")
        )
    """

    correlation_id: str | None = None
    user_id: str | None = None
    workspace_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_execution_context(cls, context: ExecutionContext) -> ObservationContext:
        return cls(
            correlation_id=context.correlation_id or None,
            user_id=context.user_id or None,
            workspace_id=context.workspace_id or None,
        )

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging, skipping unset values."""
        result: dict[str, Any] = {}
        if self.correlation_id is not None:
            result["correlation_id"] = self.correlation_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.workspace_id is not None:
            result["workspace_id"] = self.workspace_id
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            correlation_id=self.correlation_id,
            user_id=self.user_id,
            workspace_id=self.workspace_id,
            extra={**self.extra, **kwargs},
        )
