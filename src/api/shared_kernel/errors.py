"""Error taxonomy shared by all bounded contexts.

Every failure the application core surfaces is a DomainError. Bounded
contexts define their specific errors as subclasses of one of the families
below, so the transport layer can dispatch either on the precise error
(e.g. MessageDeletedError) or on its family (InvalidStateError).
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Self


class DomainError(Exception):
    """Base class for all errors raised by the application core.

    Subclasses provide a default message so they can be raised bare.
    Callers may prepend operation context with with_context(); the
    exception type is preserved so isinstance checks still match.
    """

    default_message = "domain error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def with_context(self, context: str) -> Self:
        """Prefix the message with operation context and return self.

        Args:
            context: Short description of the failing operation

        Returns:
            The same exception, with its message now "<context>: <message>"
        """
        self.message = f"{context}: {self.message}"
        self.args = (self.message,)
        return self

    def __str__(self) -> str:
        return self.message


class InvalidInputError(DomainError):
    """Input failed structural or business validation."""

    default_message = "invalid input"


class ValidationError(InvalidInputError):
    """A single field failed validation.

    Attributes:
        field: Name of the offending field
        reason: Human readable reason, e.g. "is required"
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"validation error on field '{field}': {reason}")


class NotFoundError(DomainError):
    """The requested resource does not exist."""

    default_message = "not found"


class ForbiddenError(DomainError):
    """The acting user is not allowed to perform the operation."""

    default_message = "forbidden"


class InvalidStateError(DomainError):
    """The aggregate is not in a state that permits the operation."""

    default_message = "invalid state"


class AlreadyExistsError(DomainError):
    """The resource being created already exists."""

    default_message = "already exists"


class ConcurrencyConflictError(DomainError):
    """A write was rejected because the stored aggregate changed since it was loaded.

    Callers may reload the aggregate and retry the operation.
    """

    default_message = "concurrent modification detected"


class PersistenceError(DomainError):
    """A repository operation failed for a reason other than not-found.

    The original exception is available as __cause__.
    """

    default_message = "persistence failure"


class ExternalServiceError(DomainError):
    """A call to an external collaborator (e.g. identity provider) failed."""

    default_message = "external service failure"


@contextmanager
def operation_context(
    operation: str,
    fallback: type[DomainError] = PersistenceError,
) -> Iterator[None]:
    """Prefix errors raised inside the block with operation context.

    Domain errors keep their type and gain the prefix. Any other exception
    is wrapped in `fallback` and chained, so the original stays available
    as __cause__. Cancellation passes through untouched.

    Example:
        with operation_context("failed to save message"):
            await repository.save(message)
    """
    try:
        yield
    except DomainError as e:
        raise e.with_context(operation)
    except Exception as e:
        raise fallback(f"{operation}: {e}") from e
