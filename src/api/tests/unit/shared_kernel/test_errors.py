"""Unit tests for the shared error taxonomy."""

import pytest

from shared_kernel.errors import (
    ConcurrencyConflictError,
    DomainError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    operation_context,
)


class TestDomainError:
    """Tests for DomainError messages and context prefixes."""

    def test_uses_default_message_when_raised_bare(self):
        assert str(NotFoundError()) == "not found"

    def test_explicit_message_overrides_default(self):
        assert str(NotFoundError("chat not found")) == "chat not found"

    def test_with_context_prefixes_message_and_keeps_type(self):
        """with_context should prefix the message and return the same error."""
        error = InvalidInputError("bad value")

        result = error.with_context("validation failed")

        assert result is error
        assert isinstance(result, InvalidInputError)
        assert str(result) == "validation failed: bad value"
        assert result.args == ("validation failed: bad value",)

    def test_with_context_can_be_applied_twice(self):
        error = NotFoundError().with_context("inner").with_context("outer")
        assert str(error) == "outer: inner: not found"


class TestValidationError:
    def test_names_field_and_reason(self):
        error = ValidationError("name", "is required")

        assert error.field == "name"
        assert error.reason == "is required"
        assert str(error) == "validation error on field 'name': is required"

    def test_is_an_invalid_input_error(self):
        assert isinstance(ValidationError("x", "y"), InvalidInputError)


class TestOperationContext:
    """Tests for operation_context wrapping."""

    def test_domain_error_keeps_type_and_gains_prefix(self):
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            with operation_context("failed to save message"):
                raise ConcurrencyConflictError()

        assert str(exc_info.value) == (
            "failed to save message: concurrent modification detected"
        )

    def test_other_exception_is_wrapped_and_chained(self):
        """Non-domain errors become PersistenceError with the cause chained."""
        original = OSError("disk full")

        with pytest.raises(PersistenceError) as exc_info:
            with operation_context("failed to save message"):
                raise original

        assert exc_info.value.__cause__ is original
        assert str(exc_info.value) == "failed to save message: disk full"

    def test_custom_fallback_type(self):
        with pytest.raises(NotFoundError):
            with operation_context("lookup", fallback=NotFoundError):
                raise KeyError("missing")

    def test_no_error_passes_through(self):
        with operation_context("noop"):
            value = 1
        assert value == 1

    def test_all_families_are_domain_errors(self):
        for error_type in (
            InvalidInputError,
            NotFoundError,
            PersistenceError,
            ConcurrencyConflictError,
        ):
            assert issubclass(error_type, DomainError)
