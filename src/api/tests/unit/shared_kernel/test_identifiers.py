"""Unit tests for shared identifier value objects."""

from dataclasses import dataclass

import pytest

from shared_kernel.identifiers import UlidIdentifier, UserId


@dataclass(frozen=True)
class SampleId(UlidIdentifier):
    """Identifier used only by these tests."""


@dataclass(frozen=True)
class OtherId(UlidIdentifier):
    """Second identifier type used only by these tests."""


class TestUlidIdentifier:
    def test_generate_creates_unique_values(self):
        assert SampleId.generate() != SampleId.generate()

    def test_from_string_round_trips_generated_value(self):
        original = SampleId.generate()
        assert SampleId.from_string(original.value) == original

    def test_from_string_rejects_invalid_ulid(self):
        with pytest.raises(ValueError, match="Invalid SampleId"):
            SampleId.from_string("not-a-ulid")

    def test_str_returns_raw_value(self):
        identifier = SampleId.generate()
        assert str(identifier) == identifier.value

    def test_equality_is_per_type(self):
        """Two identifier types with the same raw value are not equal."""
        value = SampleId.generate().value
        assert SampleId(value) != OtherId(value)


class TestUserId:
    def test_accepts_external_subject(self):
        """User ids come from the identity provider and need not be ULIDs."""
        user_id = UserId.from_string("f47ac10b-58cc-4372-a567-0e02b2c3d479")
        assert user_id.value == "f47ac10b-58cc-4372-a567-0e02b2c3d479"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_rejects_blank_values(self, value):
        with pytest.raises(ValueError):
            UserId.from_string(value)
