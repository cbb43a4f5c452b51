"""Identifier value objects shared across bounded contexts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from ulid import ULID


@dataclass(frozen=True)
class UlidIdentifier:
    """Base for identifiers generated by this system.

    Uses ULID for sortability and distribution-friendly generation.
    Subclasses only need a docstring; equality is per concrete type.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create an identifier from its string form.

        Args:
            value: ULID string

        Returns:
            Identifier instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class UserId:
    """Identifier of a user as issued by the identity provider.

    User ids are minted outside this system (e.g. a Keycloak subject), so
    the only structural requirement is that they are non-empty.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId (used by tests and local tooling)."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create a UserId from its string form.

        Raises:
            ValueError: If value is empty
        """
        if not value or not value.strip():
            raise ValueError("Invalid UserId: value must not be empty")
        return cls(value=value)
