"""ULID-backed identifier base shared by all bounded contexts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from ulid import ULID


@dataclass(frozen=True)
class UlidIdentifier:
    """Base for ULID-backed aggregate identifiers.

    ULIDs are sortable by creation time and can be generated without
    coordination, so identifiers are created in the domain layer.
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

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)
