"""Error taxonomy for builder generation."""

from __future__ import annotations


class FluentGenError(RuntimeError):
    """Base class for every failure raised at the generator boundary.

    ``record`` names the declaration the failure is attributed to, so batch
    processing can report it against the right schema and move on.
    """

    def __init__(self, message: str, *, record: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.record = record

    def __str__(self) -> str:
        return self.message


class UsageError(FluentGenError):
    """The trigger was applied to something that is not a record."""


class SchemaError(FluentGenError):
    """The schema is malformed and no builder can be generated from it."""


class AmbiguityError(SchemaError):
    """The schema admits more than one reading (duplicate names, conflicting markers)."""


class LatticeTooLargeError(SchemaError):
    """Too many required fields for the state lattice to stay reasonable."""


class EmissionError(FluentGenError):
    """The emission sink could not register or write a generated unit."""
