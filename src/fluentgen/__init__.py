"""fluentgen package root."""

from fluentgen.exceptions import (
    AmbiguityError,
    EmissionError,
    FluentGenError,
    LatticeTooLargeError,
    SchemaError,
    UsageError,
)

__all__ = [
    "__version__",
    "AmbiguityError",
    "EmissionError",
    "FluentGenError",
    "LatticeTooLargeError",
    "SchemaError",
    "UsageError",
]

__version__ = "0.1.0"
