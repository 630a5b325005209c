"""Errors raised by the calculator.

Every error carries the name of the offending parameter where there is one.
Nothing is retried or downgraded to a default: the error reaches the caller
as soon as it is detected.
"""

from __future__ import annotations

from typing import Optional, Sequence


class CalculatorError(Exception):
    """Base class for every error raised by ppcalc."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class TypeMismatchError(CalculatorError, TypeError):
    """A named parameter was given a value of the wrong type."""


class UnrecognizedParameterError(CalculatorError, TypeError):
    """A named parameter does not exist."""

    def __init__(self, field: str, accepted: Sequence[str]) -> None:
        expected = ", ".join(f"'{name}'" for name in accepted)
        super().__init__(
            f"unexpected kwarg '{field}': expected one of {expected}",
            field=field,
        )
        self.accepted = tuple(accepted)


class InvalidEnumValueError(CalculatorError, ValueError):
    """An enum-valued parameter was given an out-of-range integer."""


class AlgorithmValidationError(CalculatorError, ValueError):
    """The selected algorithm rejected the beatmap/parameter combination."""


class ConvertError(AlgorithmValidationError):
    """A beatmap cannot be converted to the requested game mode."""


class BeatmapError(CalculatorError, ValueError):
    """A beatmap could not be loaded or parsed."""
