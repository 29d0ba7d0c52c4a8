"""Arithmetic-error family raised by the result-form operations."""

from __future__ import annotations

from enum import Enum, auto


class ErrorKind(Enum):
    """Why a checked operation could not produce an exact result."""

    OVERFLOW = auto()          # Sum, difference or product out of range
    DIVISION_BY_ZERO = auto()  # Zero divisor
    INVALID_ARGUMENT = auto()  # No meaningful result, e.g. multiple of 0
    TRUNCATION = auto()        # Conversion would lose information


class SafeArithmeticError(ArithmeticError):
    """Base class for every checked-arithmetic failure."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ArithmeticOverflow(SafeArithmeticError, OverflowError):
    kind = ErrorKind.OVERFLOW


class DivisionByZero(SafeArithmeticError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class InvalidArgument(SafeArithmeticError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class Truncation(SafeArithmeticError, OverflowError):
    kind = ErrorKind.TRUNCATION


_ERRORS: dict[ErrorKind, type[SafeArithmeticError]] = {
    ErrorKind.OVERFLOW: ArithmeticOverflow,
    ErrorKind.DIVISION_BY_ZERO: DivisionByZero,
    ErrorKind.INVALID_ARGUMENT: InvalidArgument,
    ErrorKind.TRUNCATION: Truncation,
}


def error_for(kind: ErrorKind, message: str) -> SafeArithmeticError:
    """Build the exception matching ``kind``."""
    return _ERRORS[kind](message)
