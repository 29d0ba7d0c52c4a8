"""
Overflow-checked integer arithmetic.

Each algorithm tests whether the exact result is representable *before*
computing it, using only operations whose own results are always in
range for the type (``hi - a`` for a non-negative ``a``, ``hi // a``
for a positive ``a``, and so on).  Python integers cannot overflow, but
keeping the check-then-operate order means the same algorithms are
correct for any fixed-width rendering of the code.

Signed and unsigned types use separate algorithms.  ``TypedArithmetic``
binds them to one ``IntType`` and dispatches on signedness.

Three calling conventions are offered over the same algorithms:

- ``TypedArithmetic`` methods return ``Ok``/``Err`` values
- result form (``int32_add`` ...) returns the value or raises a
  ``SafeArithmeticError``
- status form (``try_int32_add`` ...) returns a bool and writes the
  value into a caller-supplied ``Slot`` only on success
"""

from __future__ import annotations

from dataclasses import dataclass

from safe_arith.bounds import INT32, INT64, SIZE_T, UINT32, IntType, truncdiv
from safe_arith.errors import ErrorKind
from safe_arith.result import Err, Ok, Result, Slot


# ---------------------------------------------------------------------------
# Operand checks
# ---------------------------------------------------------------------------

def _validate(int_type: IntType, *values: int) -> None:
    """Reject operands that are not values of ``int_type``."""
    for v in values:
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"expected int operand, got {type(v).__name__}")
        if not int_type.contains(v):
            raise ValueError(
                f"{v} is outside {int_type} range [{int_type.lo}, {int_type.hi}]"
            )


def _require_unsigned(int_type: IntType, operation: str) -> None:
    if int_type.signed:
        raise TypeError(f"{operation} requires an unsigned type, got {int_type}")


def _overflow(int_type: IntType, expression: str) -> Err:
    return Err(ErrorKind.OVERFLOW, f"Arithmetic overflow: {int_type} {expression}")


# ---------------------------------------------------------------------------
# Addition and subtraction
# ---------------------------------------------------------------------------

def _signed_add(t: IntType, a: int, b: int) -> Result:
    # Enumerate the valid cases rather than the invalid ones.
    if (a >= 0 and b <= t.hi - a) or (a < 0 and b >= t.lo - a):
        return Ok(a + b)
    return _overflow(t, f"{a} + {b}")


def _unsigned_add(t: IntType, a: int, b: int) -> Result:
    if b <= t.hi - a:
        return Ok(a + b)
    return _overflow(t, f"{a} + {b}")


def _signed_sub(t: IntType, a: int, b: int) -> Result:
    if (b >= 0 and a >= t.lo + b) or (b < 0 and a <= t.hi + b):
        return Ok(a - b)
    return _overflow(t, f"{a} - {b}")


def _unsigned_sub(t: IntType, a: int, b: int) -> Result:
    if a >= b:
        return Ok(a - b)
    return _overflow(t, f"{a} - {b}")


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

def _unsigned_mult(t: IntType, a: int, b: int) -> Result:
    if a == 0 or b <= t.hi // a:
        return Ok(a * b)
    return _overflow(t, f"{a} * {b}")


def _signed_mult(t: IntType, a: int, b: int) -> Result:
    """Quadrant-wise overflow check for a signed product.

    Each branch divides by an operand already known to be non-zero and
    never negates ``lo``.  The bounds are computed with truncating
    division, matching the derivation for C integer division.
    """
    if a > 0:
        if b > 0:
            overflow = a > truncdiv(t.hi, b)
        else:
            overflow = b < truncdiv(t.lo, a)
    else:
        if b > 0:
            overflow = a < truncdiv(t.lo, b)
        else:
            overflow = a != 0 and b < truncdiv(t.hi, a)

    if overflow:
        return _overflow(t, f"{a} * {b}")
    return Ok(a * b)


# ---------------------------------------------------------------------------
# Typed instantiation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TypedArithmetic:
    """The checked operations instantiated for one integer type."""

    int_type: IntType

    def add(self, a: int, b: int) -> Result:
        _validate(self.int_type, a, b)
        if self.int_type.signed:
            return _signed_add(self.int_type, a, b)
        return _unsigned_add(self.int_type, a, b)

    def sub(self, a: int, b: int) -> Result:
        _validate(self.int_type, a, b)
        if self.int_type.signed:
            return _signed_sub(self.int_type, a, b)
        return _unsigned_sub(self.int_type, a, b)

    def mult(self, *operands: int) -> Result:
        """Product of two or more operands, folded left to right.

        Stops at the first intermediate product that overflows.
        """
        if len(operands) < 2:
            raise TypeError(f"mult() needs at least 2 operands, got {len(operands)}")
        _validate(self.int_type, *operands)
        step = _signed_mult if self.int_type.signed else _unsigned_mult

        outcome: Result = Ok(operands[0])
        for operand in operands[1:]:
            outcome = step(self.int_type, outcome.value, operand)
            if not outcome.is_ok:
                return outcome
        return outcome

    def divide_up(self, a: int, b: int) -> Result:
        """``ceil(a / b)`` without forming ``a + b - 1``."""
        _require_unsigned(self.int_type, "divide_up")
        _validate(self.int_type, a, b)
        if b == 0:
            return Err(ErrorKind.DIVISION_BY_ZERO, "Division by zero")
        if a == 0:
            # a - 1 below would wrap
            return Ok(0)
        return Ok((a - 1) // b + 1)

    def round_up_to_multiple(self, val: int, multiple_of: int) -> Result:
        """Smallest multiple of ``multiple_of`` that is >= ``val``."""
        _require_unsigned(self.int_type, "round_up_to_multiple")
        _validate(self.int_type, val, multiple_of)
        if multiple_of == 0:
            return Err(ErrorKind.INVALID_ARGUMENT, "No multiple of zero exists")
        remainder = val % multiple_of
        if remainder == 0:
            return Ok(val)
        return self.add(val, multiple_of - remainder)


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def checked_convert_unsigned(value: int, src: IntType, dest: IntType) -> Result:
    """Convert between unsigned types, failing if the value does not survive.

    Works for narrowing, widening and same-width conversions: the value
    is cast to ``dest`` and back to ``src``, and any change means bits
    were lost.
    """
    if src.signed or dest.signed:
        raise TypeError(
            f"source and destination must be unsigned types, got {src} -> {dest}"
        )
    _validate(src, value)
    converted = dest.wrap(value)
    if src.wrap(converted) != value:
        return Err(
            ErrorKind.TRUNCATION,
            f"Overflow in unsigned integer conversion: {value} {src} -> {dest}",
        )
    return Ok(converted)


def checked_convert_to_signed(value: int, src: IntType, dest: IntType) -> Result:
    if src.signed or not dest.signed:
        raise TypeError(f"expected unsigned -> signed conversion, got {src} -> {dest}")
    _validate(src, value)
    if value <= dest.hi:
        return Ok(value)
    return Err(
        ErrorKind.TRUNCATION,
        f"{value} does not fit in {dest} (max {dest.hi})",
    )


# ---------------------------------------------------------------------------
# Named API
# ---------------------------------------------------------------------------

_int32 = TypedArithmetic(INT32)
_int64 = TypedArithmetic(INT64)
_uint32 = TypedArithmetic(UINT32)
_sizet = TypedArithmetic(SIZE_T)


def try_int32_add(a: int, b: int, out: Slot) -> bool:
    return _int32.add(a, b).store(out)


def int32_add(a: int, b: int) -> int:
    return _int32.add(a, b).unwrap()


def int64_add(a: int, b: int) -> int:
    return _int64.add(a, b).unwrap()


def try_uint32_add(a: int, b: int, out: Slot) -> bool:
    return _uint32.add(a, b).store(out)


def uint32_add(a: int, b: int) -> int:
    return _uint32.add(a, b).unwrap()


def try_int32_sub(a: int, b: int, out: Slot) -> bool:
    return _int32.sub(a, b).store(out)


def int32_sub(a: int, b: int) -> int:
    return _int32.sub(a, b).unwrap()


def try_uint32_mult(*operands: int, out: Slot) -> bool:
    return _uint32.mult(*operands).store(out)


def uint32_mult(*operands: int) -> int:
    return _uint32.mult(*operands).unwrap()


def sizet_mult(a: int, b: int) -> int:
    return _sizet.mult(a, b).unwrap()


def int64_mult(a: int, b: int) -> int:
    return _int64.mult(a, b).unwrap()


def uint32_divide_up(a: int, b: int) -> int:
    """Ceiling of ``a / b``; raises ``DivisionByZero`` when ``b`` is 0."""
    return _uint32.divide_up(a, b).unwrap()


def try_round_up_uint32_to_multiple(val: int, multiple_of: int, out: Slot) -> bool:
    return _uint32.round_up_to_multiple(val, multiple_of).store(out)


def try_convert_uint32_to_int32(val: int, out: Slot) -> bool:
    return checked_convert_to_signed(val, UINT32, INT32).store(out)


def convert_unsigned(value: int, src: IntType, dest: IntType) -> int:
    """Convert ``value`` from ``src`` to ``dest``; raises ``Truncation``."""
    return checked_convert_unsigned(value, src, dest).unwrap()
