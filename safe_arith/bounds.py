"""
Integer type descriptors.

An ``IntType`` describes a fixed-width integer type: its width in bits
and whether it is signed.  Python integers never overflow, so the type
is what gives a plain ``int`` its representable range [lo, hi].  Every
checked operation is parameterised over one of these.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass


@dataclass(frozen=True)
class IntType:
    """A fixed-width integer type, e.g. ``int32`` or ``uint64``."""

    name: str
    bits: int
    signed: bool

    def __post_init__(self):
        if self.bits <= 0:
            raise ValueError(f"bits ({self.bits}) must be positive")

    @property
    def lo(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def hi(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return 1 << self.bits

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)

    def wrap(self, value: int) -> int:
        """Reduce ``value`` modulo the type, like a C integer cast."""
        return self.lo + (value - self.lo) % self.width

    def __str__(self) -> str:
        return self.name


def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.  The overflow
    bounds used for signed multiplication are derived for C division,
    which truncates toward zero instead.
    """
    q, r = divmod(a, b)
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

INT8 = IntType("int8", 8, signed=True)
INT16 = IntType("int16", 16, signed=True)
INT32 = IntType("int32", 32, signed=True)
INT64 = IntType("int64", 64, signed=True)
UINT8 = IntType("uint8", 8, signed=False)
UINT16 = IntType("uint16", 16, signed=False)
UINT32 = IntType("uint32", 32, signed=False)
UINT64 = IntType("uint64", 64, signed=False)

# Unsigned type used for memory extents; as wide as a pointer.
SIZE_T = IntType("size_t", struct.calcsize("P") * 8, signed=False)

SIGNED_TYPES = (INT8, INT16, INT32, INT64)
UNSIGNED_TYPES = (UINT8, UINT16, UINT32, UINT64, SIZE_T)
