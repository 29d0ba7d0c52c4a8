"""
Tagged outcomes for checked operations.

Every checked operation returns either ``Ok(value)`` or
``Err(kind, message)`` instead of raising.  The two public calling
conventions are thin views over that value:

- result form:  ``outcome.unwrap()`` returns the value or raises
- status form:  ``outcome.store(slot)`` writes the value and returns
  True, or returns False and leaves the slot alone
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from safe_arith.errors import ErrorKind, error_for


@dataclass
class Slot:
    """A caller-owned output cell for the status-form API."""

    value: Optional[int] = None


@dataclass(frozen=True)
class Ok:
    value: int

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> int:
        return self.value

    def unwrap_or(self, default: int) -> int:
        return self.value

    def store(self, slot: Slot) -> bool:
        slot.value = self.value
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> int:
        raise error_for(self.kind, self.message)

    def unwrap_or(self, default: int) -> int:
        return default

    def store(self, slot: Slot) -> bool:
        return False


Result = Union[Ok, Err]
