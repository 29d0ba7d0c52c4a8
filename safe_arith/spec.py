"""Machine-readable contracts for the checked operations.

Each operation is specified as a collection of:
- postconditions: what the outcome must satisfy for given inputs,
  judged against an exact big-integer oracle
- algebraic properties: relationships between several calls that must
  hold

The factory and the conformance tests iterate over these contracts;
neither hard-codes what a correct answer looks like.

Layers
------
OperationSpec   per-operation contract (postconditions/properties)
ArithmeticSpec  every operation an integer type supports
build_spec()    contracts for a ``TypedArithmetic`` instantiation
conversion_spec()  contract for a conversion between two types
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from safe_arith.arithmetic import checked_convert_unsigned
from safe_arith.bounds import IntType
from safe_arith.errors import ErrorKind
from safe_arith.result import Ok, Result

Expected = Union[int, ErrorKind]


# ---------------------------------------------------------------------------
# Spec building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]      # (*args, outcome) -> bool


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free input values the check needs
    check: Callable[..., bool]      # (impl, *args) -> bool


@dataclass(frozen=True)
class OperationSpec:
    name: str
    arity: int
    postconditions: list[Postcondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class ArithmeticSpec:
    """Complete contract for one integer type."""

    int_type: IntType
    operations: dict[str, OperationSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out


# ---------------------------------------------------------------------------
# Helpers used inside the spec predicates
# ---------------------------------------------------------------------------

def same_outcome(x: Result, y: Result) -> bool:
    """Two outcomes agree on success, and on the value or error kind."""
    if x.is_ok != y.is_ok:
        return False
    if x.is_ok:
        return x.value == y.value
    return x.kind == y.kind


def ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def _oracle_postconditions(
    dest: IntType,
    oracle: Callable[..., Expected],
    range_error: ErrorKind = ErrorKind.OVERFLOW,
) -> list[Postcondition]:
    """Postconditions comparing an outcome with the exact answer.

    ``oracle`` computes the mathematically exact result with unbounded
    integers, or the ErrorKind for inputs that have no result at all.
    An exact result outside ``dest`` must fail with ``range_error``.
    """

    def expected(args) -> Expected:
        exact = oracle(*args)
        if isinstance(exact, ErrorKind) or dest.contains(exact):
            return exact
        return range_error

    def exact_on_success(*call) -> bool:
        *args, outcome = call
        return not outcome.is_ok or outcome.value == expected(args)

    def fails_iff_unrepresentable(*call) -> bool:
        *args, outcome = call
        return outcome.is_ok == (not isinstance(expected(args), ErrorKind))

    def error_kind(*call) -> bool:
        *args, outcome = call
        return outcome.is_ok or outcome.kind == expected(args)

    return [
        Postcondition(
            "exact_on_success",
            "A successful outcome equals the exact result",
            exact_on_success,
        ),
        Postcondition(
            "fails_iff_unrepresentable",
            f"Succeeds exactly when the exact result fits in {dest}",
            fails_iff_unrepresentable,
        ),
        Postcondition(
            "error_kind",
            "A failed outcome carries the expected error kind",
            error_kind,
        ),
    ]


# ---------------------------------------------------------------------------
# Per-operation contracts
# ---------------------------------------------------------------------------

def _add_spec(t: IntType) -> OperationSpec:
    return OperationSpec(
        name="add",
        arity=2,
        postconditions=_oracle_postconditions(t, lambda a, b: a + b),
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) and add(b, a) agree", 2,
                lambda ops, a, b: same_outcome(ops.add(a, b), ops.add(b, a)),
            ),
            AlgebraicProperty(
                "identity", "add(a, 0) == a", 1,
                lambda ops, a: ops.add(a, 0) == Ok(a),
            ),
        ],
    )


def _sub_spec(t: IntType) -> OperationSpec:
    def add_sub_inverse(ops, a, b) -> bool:
        total = ops.add(a, b)
        return not total.is_ok or ops.sub(total.value, b) == Ok(a)

    return OperationSpec(
        name="sub",
        arity=2,
        postconditions=_oracle_postconditions(t, lambda a, b: a - b),
        properties=[
            AlgebraicProperty(
                "self_inverse", "sub(a, a) == 0", 1,
                lambda ops, a: ops.sub(a, a) == Ok(0),
            ),
            AlgebraicProperty(
                "add_sub_inverse", "sub(add(a, b), b) == a when the sum fits", 2,
                add_sub_inverse,
            ),
        ],
    )


def _mult_spec(t: IntType) -> OperationSpec:
    def chain(ops, x: Result, y: int) -> Result:
        return ops.mult(x.value, y) if x.is_ok else x

    def associativity(ops, a, b, c) -> bool:
        lhs = chain(ops, ops.mult(a, b), c)
        rhs_inner = ops.mult(b, c)
        rhs = ops.mult(a, rhs_inner.value) if rhs_inner.is_ok else rhs_inner
        if t.signed:
            # A product past hi can come back into range times -1, so
            # only outcomes with representable intermediates compare.
            if not (ops.mult(a, b).is_ok and rhs_inner.is_ok):
                return True
        elif 0 in (a, b, c):
            # An overflowing pair times zero is a success on one side only.
            return True
        return same_outcome(lhs, rhs)

    def left_fold(ops, a, b, c) -> bool:
        return same_outcome(ops.mult(a, b, c), chain(ops, ops.mult(a, b), c))

    return OperationSpec(
        name="mult",
        arity=2,
        postconditions=_oracle_postconditions(t, lambda a, b: a * b),
        properties=[
            AlgebraicProperty(
                "commutativity", "mult(a, b) and mult(b, a) agree", 2,
                lambda ops, a, b: same_outcome(ops.mult(a, b), ops.mult(b, a)),
            ),
            AlgebraicProperty(
                "identity", "mult(a, 1) == a", 1,
                lambda ops, a: ops.mult(a, 1) == Ok(a),
            ),
            AlgebraicProperty(
                "zero", "mult(a, 0) == 0", 1,
                lambda ops, a: ops.mult(a, 0) == Ok(0),
            ),
            AlgebraicProperty(
                "associativity",
                "(a * b) * c and a * (b * c) agree on outcome", 3,
                associativity,
            ),
            AlgebraicProperty(
                "left_fold", "mult(a, b, c) == mult(mult(a, b), c)", 3,
                left_fold,
            ),
        ],
    )


def _divide_up_spec(t: IntType) -> OperationSpec:
    def bracket(ops, a, b) -> bool:
        if b == 0:
            return True
        r = ops.divide_up(a, b).value
        return r * b >= a and (r == 0 or (r - 1) * b < a)

    return OperationSpec(
        name="divide_up",
        arity=2,
        postconditions=_oracle_postconditions(
            t,
            lambda a, b: ErrorKind.DIVISION_BY_ZERO if b == 0 else ceil_div(a, b),
        ),
        properties=[
            AlgebraicProperty(
                "bracket", "(r - 1) * b < a <= r * b", 2, bracket,
            ),
            AlgebraicProperty(
                "zero_numerator", "divide_up(0, b) == 0 for b != 0", 1,
                lambda ops, b: b == 0 or ops.divide_up(0, b) == Ok(0),
            ),
        ],
    )


def _round_up_spec(t: IntType) -> OperationSpec:
    def smallest_multiple(ops, val, m) -> bool:
        outcome = ops.round_up_to_multiple(val, m)
        if m == 0 or not outcome.is_ok:
            return True
        r = outcome.value
        return r % m == 0 and r >= val and r - m < val

    return OperationSpec(
        name="round_up_to_multiple",
        arity=2,
        postconditions=_oracle_postconditions(
            t,
            lambda v, m: (
                ErrorKind.INVALID_ARGUMENT if m == 0 else ceil_div(v, m) * m
            ),
        ),
        properties=[
            AlgebraicProperty(
                "smallest_multiple",
                "Result is the least multiple of m not below val", 2,
                smallest_multiple,
            ),
            AlgebraicProperty(
                "zero_multiple_fails", "round_up_to_multiple(v, 0) fails", 1,
                lambda ops, v: not ops.round_up_to_multiple(v, 0).is_ok,
            ),
        ],
    )


# ---------------------------------------------------------------------------
# Spec builders
# ---------------------------------------------------------------------------

def build_spec(int_type: IntType) -> ArithmeticSpec:
    """Construct the contracts for every operation ``int_type`` supports."""
    operations = [_add_spec(int_type), _sub_spec(int_type), _mult_spec(int_type)]
    if not int_type.signed:
        operations += [_divide_up_spec(int_type), _round_up_spec(int_type)]
    return ArithmeticSpec(
        int_type=int_type,
        operations={op.name: op for op in operations},
    )


def conversion_spec(src: IntType, dest: IntType) -> OperationSpec:
    """Contract for converting values of ``src`` to ``dest``.

    The implementation under test is a callable ``value -> Result``.
    """

    def round_trip(convert, x) -> bool:
        outcome = convert(x)
        if not outcome.is_ok:
            return True
        if dest.signed:
            return src.wrap(outcome.value) == x
        return checked_convert_unsigned(outcome.value, dest, src) == Ok(x)

    return OperationSpec(
        name=f"convert_{src}_to_{dest}",
        arity=1,
        postconditions=_oracle_postconditions(
            dest, lambda x: x, range_error=ErrorKind.TRUNCATION,
        ),
        properties=[
            AlgebraicProperty(
                "round_trip",
                f"Converting back to {src} restores the value", 1,
                round_trip,
            ),
        ],
    )
