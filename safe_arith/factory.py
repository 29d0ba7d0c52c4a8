"""
The verifying factory.

The factory does NOT just construct a ``TypedArithmetic`` - it checks
the instantiation against its contracts before releasing it.

Flow:
  1. Caller requests the checked operations for an ``IntType``.
  2. Factory instantiates them.
  3. Factory runs every postcondition and property in ``build_spec``.
  4. If verification passes  -> return the instantiation.
     If verification fails   -> raise, never hand out a broken instance.

Narrow types (8 bits) are checked exhaustively for binary operations.
Wider types are checked on every combination of edge values plus a
seeded random sample.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from safe_arith.arithmetic import (
    TypedArithmetic,
    checked_convert_to_signed,
    checked_convert_unsigned,
)
from safe_arith.bounds import IntType
from safe_arith.config import DEFAULT_SETTINGS, VerificationSettings
from safe_arith.result import Result
from safe_arith.spec import (
    AlgebraicProperty,
    OperationSpec,
    build_spec,
    conversion_spec,
)

logger = logging.getLogger(__name__)

# Exceptions a checked operation must never raise for in-range operands.
_DEFECTS = (TypeError, ValueError, ArithmeticError)


@dataclass
class VerificationResult:
    """Outcome of verifying one postcondition or property."""

    property_name: str
    passed: bool
    counterexample: tuple | None = None
    tests_run: int = 0
    detail: str = ""

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        detail = f"  ({self.detail})" if self.detail else ""
        return f"[{status}] {self.property_name} ({self.tests_run} tests){ce}{detail}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one type or conversion."""

    spec_name: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[VerificationResult]:
        return [r for r in self.results if not r.passed]

    def summary(self) -> str:
        lines = [f"--- {self.spec_name} ---"]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when an implementation fails its contracts."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class ArithmeticFactory:
    """Produces ``TypedArithmetic`` instances that are proven correct."""

    @classmethod
    def create(
        cls, int_type: IntType, settings: Optional[VerificationSettings] = None
    ) -> TypedArithmetic:
        """Build, verify, and return the checked operations for ``int_type``."""
        ops = TypedArithmetic(int_type)
        report = cls.verify(ops, settings)
        if not report.passed:
            raise VerificationError(report)
        return ops

    @classmethod
    def verify(
        cls, ops: Any, settings: Optional[VerificationSettings] = None
    ) -> VerificationReport:
        """Check ``ops`` against the contracts for its ``int_type``.

        ``ops`` only needs the ``TypedArithmetic`` interface, so
        deliberately broken variants can be fed through as well.
        """
        settings = settings or DEFAULT_SETTINGS
        int_type = ops.int_type
        spec = build_spec(int_type)
        rng = random.Random(settings.seed)

        report = VerificationReport(spec_name=str(int_type))
        for op_spec in spec.operations.values():
            report.results.extend(cls._verify_operation(
                op_spec, getattr(ops, op_spec.name), ops, int_type, settings, rng,
            ))
        cls._log_report(report)
        return report

    @classmethod
    def verify_conversion(
        cls,
        src: IntType,
        dest: IntType,
        settings: Optional[VerificationSettings] = None,
    ) -> VerificationReport:
        """Check the conversion from ``src`` to ``dest``.

        Unsigned destinations use the round-trip conversion; signed
        destinations use the bound-comparison conversion.
        """
        settings = settings or DEFAULT_SETTINGS
        if dest.signed:
            def convert(v: int) -> Result:
                return checked_convert_to_signed(v, src, dest)
        else:
            def convert(v: int) -> Result:
                return checked_convert_unsigned(v, src, dest)

        op_spec = conversion_spec(src, dest)
        report = VerificationReport(spec_name=op_spec.name)
        report.results.extend(cls._verify_operation(
            op_spec, convert, convert, src, settings, random.Random(settings.seed),
        ))
        cls._log_report(report)
        return report

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_operation(
        cls,
        op_spec: OperationSpec,
        operation: Callable[..., Result],
        impl: Any,
        int_type: IntType,
        settings: VerificationSettings,
        rng: random.Random,
    ) -> list[VerificationResult]:
        results = [
            VerificationResult(property_name=f"{op_spec.name}.{post.name}", passed=True)
            for post in op_spec.postconditions
        ]
        for combo in _inputs(int_type, op_spec.arity, settings, rng):
            try:
                outcome = operation(*combo)
            except _DEFECTS as exc:
                for result in results:
                    if result.passed:
                        result.tests_run += 1
                        _fail(result, combo, f"raised {exc!r}")
                break
            for post, result in zip(op_spec.postconditions, results):
                if not result.passed:
                    continue
                result.tests_run += 1
                if not post.check(*combo, outcome):
                    _fail(result, combo, f"outcome {outcome}")
            if not any(r.passed for r in results):
                break

        for prop in op_spec.properties:
            results.append(
                cls._verify_property(op_spec.name, prop, impl, int_type, settings, rng)
            )
        return results

    @classmethod
    def _verify_property(
        cls,
        op_name: str,
        prop: AlgebraicProperty,
        impl: Any,
        int_type: IntType,
        settings: VerificationSettings,
        rng: random.Random,
    ) -> VerificationResult:
        result = VerificationResult(property_name=f"{op_name}.{prop.name}", passed=True)
        for combo in _inputs(int_type, prop.arity, settings, rng):
            result.tests_run += 1
            try:
                holds = prop.check(impl, *combo)
            except _DEFECTS as exc:
                _fail(result, combo, f"raised {exc!r}")
                break
            if not holds:
                _fail(result, combo, prop.description)
                break
        return result

    @staticmethod
    def _log_report(report: VerificationReport) -> None:
        checks = sum(r.tests_run for r in report.results)
        if report.passed:
            logger.debug("%s: %d checks passed", report.spec_name, checks)
            return
        for r in report.failures:
            logger.warning(
                "%s: %s failed on %s (%s)",
                report.spec_name, r.property_name, r.counterexample, r.detail,
            )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fail(result: VerificationResult, combo: tuple, detail: str) -> None:
    result.passed = False
    result.counterexample = combo
    result.detail = detail


def _inputs(
    int_type: IntType,
    arity: int,
    settings: VerificationSettings,
    rng: random.Random,
) -> Iterable[tuple[int, ...]]:
    if int_type.width ** arity <= settings.exhaustive_limit:
        return itertools.product(int_type.all_values(), repeat=arity)
    return _generate_samples(int_type, arity, settings.sample_count, rng)


def edge_values(int_type: IntType) -> list[int]:
    """Values where overflow checks are most likely to be off by one."""
    lo, hi = int_type.lo, int_type.hi
    half = 1 << (int_type.bits // 2)   # squares cross hi around here
    candidates = [
        lo, lo + 1, -half, -1, 0, 1, 2,
        half - 1, half, half + 1,
        hi // 2, hi // 2 + 1, hi - 1, hi,
    ]
    return sorted({v for v in candidates if int_type.contains(v)})


def _generate_samples(
    int_type: IntType, arity: int, count: int, rng: random.Random
) -> list[tuple[int, ...]]:
    """Generate edge-case + random samples for property checking."""
    samples: list[tuple[int, ...]] = list(
        itertools.product(edge_values(int_type), repeat=arity)
    )
    while len(samples) < count:
        samples.append(tuple(
            rng.randint(int_type.lo, int_type.hi) for _ in range(arity)
        ))
    return samples
