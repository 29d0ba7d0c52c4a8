"""
Tests for the verifying factory.

A correct instantiation must come out of the factory; deliberately
broken ones (the naive formulas the checked algorithms replace) must
be rejected with a counterexample.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from pydantic import ValidationError

from safe_arith.arithmetic import TypedArithmetic
from safe_arith.bounds import INT8, INT64, UINT8, UINT16, UINT32, UINT64, IntType
from safe_arith.config import DEFAULT_SETTINGS, VerificationSettings
from safe_arith.errors import ErrorKind
from safe_arith.factory import (
    ArithmeticFactory,
    VerificationError,
    VerificationReport,
    VerificationResult,
    edge_values,
)
from safe_arith.result import Err, Ok


# ---------------------------------------------------------------------------
# Broken implementations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WrappingMult(TypedArithmetic):
    """Multiplies first and silently wraps, like unchecked C code."""

    def mult(self, *operands):
        product = 1
        for x in operands:
            product = self.int_type.wrap(product * x)
        return Ok(product)


@dataclass(frozen=True)
class NaiveDivideUp(TypedArithmetic):
    """Uses (a + b - 1) / b, which wraps for large a."""

    def divide_up(self, a, b):
        if b == 0:
            return Err(ErrorKind.DIVISION_BY_ZERO, "Division by zero")
        return Ok(self.int_type.wrap(a + b - 1) // b)


@dataclass(frozen=True)
class UnsignedDivisionForSigned(TypedArithmetic):
    """Applies the unsigned division pre-check to signed operands."""

    def mult(self, a, b):
        t = self.int_type
        if a == 0 or b <= t.hi // a:
            return Ok(t.wrap(a * b))
        return Err(ErrorKind.OVERFLOW, "overflow")


@dataclass(frozen=True)
class RaisingAdd(TypedArithmetic):
    def add(self, a, b):
        raise OverflowError("should have returned Err")


# ===================================================================
# CREATE
# ===================================================================

class TestCreate:

    def test_int8_exhaustive(self):
        ops = ArithmeticFactory.create(INT8)
        assert ops.int_type is INT8

    def test_uint8_exhaustive(self):
        assert ArithmeticFactory.create(UINT8).int_type is UINT8

    @pytest.mark.parametrize("int_type", [UINT16, UINT32, UINT64, INT64], ids=str)
    def test_wide_types_sampled(self, int_type, quick_settings):
        ops = ArithmeticFactory.create(int_type, quick_settings)
        assert isinstance(ops, TypedArithmetic)

    def test_custom_width(self, quick_settings):
        t = IntType("int12", 12, signed=True)
        assert ArithmeticFactory.create(t, quick_settings).int_type == t


# ===================================================================
# VERIFY - broken implementations are caught
# ===================================================================

class TestBrokenImplementations:

    def test_wrapping_mult_rejected(self, quick_settings):
        report = ArithmeticFactory.verify(WrappingMult(UINT8), quick_settings)
        assert not report.passed
        failed = {r.property_name for r in report.failures}
        assert "mult.fails_iff_unrepresentable" in failed
        assert all(name.startswith("mult.") for name in failed)

    def test_naive_divide_up_rejected(self, quick_settings):
        report = ArithmeticFactory.verify(NaiveDivideUp(UINT8), quick_settings)
        failed = {r.property_name for r in report.failures}
        assert "divide_up.exact_on_success" in failed

    def test_unsigned_check_on_signed_rejected(self, quick_settings):
        report = ArithmeticFactory.verify(
            UnsignedDivisionForSigned(INT8), quick_settings
        )
        assert "mult.fails_iff_unrepresentable" in {
            r.property_name for r in report.failures
        }

    def test_raising_operation_is_a_failure(self, quick_settings):
        report = ArithmeticFactory.verify(RaisingAdd(INT8), quick_settings)
        failures = [r for r in report.failures if r.property_name.startswith("add.")]
        assert failures
        assert "raised" in failures[0].detail

    def test_counterexample_recorded(self, quick_settings):
        report = ArithmeticFactory.verify(WrappingMult(UINT8), quick_settings)
        failure = report.failures[0]
        a, b = failure.counterexample
        assert a * b > UINT8.hi

    def test_verification_error_carries_report(self):
        report = VerificationReport(
            spec_name="uint8",
            results=[VerificationResult("mult.zero", passed=False, counterexample=(3,))],
        )
        err = VerificationError(report)
        assert err.report is report
        assert "mult.zero" in str(err)

    def test_failures_logged(self, quick_settings, caplog):
        with caplog.at_level("WARNING", logger="safe_arith.factory"):
            ArithmeticFactory.verify(WrappingMult(UINT8), quick_settings)
        assert "mult." in caplog.text


# ===================================================================
# CONVERSIONS
# ===================================================================

class TestVerifyConversion:

    @pytest.mark.parametrize("src, dest", [
        (UINT16, UINT8), (UINT8, UINT16), (UINT64, UINT32), (UINT32, UINT64),
        (UINT32, INT8),
    ], ids=str)
    def test_conversions_pass(self, src, dest, quick_settings):
        report = ArithmeticFactory.verify_conversion(src, dest, quick_settings)
        assert report.passed, report.summary()

    def test_report_name(self, quick_settings):
        report = ArithmeticFactory.verify_conversion(UINT32, UINT8, quick_settings)
        assert report.spec_name == "convert_uint32_to_uint8"


# ===================================================================
# REPORTS AND SAMPLING
# ===================================================================

class TestReportsAndSampling:

    def test_summary_format(self, quick_settings):
        report = ArithmeticFactory.verify(TypedArithmetic(UINT16), quick_settings)
        text = report.summary()
        assert text.startswith("--- uint16 ---")
        assert "[PASS] add.exact_on_success" in text
        assert text.endswith("=> ALL PASSED")

    def test_exhaustive_counts(self):
        report = ArithmeticFactory.verify(TypedArithmetic(INT8))
        by_name = {r.property_name: r for r in report.results}
        assert by_name["add.exact_on_success"].tests_run == 256 * 256
        assert by_name["add.identity"].tests_run == 256

    def test_sample_counts(self, quick_settings):
        report = ArithmeticFactory.verify(TypedArithmetic(UINT32), quick_settings)
        by_name = {r.property_name: r for r in report.results}
        assert by_name["add.exact_on_success"].tests_run == quick_settings.sample_count
        # edge combinations alone exceed the budget for arity 3
        assert by_name["mult.associativity"].tests_run == len(edge_values(UINT32)) ** 3

    def test_edge_values_in_range(self):
        for t in (INT8, UINT8, UINT32, INT64):
            values = edge_values(t)
            assert t.lo in values and t.hi in values and 0 in values
            assert all(t.contains(v) for v in values)
            assert values == sorted(set(values))

    def test_edge_values_signed_include_minus_one(self):
        assert -1 in edge_values(INT64)
        assert -1 not in edge_values(UINT64)


# ===================================================================
# SETTINGS
# ===================================================================

class TestSettings:

    def test_defaults(self):
        assert DEFAULT_SETTINGS.exhaustive_limit == 70_000
        assert DEFAULT_SETTINGS.sample_count == 10_000
        assert DEFAULT_SETTINGS.seed == 0

    @pytest.mark.parametrize("field, value", [
        ("exhaustive_limit", 0),
        ("exhaustive_limit", 10**9),
        ("sample_count", -1),
    ])
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            VerificationSettings(**{field: value})

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_SETTINGS.sample_count = 1

    def test_random_seed_allowed(self):
        assert VerificationSettings(seed=None).seed is None
