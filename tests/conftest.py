"""Shared fixtures for the checked-arithmetic tests."""

from __future__ import annotations

import pytest

from safe_arith.arithmetic import TypedArithmetic
from safe_arith.bounds import INT8, INT32, INT64, UINT8, UINT32
from safe_arith.config import VerificationSettings
from safe_arith.result import Slot

SENTINEL = 0x5EED


@pytest.fixture
def slot() -> Slot:
    """An output slot pre-loaded with a value no operation produces here."""
    return Slot(SENTINEL)


@pytest.fixture
def int8_ops() -> TypedArithmetic:
    return TypedArithmetic(INT8)


@pytest.fixture
def uint8_ops() -> TypedArithmetic:
    return TypedArithmetic(UINT8)


@pytest.fixture
def int32_ops() -> TypedArithmetic:
    return TypedArithmetic(INT32)


@pytest.fixture
def int64_ops() -> TypedArithmetic:
    return TypedArithmetic(INT64)


@pytest.fixture
def uint32_ops() -> TypedArithmetic:
    return TypedArithmetic(UINT32)


@pytest.fixture
def quick_settings() -> VerificationSettings:
    """Sampling-only settings that keep factory tests fast."""
    return VerificationSettings(exhaustive_limit=300, sample_count=500, seed=7)
