"""Counterexample search over every preset integer type.

Run directly::

    python -m safe_arith [-v]

Exits with status 1 if any type or conversion fails its contracts.
"""
from __future__ import annotations

import argparse
import itertools
import logging
import sys

from safe_arith.arithmetic import TypedArithmetic
from safe_arith.bounds import INT32, SIGNED_TYPES, UINT32, UNSIGNED_TYPES
from safe_arith.factory import ArithmeticFactory, VerificationReport

logger = logging.getLogger("safe_arith")


def run_search() -> list[VerificationReport]:
    """Verify every preset type and every conversion between presets."""
    reports = [
        ArithmeticFactory.verify(TypedArithmetic(t))
        for t in SIGNED_TYPES + UNSIGNED_TYPES
    ]
    for src, dest in itertools.product(UNSIGNED_TYPES, repeat=2):
        reports.append(ArithmeticFactory.verify_conversion(src, dest))
    reports.append(ArithmeticFactory.verify_conversion(UINT32, INT32))
    return reports


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="safe_arith", description=__doc__.splitlines()[0])
    parser.add_argument("-v", "--verbose", action="store_true", help="log every check")
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    reports = run_search()
    for report in reports:
        print(report.summary())

    failed = [r.spec_name for r in reports if not r.passed]
    print("\n" + "=" * 40)
    if failed:
        logger.error("counterexamples found in: %s", ", ".join(failed))
        print("SOME CONFIGURATIONS HAD COUNTEREXAMPLES")
        sys.exit(1)
    print("ALL CONFIGURATIONS PASSED")


if __name__ == "__main__":
    main()
