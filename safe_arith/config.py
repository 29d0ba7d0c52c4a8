"""Tuning for the verification factory."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VerificationSettings(BaseModel):
    """How hard the factory works before releasing an implementation.

    An operation of arity ``n`` on a type with ``w`` values is checked
    exhaustively when ``w ** n <= exhaustive_limit``; otherwise every
    combination of edge values is checked and the rest of the budget,
    up to ``sample_count`` inputs, is filled with seeded random inputs.
    """

    model_config = ConfigDict(frozen=True)

    exhaustive_limit: int = Field(default=70_000, ge=1)
    sample_count: int = Field(default=10_000, ge=0)
    seed: int | None = Field(
        default=0,
        description="Seed for the random fill; None draws a fresh seed",
    )

    @field_validator("exhaustive_limit")
    @classmethod
    def limit_is_sane(cls, v: int) -> int:
        if v > 50_000_000:
            raise ValueError(f"exhaustive_limit {v} would take hours to check")
        return v


DEFAULT_SETTINGS = VerificationSettings()
