"""KTON issuance arithmetic."""

from __future__ import annotations

from gringotts.models.rates import ROUNDING_CEIL, SCALE, RateParameters


def divide(numerator: int, denominator: int, rounding: str) -> int:
    """Integer division of non-negative values with explicit rounding."""
    if denominator <= 0:
        raise ValueError(f'denominator must be positive, got {denominator}')
    if rounding == ROUNDING_CEIL:
        return -(-numerator // denominator)
    return numerator // denominator


def issued_kton(principal: int, lock_months: int, rate_params: RateParameters) -> int:
    """KTON credited up front for locking principal RING for lock_months months.

    issued = principal * unit_interest * lock_months / SCALE, rounded with
    rate_params.kton_rounding (floor by default).
    """
    numerator = int(principal) * rate_params.unit_interest * int(lock_months)
    return divide(numerator, SCALE, rate_params.kton_rounding)
