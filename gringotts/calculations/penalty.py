"""Early-redemption penalty logic."""

from __future__ import annotations

from datetime import date, datetime

import pandas as pd

from gringotts.calculations.interest import divide
from gringotts.models.rates import RateParameters


def remaining_ticks(
    created_at: pd.Timestamp | datetime | date | str,
    maturity: pd.Timestamp | datetime | date | str,
    as_of: pd.Timestamp | datetime | date | str,
) -> tuple[int, int]:
    """Return (remaining, total) lock time in nanoseconds.

    remaining / total is the unexpired share of the lock, in (0, 1] for any
    as_of in [created_at, maturity). Matured deposits report remaining == 0.
    """
    start = pd.Timestamp(created_at)
    end = pd.Timestamp(maturity)
    now = pd.Timestamp(as_of)
    total = (end - start).value
    if total <= 0:
        raise ValueError('maturity must be after created_at')
    remaining = max((end - now).value, 0)
    return min(remaining, total), total


def remaining_fraction(created_at, maturity, as_of) -> float:
    """Unexpired share of the lock as a float, for display only."""
    remaining, total = remaining_ticks(created_at, maturity, as_of)
    return remaining / total


def early_redemption_penalty(
    principal: int,
    remaining: int,
    total: int,
    rate_params: RateParameters,
) -> int:
    """RING withheld on early redemption.

    penalty = principal * penalty_multiplier * remaining / total, rounded with
    rate_params.penalty_rounding, at least one smallest unit while any lock
    time remains, and capped at principal so the payout is never negative.
    Zero once the lock has fully elapsed.
    """
    if remaining <= 0:
        return 0
    raw = divide(
        int(principal) * rate_params.penalty_multiplier * remaining,
        total,
        rate_params.penalty_rounding,
    )
    return min(max(raw, 1), int(principal))


def forfeited_kton(issued: int, remaining: int, total: int, rate_params: RateParameters) -> int:
    """KTON burned on early redemption: the unearned share of the issuance."""
    if remaining <= 0 or issued <= 0:
        return 0
    return min(divide(int(issued) * remaining, total, rate_params.penalty_rounding), int(issued))
