import pandas as pd
import pytest

from gringotts.calculations.penalty import (
    early_redemption_penalty,
    forfeited_kton,
    remaining_fraction,
    remaining_ticks,
)
from gringotts.models.rates import COIN, RateParameters

DAY_NS = 24 * 60 * 60 * 10**9


def test_remaining_ticks_over_lock() -> None:
    remaining, total = remaining_ticks('2025-01-01', '2025-02-01', '2025-01-25')
    assert total == 31 * DAY_NS
    assert remaining == 7 * DAY_NS


def test_remaining_is_zero_at_and_after_maturity() -> None:
    assert remaining_ticks('2025-01-01', '2025-02-01', '2025-02-01')[0] == 0
    assert remaining_ticks('2025-01-01', '2025-02-01', '2025-06-01')[0] == 0


def test_remaining_fraction_is_one_at_creation() -> None:
    assert remaining_fraction('2025-01-01', '2025-02-01', '2025-01-01') == 1.0


def test_remaining_ticks_rejects_empty_lock() -> None:
    with pytest.raises(ValueError):
        remaining_ticks('2025-01-01', '2025-01-01', '2025-01-01')


def test_penalty_is_proportional_and_rounded_up() -> None:
    params = RateParameters()
    principal = 100 * COIN
    penalty = early_redemption_penalty(principal, 7, 31, params)
    assert penalty == -(-(principal * 3 * 7) // 31)
    assert 0 < penalty < principal


def test_penalty_is_capped_at_principal() -> None:
    assert early_redemption_penalty(100 * COIN, 31, 31, RateParameters()) == 100 * COIN


def test_penalty_is_positive_for_tiny_remaining_share() -> None:
    assert early_redemption_penalty(100, 1, 10**15, RateParameters()) == 1


def test_no_penalty_once_lock_elapsed() -> None:
    assert early_redemption_penalty(100 * COIN, 0, 31, RateParameters()) == 0


def test_penalty_never_exceeds_multiplier_bound() -> None:
    params = RateParameters(penalty_multiplier=1)
    principal = 1_000 * COIN
    for remaining in [1, 10, 15, 30, 31]:
        penalty = early_redemption_penalty(principal, remaining, 31, params)
        assert 0 < penalty <= principal * params.penalty_multiplier


def test_forfeited_kton_is_unearned_share() -> None:
    params = RateParameters()
    issued = 1015 * 10**17
    assert forfeited_kton(issued, 31, 31, params) == issued
    assert forfeited_kton(issued, 7, 31, params) == -(-(issued * 7) // 31)
    assert forfeited_kton(issued, 0, 31, params) == 0
    assert forfeited_kton(0, 7, 31, params) == 0


def test_remaining_ticks_accepts_timestamps() -> None:
    created = pd.Timestamp('2025-03-01 12:00')
    remaining, total = remaining_ticks(created, created + pd.Timedelta(days=10), created + pd.Timedelta(days=4))
    assert remaining * 10 == total * 6


def test_floor_rounding_still_charges_one_unit_before_maturity() -> None:
    params = RateParameters(penalty_multiplier=1, penalty_rounding='floor')
    assert early_redemption_penalty(1, 1, 31 * DAY_NS, params) == 1
    assert early_redemption_penalty(100, 1, 31, params) == 3
    assert early_redemption_penalty(1, 0, 31 * DAY_NS, params) == 0
