import pytest

from gringotts.calculations.interest import divide, issued_kton
from gringotts.models.rates import COIN, SCALE, RateParameters


def test_issuance_truncates_smallest_units() -> None:
    # 100 * 1.015 = 101.5, floored to 101
    assert issued_kton(100, 1, RateParameters()) == 101


def test_issuance_for_whole_coins_is_exact() -> None:
    assert issued_kton(100 * COIN, 1, RateParameters()) == 1015 * 10**17


def test_issuance_scales_with_lock_months() -> None:
    params = RateParameters()
    for months in [1, 3, 12, 36]:
        principal = 12_345 * COIN + 6789
        assert issued_kton(principal, months, params) == principal * params.unit_interest * months // SCALE


def test_ceil_rounding_is_configurable() -> None:
    params = RateParameters(kton_rounding='ceil')
    assert issued_kton(100, 1, params) == 102
    assert issued_kton(100 * COIN, 1, params) == 1015 * 10**17


def test_small_rate_can_floor_to_zero() -> None:
    assert issued_kton(1, 1, RateParameters(unit_interest=10**17)) == 0


def test_divide_rounding_modes() -> None:
    assert divide(7, 2, 'floor') == 3
    assert divide(7, 2, 'ceil') == 4
    assert divide(8, 2, 'ceil') == 4
    with pytest.raises(ValueError):
        divide(1, 0, 'floor')
