import pytest

from gringotts.errors import GringottsError, InvalidParameters
from gringotts.models.rates import (
    DEFAULT_PENALTY_MULTIPLIER,
    DEFAULT_UNIT_INTEREST,
    RateParameters,
)


def test_defaults_match_registry_initialization() -> None:
    params = RateParameters()
    assert params.unit_interest == 1015 * 10**15
    assert params.penalty_multiplier == 3
    assert params.unit_interest == DEFAULT_UNIT_INTEREST
    assert params.penalty_multiplier == DEFAULT_PENALTY_MULTIPLIER
    assert params.kton_rounding == 'floor'
    assert params.penalty_rounding == 'ceil'


@pytest.mark.parametrize('unit_interest', [0, -1, 1.5, True])
def test_rejects_non_positive_or_non_integer_unit_interest(unit_interest) -> None:
    with pytest.raises(InvalidParameters, match='unit_interest'):
        RateParameters(unit_interest=unit_interest)


@pytest.mark.parametrize('multiplier', [0, -3, 2.0])
def test_rejects_penalty_multiplier_below_one(multiplier) -> None:
    with pytest.raises(InvalidParameters, match='penalty_multiplier'):
        RateParameters(penalty_multiplier=multiplier)


def test_rejects_unknown_rounding_mode() -> None:
    with pytest.raises(InvalidParameters, match='kton_rounding'):
        RateParameters(kton_rounding='nearest')


def test_invalid_parameters_is_value_error_and_ledger_error() -> None:
    with pytest.raises(ValueError):
        RateParameters(unit_interest=0)
    with pytest.raises(GringottsError):
        RateParameters(penalty_multiplier=0)
