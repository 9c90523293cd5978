"""Rate parameters snapshot and fixed-point constants."""

from __future__ import annotations

from dataclasses import dataclass

from gringotts.errors import InvalidParameters

SCALE = 10**18
COIN = 10**18

ROUNDING_FLOOR = 'floor'
ROUNDING_CEIL = 'ceil'
ROUNDING_MODES = (ROUNDING_FLOOR, ROUNDING_CEIL)

# Registry initialisation values of the deployed bank.
DEFAULT_UNIT_INTEREST = 1015 * 10**15
DEFAULT_PENALTY_MULTIPLIER = 3


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RateParameters:
    """Interest and penalty parameters read once from the settings registry.

    unit_interest is a fixed-point value scaled by SCALE. The rounding fields
    choose how KTON issuance and early-redemption charges are rounded to whole
    smallest units.
    """

    unit_interest: int = DEFAULT_UNIT_INTEREST
    penalty_multiplier: int = DEFAULT_PENALTY_MULTIPLIER
    kton_rounding: str = ROUNDING_FLOOR
    penalty_rounding: str = ROUNDING_CEIL

    def __post_init__(self) -> None:
        if not _is_int(self.unit_interest) or self.unit_interest <= 0:
            raise InvalidParameters(f'unit_interest must be a positive integer, got {self.unit_interest!r}')
        if not _is_int(self.penalty_multiplier) or self.penalty_multiplier < 1:
            raise InvalidParameters(
                f'penalty_multiplier must be an integer >= 1, got {self.penalty_multiplier!r}'
            )
        for name in ('kton_rounding', 'penalty_rounding'):
            mode = getattr(self, name)
            if mode not in ROUNDING_MODES:
                raise InvalidParameters(f'{name} must be one of {ROUNDING_MODES}, got {mode!r}')
