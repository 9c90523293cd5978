"""Excel loader and schema normalization."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import pandas as pd

from gringotts.data.validator import validate_operations, validate_settings
from gringotts.models.rates import COIN, ROUNDING_CEIL, ROUNDING_FLOOR, RateParameters
from gringotts.utils.logging import get_logger

LOGGER = get_logger(__name__)

SETTINGS_SHEET = 'Settings'
OPERATIONS_SHEET = 'Operations'

UNIT_INTEREST_KEY = 'UINT_BANK_UNIT_INTEREST'
PENALTY_MULTIPLIER_KEY = 'UINT_BANK_PENALTY_MULTIPLIER'
KTON_ROUNDING_KEY = 'KTON_ROUNDING'
PENALTY_ROUNDING_KEY = 'PENALTY_ROUNDING'

OPERATIONS_COLUMN_MAP = {
    'operation': 'op',
    'account': 'account_id',
    'months': 'lock_months',
    'timestamp': 'at',
    'ref': 'deposit_ref',
}


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out.columns = [str(c).strip().lower() for c in out.columns]
    return out


def parse_exact_int(value: object) -> int:
    """Parse an integer without passing through float arithmetic."""
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f'Not a number: {value!r}') from exc
    if parsed != parsed.to_integral_value():
        raise ValueError(f'Expected an integer, got {value!r}')
    return int(parsed)


def to_smallest_units(amount: object, unit: int = COIN) -> int:
    """Convert a whole-token amount such as '100' or '0.5' to smallest units."""
    try:
        parsed = Decimal(str(amount).strip()) * unit
    except InvalidOperation as exc:
        raise ValueError(f'Not a token amount: {amount!r}') from exc
    if parsed != parsed.to_integral_value():
        raise ValueError(f'Amount {amount!r} is finer than the smallest unit')
    return int(parsed)


def rate_parameters_from_settings(settings_df: pd.DataFrame) -> RateParameters:
    """Build a RateParameters snapshot from registry-style key/value rows."""
    values = dict(zip(settings_df['key'].astype(str), settings_df['value']))
    kton_rounding = values.get(KTON_ROUNDING_KEY)
    penalty_rounding = values.get(PENALTY_ROUNDING_KEY)
    return RateParameters(
        unit_interest=parse_exact_int(values[UNIT_INTEREST_KEY]),
        penalty_multiplier=parse_exact_int(values[PENALTY_MULTIPLIER_KEY]),
        kton_rounding=ROUNDING_FLOOR if pd.isna(kton_rounding) else str(kton_rounding).strip().lower(),
        penalty_rounding=ROUNDING_CEIL if pd.isna(penalty_rounding) else str(penalty_rounding).strip().lower(),
    )


def normalize_operations(ops_raw: pd.DataFrame) -> pd.DataFrame:
    """Normalize column names and types of an operations table."""
    ops = _normalize_columns(ops_raw).rename(columns=OPERATIONS_COLUMN_MAP)
    missing = [col for col in ['op', 'at'] if col not in ops.columns]
    if missing:
        raise ValueError(f'Missing required operation columns: {missing}')
    for col in ['account_id', 'amount', 'lock_months', 'deposit_ref']:
        if col not in ops.columns:
            ops[col] = pd.NA
    ops['op'] = ops['op'].astype(str).str.strip().str.lower()
    ops['account_id'] = ops['account_id'].where(ops['account_id'].isna(), ops['account_id'].astype(str).str.strip())
    ops.loc[ops['account_id'].isin(['', 'nan', 'None']), 'account_id'] = pd.NA
    ops['at'] = pd.to_datetime(ops['at'])
    ops['amount'] = pd.to_numeric(ops['amount'], errors='coerce')
    ops['lock_months'] = pd.to_numeric(ops['lock_months'], errors='coerce').astype('Int64')
    ops['deposit_ref'] = pd.to_numeric(ops['deposit_ref'], errors='coerce').astype('Int64')
    return ops.reset_index(drop=True)


def load_input_workbook(path: str) -> tuple[RateParameters, pd.DataFrame]:
    """Load, normalize, and validate the settings and operations sheets."""
    settings_raw = pd.read_excel(path, sheet_name=SETTINGS_SHEET, dtype=str)
    ops_raw = pd.read_excel(path, sheet_name=OPERATIONS_SHEET)

    settings = _normalize_columns(settings_raw)
    if 'key' in settings.columns:
        settings['key'] = settings['key'].astype(str).str.strip().str.upper()

    settings_warnings = validate_settings(settings)
    ops = normalize_operations(ops_raw)
    ops_warnings = validate_operations(ops)

    for warning in settings_warnings + ops_warnings:
        LOGGER.warning(warning)

    rate_params = rate_parameters_from_settings(settings)
    LOGGER.info(
        'Loaded %s operations from %s (unit interest %s, penalty multiplier %s)',
        len(ops),
        path,
        rate_params.unit_interest,
        rate_params.penalty_multiplier,
    )
    return rate_params, ops
