"""Input data validation for settings and operations tables."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import pandas as pd

from gringotts.models.rates import COIN

SETTINGS_REQUIRED_COLUMNS = ['key', 'value']
SETTINGS_REQUIRED_KEYS = ['UINT_BANK_UNIT_INTEREST', 'UINT_BANK_PENALTY_MULTIPLIER']
SETTINGS_OPTIONAL_KEYS = ['KTON_ROUNDING', 'PENALTY_ROUNDING']

OPERATIONS_REQUIRED_COLUMNS = ['op', 'account_id', 'amount', 'lock_months', 'at', 'deposit_ref']
VALID_OPS = {'mint', 'deposit', 'redeem'}


def _missing_columns(df: pd.DataFrame, required: list[str]) -> list[str]:
    cols = set(df.columns)
    return [col for col in required if col not in cols]


def validate_settings(df: pd.DataFrame) -> list[str]:
    """Validate normalized settings rows and return non-fatal warnings."""
    missing = _missing_columns(df, SETTINGS_REQUIRED_COLUMNS)
    if missing:
        raise ValueError(f'Missing required settings columns: {missing}')

    keys = df['key'].astype(str).tolist()
    missing_keys = [k for k in SETTINGS_REQUIRED_KEYS if k not in keys]
    if missing_keys:
        raise ValueError(f'Missing required settings keys: {missing_keys}')

    if df['key'].duplicated().any():
        raise ValueError('Duplicate settings keys found.')

    if df.loc[df['key'].isin(SETTINGS_REQUIRED_KEYS), 'value'].isna().any():
        raise ValueError('Settings contain nulls for required keys.')

    warnings: list[str] = []
    known = set(SETTINGS_REQUIRED_KEYS) | set(SETTINGS_OPTIONAL_KEYS)
    unknown = sorted(k for k in keys if k not in known)
    if unknown:
        warnings.append(f'Ignoring unknown settings keys: {unknown}')
    return warnings


def validate_operations(df: pd.DataFrame) -> list[str]:
    """Validate normalized operations rows and return non-fatal warnings."""
    missing = _missing_columns(df, OPERATIONS_REQUIRED_COLUMNS)
    if missing:
        raise ValueError(f'Missing required operation columns: {missing}')

    warnings: list[str] = []
    if df.empty:
        warnings.append('Operations sheet is empty.')
        return warnings

    unknown_ops = sorted(set(df['op']) - VALID_OPS)
    if unknown_ops:
        raise ValueError(f'Unknown operation types: {unknown_ops}')

    if not pd.api.types.is_datetime64_any_dtype(df['at']):
        raise ValueError('Column at must be datetime64 dtype.')
    if df['at'].isna().any():
        raise ValueError('Operations contain nulls in column at.')

    funded = df['op'].isin(['mint', 'deposit'])
    if df.loc[funded, ['account_id', 'amount']].isna().any().any():
        raise ValueError('Mint and deposit operations require account_id and amount.')
    if df.loc[df['op'] == 'deposit', 'lock_months'].isna().any():
        raise ValueError('Deposit operations require lock_months.')

    redeems = df[df['op'] == 'redeem']
    if redeems['deposit_ref'].isna().any():
        raise ValueError('Redeem operations require deposit_ref.')
    for row_no, ref in redeems['deposit_ref'].items():
        ref = int(ref)
        if ref < 1 or ref > len(df) or df['op'].iloc[ref - 1] != 'deposit':
            raise ValueError(f'Row {row_no + 1}: deposit_ref {ref} does not point at a deposit operation.')
        if ref - 1 >= row_no:
            raise ValueError(f'Row {row_no + 1}: deposit_ref {ref} refers to a later operation.')

    if not df['at'].is_monotonic_increasing:
        warnings.append('Operations are not in chronological order; they are replayed in row order.')

    for row_no, amount in df.loc[funded, 'amount'].items():
        try:
            units = Decimal(str(amount)) * COIN
        except InvalidOperation as exc:
            raise ValueError(f'Row {row_no + 1}: amount {amount!r} is not a number.') from exc
        if units != units.to_integral_value():
            raise ValueError(f'Row {row_no + 1}: amount {amount!r} is finer than the smallest unit.')

    non_positive = int((df.loc[funded, 'amount'] <= 0).sum())
    if non_positive:
        warnings.append(f'{non_positive} mint/deposit operations have non-positive amount and will fail.')

    return warnings
