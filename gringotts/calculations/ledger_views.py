"""DataFrame views and schedules over ledger deposits."""

from __future__ import annotations

import pandas as pd

from gringotts.calculations.interest import issued_kton
from gringotts.calculations.penalty import early_redemption_penalty, forfeited_kton, remaining_ticks
from gringotts.models.rates import RateParameters
from gringotts.utils.date_utils import add_calendar_months, to_timestamp


def active_deposits_snapshot(deposits_df: pd.DataFrame, as_of_date: pd.Timestamp) -> pd.DataFrame:
    """Return unredeemed deposits still inside their lock at a specific date.

    A deposit is active at t when created_at <= t < maturity.
    """
    if deposits_df.empty:
        return deposits_df.copy()
    as_of = to_timestamp(as_of_date)
    created = pd.to_datetime(deposits_df['created_at'])
    maturity = pd.to_datetime(deposits_df['maturity'])
    mask = (created <= as_of) & (as_of < maturity) & (deposits_df['status'] != 'redeemed')
    return deposits_df.loc[mask].copy()


def locked_principal(active_df: pd.DataFrame) -> int:
    """Exact RING principal held by a set of deposits."""
    if active_df.empty:
        return 0
    return sum(int(v) for v in active_df['principal'])


def kton_issuance_table(principal: int, rate_params: RateParameters, max_months: int = 36) -> pd.DataFrame:
    """KTON issued for principal at every lock length from 1 to max_months."""
    months = list(range(1, int(max_months) + 1))
    issued = [issued_kton(principal, m, rate_params) for m in months]
    return pd.DataFrame(
        {
            'lock_months': months,
            'principal': pd.Series([int(principal)] * len(months), dtype=object),
            'issued_kton': pd.Series(issued, dtype=object),
        }
    )


def penalty_schedule(
    principal: int,
    lock_months: int,
    created_at: pd.Timestamp,
    rate_params: RateParameters,
    freq: str = 'D',
) -> pd.DataFrame:
    """Settlement outcome when redeeming at each date from creation to maturity.

    Rows are generated at freq from created_at; the maturity date itself is
    always the last row and carries zero penalty.
    """
    start = to_timestamp(created_at)
    maturity = add_calendar_months(start, lock_months)
    issued = issued_kton(principal, lock_months, rate_params)
    dates = list(pd.date_range(start=start, end=maturity, freq=freq))
    if not dates or dates[-1] != maturity:
        dates.append(maturity)

    rows: list[dict[str, object]] = []
    for when in dates:
        remaining, total = remaining_ticks(start, maturity, when)
        penalty = early_redemption_penalty(principal, remaining, total, rate_params)
        rows.append(
            {
                'redeem_at': when,
                'remaining_fraction': remaining / total,
                'penalty': penalty,
                'net_ring': int(principal) - penalty,
                'kton_burned': forfeited_kton(issued, remaining, total, rate_params),
            }
        )
    out = pd.DataFrame(rows)
    for col in ['penalty', 'net_ring', 'kton_burned']:
        out[col] = out[col].astype(object)
    return out


def maturity_ladder(deposits_df: pd.DataFrame) -> pd.DataFrame:
    """Outstanding principal and deposit count grouped by maturity month end."""
    columns = ['maturity_month_end', 'outstanding_principal', 'deposit_count']
    if deposits_df.empty:
        return pd.DataFrame(columns=columns)
    active = deposits_df[deposits_df['status'] != 'redeemed'].copy()
    if active.empty:
        return pd.DataFrame(columns=columns)
    active['maturity_month_end'] = pd.to_datetime(active['maturity']).dt.normalize() + pd.offsets.MonthEnd(0)
    grouped = (
        active.groupby('maturity_month_end')
        .agg(
            outstanding_principal=('principal', lambda s: sum(int(v) for v in s)),
            deposit_count=('deposit_id', 'count'),
        )
        .reset_index()
        .sort_values('maturity_month_end')
        .reset_index(drop=True)
    )
    grouped['outstanding_principal'] = grouped['outstanding_principal'].astype(object)
    return grouped[columns]
