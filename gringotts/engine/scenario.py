"""Replay an operations table against a ledger engine."""

from __future__ import annotations

import pandas as pd

from gringotts.data.loader import to_smallest_units
from gringotts.engine.ledger import LedgerEngine
from gringotts.errors import GringottsError, InvalidParameters
from gringotts.utils.logging import get_logger

LOGGER = get_logger(__name__)

EVENT_COLUMNS = [
    'row',
    'op',
    'account_id',
    'at',
    'status',
    'deposit_id',
    'amount',
    'issued_kton',
    'net_ring',
    'penalty',
    'kton_burned',
    'message',
]


def _amount_units(value: object) -> int:
    try:
        return to_smallest_units(value)
    except ValueError as exc:
        raise InvalidParameters(str(exc)) from exc


def _apply_row(
    engine: LedgerEngine,
    row: pd.Series,
    deposit_ids_by_row: dict[int, int],
) -> dict[str, object]:
    op = row['op']
    at = pd.Timestamp(row['at'])
    out: dict[str, object] = {}
    if op == 'mint':
        amount = _amount_units(row['amount'])
        out['amount'] = amount
        engine.mint_ring(str(row['account_id']), amount)
    elif op == 'deposit':
        amount = _amount_units(row['amount'])
        out['amount'] = amount
        receipt = engine.deposit(str(row['account_id']), amount, int(row['lock_months']), at)
        out['deposit_id'] = receipt.deposit_id
        out['issued_kton'] = receipt.issued_kton
    elif op == 'redeem':
        ref = int(row['deposit_ref'])
        if ref not in deposit_ids_by_row:
            raise GringottsError(f'deposit_ref {ref} did not create a deposit')
        result = engine.redeem(deposit_ids_by_row[ref], at)
        out['deposit_id'] = result.deposit_id
        out['net_ring'] = result.net_ring
        out['penalty'] = result.penalty
        out['kton_burned'] = result.kton_burned
    else:
        raise ValueError(f'Unknown operation {op!r}')
    return out


def run_operations(engine: LedgerEngine, operations_df: pd.DataFrame) -> pd.DataFrame:
    """Replay operations in row order and return one event row per operation.

    Ledger errors are recorded in the event's status column and replay
    continues; anything else propagates.
    """
    deposit_ids_by_row: dict[int, int] = {}
    events: list[dict[str, object]] = []

    for position, (_, row) in enumerate(operations_df.iterrows(), start=1):
        account = row.get('account_id')
        event: dict[str, object] = {
            'row': position,
            'op': row['op'],
            'account_id': None if pd.isna(account) else str(account),
            'at': pd.Timestamp(row['at']),
            'status': 'ok',
            'message': '',
        }
        try:
            event.update(_apply_row(engine, row, deposit_ids_by_row))
        except GringottsError as exc:
            event['status'] = type(exc).__name__
            event['message'] = str(exc)
            LOGGER.info('Operation %s (%s) failed: %s', position, row['op'], exc)
        else:
            if row['op'] == 'deposit':
                deposit_ids_by_row[position] = int(event['deposit_id'])
        events.append(event)

    # object columns keep amounts above int64 range exact alongside missing values
    out = pd.DataFrame(
        {col: pd.Series([event.get(col) for event in events], dtype=object) for col in EVENT_COLUMNS}
    )
    out['row'] = out['row'].astype(int)
    out['at'] = pd.to_datetime(out['at'])
    return out
