import pandas as pd

from gringotts.data.loader import normalize_operations
from gringotts.engine.ledger import LedgerEngine
from gringotts.engine.scenario import EVENT_COLUMNS, run_operations
from gringotts.models.rates import COIN, RateParameters


def _ops(rows: list[dict[str, object]]) -> pd.DataFrame:
    return normalize_operations(pd.DataFrame(rows))


def test_bank_scenario_replay() -> None:
    ops = _ops(
        [
            {'op': 'mint', 'account_id': 'investor', 'amount': 10000, 'at': '2025-01-01'},
            {'op': 'deposit', 'account_id': 'investor', 'amount': 100, 'lock_months': 1, 'at': '2025-01-01'},
            {'op': 'deposit', 'account_id': 'investor', 'amount': 50, 'lock_months': 12, 'at': '2025-01-02'},
            {'op': 'redeem', 'deposit_ref': 2, 'at': '2025-02-01'},
            {'op': 'redeem', 'deposit_ref': 3, 'at': '2025-01-02'},
        ]
    )
    engine = LedgerEngine(RateParameters())

    events = run_operations(engine, ops)

    assert events.columns.tolist() == EVENT_COLUMNS
    assert events['status'].tolist() == ['ok'] * 5
    assert events['row'].tolist() == [1, 2, 3, 4, 5]
    assert events.loc[1, 'issued_kton'] == 1015 * 10**17
    assert events.loc[3, 'net_ring'] == 100 * COIN
    assert events.loc[3, 'penalty'] == 0
    assert events.loc[4, 'penalty'] == 50 * COIN
    assert events.loc[4, 'net_ring'] == 0
    assert engine.ring_balance_of('investor') == 9_950 * COIN


def test_ledger_errors_are_recorded_and_replay_continues() -> None:
    ops = _ops(
        [
            {'op': 'mint', 'account_id': 'a', 'amount': 10, 'at': '2025-01-01'},
            {'op': 'deposit', 'account_id': 'a', 'amount': 20, 'lock_months': 1, 'at': '2025-01-01'},
            {'op': 'deposit', 'account_id': 'a', 'amount': 5, 'lock_months': 1, 'at': '2025-01-01'},
            {'op': 'redeem', 'deposit_ref': 3, 'at': '2025-02-01'},
            {'op': 'redeem', 'deposit_ref': 3, 'at': '2025-02-02'},
            {'op': 'redeem', 'deposit_ref': 2, 'at': '2025-02-02'},
        ]
    )
    engine = LedgerEngine(RateParameters())

    events = run_operations(engine, ops)

    assert events['status'].tolist() == [
        'ok',
        'InsufficientFunds',
        'ok',
        'ok',
        'AlreadyRedeemed',
        'GringottsError',
    ]
    assert 'cannot deposit' in events.loc[1, 'message']
    assert engine.ring_balance_of('a') == 10 * COIN


def test_empty_operations() -> None:
    events = run_operations(LedgerEngine(RateParameters()), _ops([{'op': 'mint', 'account_id': 'a', 'amount': 1, 'at': '2025-01-01'}]).iloc[0:0])
    assert events.empty
    assert events.columns.tolist() == EVENT_COLUMNS


def test_sub_unit_amount_is_recorded_as_invalid_parameters() -> None:
    ops = _ops(
        [
            {'op': 'mint', 'account_id': 'a', 'amount': 1e-19, 'at': '2025-01-01'},
            {'op': 'mint', 'account_id': 'a', 'amount': 2, 'at': '2025-01-01'},
        ]
    )
    engine = LedgerEngine(RateParameters())

    events = run_operations(engine, ops)

    assert events['status'].tolist() == ['InvalidParameters', 'ok']
    assert 'finer than the smallest unit' in events.loc[0, 'message']
    assert engine.ring_balance_of('a') == 2 * COIN
