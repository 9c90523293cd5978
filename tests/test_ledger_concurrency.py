from concurrent.futures import ThreadPoolExecutor

import pandas as pd

from gringotts.engine.ledger import LedgerEngine
from gringotts.errors import AlreadyRedeemed, InsufficientFunds
from gringotts.models.rates import COIN, RateParameters


def test_concurrent_redemptions_settle_once() -> None:
    engine = LedgerEngine(RateParameters())
    engine.mint_ring('alice', 100 * COIN)
    receipt = engine.deposit('alice', 100 * COIN, 1, '2025-01-01')

    def attempt(_: int) -> str:
        try:
            engine.redeem(receipt.deposit_id, pd.Timestamp('2025-02-01'))
        except AlreadyRedeemed:
            return 'already'
        return 'ok'

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(32)))

    assert outcomes.count('ok') == 1
    assert outcomes.count('already') == 31
    assert engine.ring_balance_of('alice') == 100 * COIN


def test_concurrent_deposits_never_overdraw() -> None:
    engine = LedgerEngine(RateParameters())
    engine.mint_ring('bob', 10 * COIN)

    def attempt(_: int) -> bool:
        try:
            engine.deposit('bob', COIN, 1, '2025-01-01')
        except InsufficientFunds:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(40)))

    assert sum(outcomes) == 10
    assert engine.ring_balance_of('bob') == 0
    assert sorted(engine.deposits_frame()['deposit_id'].tolist()) == list(range(1, 11))
