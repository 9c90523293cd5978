"""Deposit ledger engine for RING deposits and KTON issuance."""

from __future__ import annotations

from dataclasses import replace
import threading

import pandas as pd

from gringotts.calculations.interest import issued_kton
from gringotts.calculations.penalty import early_redemption_penalty, forfeited_kton, remaining_ticks
from gringotts.errors import (
    AlreadyRedeemed,
    InsufficientFunds,
    InsufficientKTON,
    InvalidParameters,
    NotFound,
)
from gringotts.models.deposit import Deposit, DepositReceipt, RedemptionResult
from gringotts.models.rates import RateParameters
from gringotts.models.token import TokenLedger
from gringotts.utils.date_utils import TimestampLike, add_calendar_months, to_timestamp
from gringotts.utils.logging import get_logger

LOGGER = get_logger(__name__)

DEPOSIT_COLUMNS = [
    'deposit_id',
    'account_id',
    'principal',
    'lock_months',
    'created_at',
    'maturity',
    'issued_kton',
    'status',
    'redeemed_at',
    'penalty',
    'kton_burned',
]

ACCOUNT_COLUMNS = ['account_id', 'ring_balance', 'kton_balance', 'locked_ring', 'active_deposits']


def _require_account(account_id: str) -> str:
    if not isinstance(account_id, str) or not account_id.strip():
        raise InvalidParameters('account_id must be a non-empty string')
    return account_id


def _require_positive_int(name: str, value: int, minimum: int = 1) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        raise InvalidParameters(f'{name} must be an integer >= {minimum}, got {value!r}')
    return value


def _to_now(value: TimestampLike) -> pd.Timestamp:
    try:
        return to_timestamp(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameters(str(exc)) from exc


class LedgerEngine:
    """Single in-process ledger of RING, KTON and time-locked deposits.

    Every mutating call runs under one lock and finishes all checks before the
    first balance changes, so a call either applies completely or raises.
    """

    def __init__(self, rate_params: RateParameters) -> None:
        if not isinstance(rate_params, RateParameters):
            raise InvalidParameters('rate_params must be a RateParameters instance')
        if rate_params.unit_interest <= 0 or rate_params.penalty_multiplier < 1:
            raise InvalidParameters('unit_interest must be > 0 and penalty_multiplier >= 1')
        self.rate_params = rate_params
        self.ring = TokenLedger('RING')
        self.kton = TokenLedger('KTON')
        self._deposits: dict[int, Deposit] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def mint_ring(self, account_id: str, amount: int) -> int:
        """Credit freshly minted RING to an account and return its new balance."""
        try:
            _require_account(account_id)
            _require_positive_int('amount', amount)
        except InvalidParameters as exc:
            LOGGER.warning('Rejected mint for %r: %s', account_id, exc)
            raise
        with self._lock:
            self.ring.credit(account_id, amount)
            balance = self.ring.balance_of(account_id)
        LOGGER.debug('Minted %s RING to %s', amount, account_id)
        return balance

    def deposit(self, account_id: str, principal: int, lock_months: int, now: TimestampLike) -> DepositReceipt:
        """Lock principal RING for lock_months calendar months and issue KTON up front."""
        try:
            _require_account(account_id)
            _require_positive_int('principal', principal)
            _require_positive_int('lock_months', lock_months)
            created_at = _to_now(now)
        except InvalidParameters as exc:
            LOGGER.warning('Rejected deposit by %r: %s', account_id, exc)
            raise
        maturity = add_calendar_months(created_at, lock_months)
        kton_amount = issued_kton(principal, lock_months, self.rate_params)

        with self._lock:
            balance = self.ring.balance_of(account_id)
            if balance < principal:
                LOGGER.warning(
                    'Rejected deposit of %s RING by %s: balance is %s', principal, account_id, balance
                )
                raise InsufficientFunds(
                    f'{account_id} has {balance} RING, cannot deposit {principal}'
                )
            deposit_id = self._next_id
            record = Deposit(
                deposit_id=deposit_id,
                account_id=account_id,
                principal=principal,
                lock_months=lock_months,
                created_at=created_at,
                maturity=maturity,
                issued_kton=kton_amount,
            )
            self.ring.debit(account_id, principal)
            self.kton.credit(account_id, kton_amount)
            self._deposits[deposit_id] = record
            self._next_id += 1

        LOGGER.info(
            'Deposit %s: %s locked %s RING for %s months, issued %s KTON, matures %s',
            deposit_id,
            account_id,
            principal,
            lock_months,
            kton_amount,
            maturity.isoformat(),
        )
        return DepositReceipt(deposit_id=deposit_id, issued_kton=kton_amount, maturity=maturity)

    def redeem(self, deposit_id: int, now: TimestampLike) -> RedemptionResult:
        """Settle a deposit: principal at maturity, principal minus penalty before."""
        try:
            as_of = _to_now(now)
        except InvalidParameters as exc:
            LOGGER.warning('Rejected redemption of deposit %s: %s', deposit_id, exc)
            raise
        with self._lock:
            record = self._deposits.get(deposit_id)
            if record is None:
                LOGGER.warning('Rejected redemption of unknown deposit %r', deposit_id)
                raise NotFound(f'Unknown deposit id {deposit_id!r}')
            if record.redeemed:
                LOGGER.warning('Rejected second redemption of deposit %s', deposit_id)
                raise AlreadyRedeemed(f'Deposit {deposit_id} was already redeemed at {record.redeemed_at}')
            if as_of < record.created_at:
                LOGGER.warning(
                    'Rejected redemption of deposit %s at %s: before its creation', deposit_id, as_of
                )
                raise InvalidParameters(
                    f'Redemption time {as_of} precedes deposit {deposit_id} creation {record.created_at}'
                )

            matured = record.is_matured(as_of)
            if matured:
                penalty = 0
                burn = 0
            else:
                remaining, total = remaining_ticks(record.created_at, record.maturity, as_of)
                penalty = early_redemption_penalty(record.principal, remaining, total, self.rate_params)
                burn = forfeited_kton(record.issued_kton, remaining, total, self.rate_params)
                kton_balance = self.kton.balance_of(record.account_id)
                if kton_balance < burn:
                    LOGGER.warning(
                        'Rejected early redemption of deposit %s: %s KTON needed, %s held',
                        deposit_id,
                        burn,
                        kton_balance,
                    )
                    raise InsufficientKTON(
                        f'{record.account_id} holds {kton_balance} KTON, early redemption burns {burn}'
                    )

            net_ring = record.principal - penalty
            if burn:
                self.kton.debit(record.account_id, burn)
            self.ring.credit(record.account_id, net_ring)
            record.redeemed = True
            record.redeemed_at = as_of
            record.penalty = penalty
            record.kton_burned = burn

        LOGGER.info(
            'Redeemed deposit %s (%s): returned %s RING, penalty %s, burned %s KTON',
            deposit_id,
            'matured' if matured else 'early',
            net_ring,
            penalty,
            burn,
        )
        return RedemptionResult(
            deposit_id=deposit_id,
            net_ring=net_ring,
            penalty=penalty,
            kton_burned=burn,
            matured=matured,
        )

    def ring_balance_of(self, account_id: str) -> int:
        return self.ring.balance_of(account_id)

    def kton_balance_of(self, account_id: str) -> int:
        return self.kton.balance_of(account_id)

    def get_deposit(self, deposit_id: int) -> Deposit:
        """Return a copy of a deposit record."""
        with self._lock:
            record = self._deposits.get(deposit_id)
            if record is None:
                raise NotFound(f'Unknown deposit id {deposit_id!r}')
            return replace(record)

    def deposits_of(self, account_id: str) -> list[Deposit]:
        with self._lock:
            return [replace(d) for d in self._deposits.values() if d.account_id == account_id]

    def total_locked_ring(self) -> int:
        with self._lock:
            return sum(d.principal for d in self._deposits.values() if not d.redeemed)

    def kton_supply(self) -> int:
        return self.kton.total_supply()

    def deposits_frame(self) -> pd.DataFrame:
        """All deposits as a DataFrame, one row per deposit id."""
        with self._lock:
            rows = [
                {
                    'deposit_id': d.deposit_id,
                    'account_id': d.account_id,
                    'principal': d.principal,
                    'lock_months': d.lock_months,
                    'created_at': d.created_at,
                    'maturity': d.maturity,
                    'issued_kton': d.issued_kton,
                    'status': d.status,
                    'redeemed_at': d.redeemed_at,
                    'penalty': d.penalty,
                    'kton_burned': d.kton_burned,
                }
                for d in self._deposits.values()
            ]
        if not rows:
            return pd.DataFrame(columns=DEPOSIT_COLUMNS)
        # object dtype keeps amounts above int64 range exact
        out = pd.DataFrame(rows, columns=DEPOSIT_COLUMNS)
        for col in ['principal', 'issued_kton', 'penalty', 'kton_burned']:
            out[col] = out[col].astype(object)
        return out

    def accounts_frame(self) -> pd.DataFrame:
        """Per-account balances with locked principal and active deposit count."""
        with self._lock:
            accounts = sorted(set(self.ring.accounts()) | set(self.kton.accounts()))
            rows = []
            for account_id in accounts:
                active = [d for d in self._deposits.values() if d.account_id == account_id and not d.redeemed]
                rows.append(
                    {
                        'account_id': account_id,
                        'ring_balance': self.ring.balance_of(account_id),
                        'kton_balance': self.kton.balance_of(account_id),
                        'locked_ring': sum(d.principal for d in active),
                        'active_deposits': len(active),
                    }
                )
        if not rows:
            return pd.DataFrame(columns=ACCOUNT_COLUMNS)
        out = pd.DataFrame(rows, columns=ACCOUNT_COLUMNS)
        for col in ['ring_balance', 'kton_balance', 'locked_ring']:
            out[col] = out[col].astype(object)
        return out
