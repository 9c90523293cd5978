"""Deposit domain model and settlement results."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass
class Deposit:
    """A time-locked RING deposit. Only the settlement fields ever change."""

    deposit_id: int
    account_id: str
    principal: int
    lock_months: int
    created_at: pd.Timestamp
    maturity: pd.Timestamp
    issued_kton: int
    redeemed: bool = False
    redeemed_at: pd.Timestamp | None = None
    penalty: int = 0
    kton_burned: int = 0

    @property
    def status(self) -> str:
        return 'redeemed' if self.redeemed else 'active'

    def is_matured(self, as_of: pd.Timestamp) -> bool:
        return pd.Timestamp(as_of) >= self.maturity


@dataclass(frozen=True)
class DepositReceipt:
    deposit_id: int
    issued_kton: int
    maturity: pd.Timestamp


@dataclass(frozen=True)
class RedemptionResult:
    deposit_id: int
    net_ring: int
    penalty: int
    kton_burned: int
    matured: bool
