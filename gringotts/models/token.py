"""Token balance map used for both RING and KTON."""

from __future__ import annotations

from dataclasses import dataclass, field

from gringotts.errors import InvalidParameters


@dataclass
class TokenLedger:
    """Non-negative integer balances keyed by account id.

    Accounts appear lazily on first credit and are never removed. The caller is
    responsible for checking balances before debiting; debit refuses to go
    negative rather than silently clamping.
    """

    symbol: str
    balances: dict[str, int] = field(default_factory=dict)

    def balance_of(self, account_id: str) -> int:
        return self.balances.get(account_id, 0)

    def credit(self, account_id: str, amount: int) -> None:
        if amount < 0:
            raise InvalidParameters(f'{self.symbol} credit must be non-negative, got {amount}')
        self.balances[account_id] = self.balance_of(account_id) + amount

    def debit(self, account_id: str, amount: int) -> None:
        if amount < 0:
            raise InvalidParameters(f'{self.symbol} debit must be non-negative, got {amount}')
        current = self.balance_of(account_id)
        if amount > current:
            raise InvalidParameters(
                f'{self.symbol} debit of {amount} exceeds balance {current} for {account_id}'
            )
        self.balances[account_id] = current - amount

    def total_supply(self) -> int:
        return sum(self.balances.values())

    def accounts(self) -> list[str]:
        return sorted(self.balances)
