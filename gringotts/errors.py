"""Typed ledger errors.

Every failure raised by the ledger engine derives from GringottsError, so callers
can catch the whole family at once:

    try:
        engine.redeem(deposit_id, now)
    except GringottsError as exc:
        record_failure(exc)

The concrete classes also derive from ValueError or KeyError so generic callers
keep working.
"""

from __future__ import annotations


class GringottsError(Exception):
    """Base exception for all ledger errors."""


class InvalidParameters(GringottsError, ValueError):
    """Bad rate parameters or bad operation arguments."""


class InsufficientFunds(GringottsError, ValueError):
    """RING balance is smaller than the requested principal."""


class InsufficientKTON(GringottsError, ValueError):
    """KTON balance cannot cover the amount burned on early redemption."""


class NotFound(GringottsError, KeyError):
    """Unknown deposit id."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ''


class AlreadyRedeemed(GringottsError, ValueError):
    """Deposit has already been settled."""
