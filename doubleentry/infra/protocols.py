"""Collaborator protocols consumed by the ledger core.

The core depends on these abstractions; storage code implements them.
Infrastructure failures are visible values (Err[PersistenceError]), never
exceptions the core has to catch.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from doubleentry.core.errors import AccountNotFoundError, PersistenceError
from doubleentry.core.result import Err, Ok
from doubleentry.ledger.accounts import Account
from doubleentry.ledger.amounts import Amount
from doubleentry.ledger.transactions import Transaction


@runtime_checkable
class AccountStore(Protocol):
    """Chart of accounts keyed by unique account name."""

    def find_account_by_name(
        self, name: str,
    ) -> Ok[Account] | Err[AccountNotFoundError]: ...


@runtime_checkable
class PersistenceBoundary(Protocol):
    """Durable storage for committed transactions.

    Invariants:
      - commit() is atomic: either every amount of the transaction becomes
        visible to balance reads, or none does.
      - commit() returns the transaction id it assigned.
      - clone() returns an in-memory copy with every identity stripped.
    """

    def commit(
        self, transaction: Transaction,
    ) -> Ok[str] | Err[PersistenceError]: ...

    def clone(self, record: Amount | Transaction) -> Amount | Transaction: ...
