"""In-memory implementations of the AccountStore and PersistenceBoundary protocols.

Test doubles that let the suite run without a database. None of them are
production code.
"""

from __future__ import annotations

import threading
from itertools import count
from typing import final

from doubleentry.core.errors import AccountNotFoundError, PersistenceError
from doubleentry.core.result import Err, Ok
from doubleentry.core.types import UtcDatetime
from doubleentry.ledger.accounts import Account
from doubleentry.ledger.amounts import Amount
from doubleentry.ledger.transactions import Transaction


def _persistence_error(operation: str, detail: str) -> PersistenceError:
    return PersistenceError(
        message=detail,
        code="PERSISTENCE_ERROR",
        timestamp=UtcDatetime.now(),
        source=f"memory_adapter.{operation}",
        operation=operation,
    )


@final
class InMemoryAccountStore:
    """Accounts keyed by unique name."""

    def __init__(self, accounts: tuple[Account, ...] = ()) -> None:
        self._by_name: dict[str, Account] = {}
        for account in accounts:
            match self.add_account(account):
                case Err(e):
                    raise TypeError(e)
                case Ok():
                    pass

    def add_account(self, account: Account) -> Ok[None] | Err[str]:
        name = account.name.value
        if name in self._by_name:
            return Err(f"Account name already registered: {name}")
        self._by_name[name] = account
        return Ok(None)

    def find_account_by_name(self, name: str) -> Ok[Account] | Err[AccountNotFoundError]:
        account = self._by_name.get(name)
        if account is not None:
            return Ok(account)
        return Err(AccountNotFoundError(
            message=f"Account not found: {name}",
            code="ACCOUNT_NOT_FOUND",
            timestamp=UtcDatetime.now(),
            source="memory_adapter.find_account_by_name",
            name=name,
        ))

    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._by_name.values())


@final
class InMemoryPersistence:
    """Append-only store of committed transactions.

    Commits are serialized by a lock and publish all amounts of a
    transaction in a single step.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._transactions: list[Transaction] = []
        self._ids = count(1)
        self.fail_next: str | None = None  # test hook: next commit fails with this detail

    def commit(self, transaction: Transaction) -> Ok[str] | Err[PersistenceError]:
        with self._lock:
            if self.fail_next is not None:
                detail, self.fail_next = self.fail_next, None
                return Err(_persistence_error("commit", detail))
            if transaction.transaction_id is not None:
                return Err(_persistence_error(
                    "commit", f"Transaction already stored: {transaction.transaction_id}",
                ))
            for amount in transaction.amounts:
                if amount.account is None or amount.transaction is not transaction:
                    return Err(_persistence_error(
                        "commit", f"Amount without account or transaction: {amount!r}",
                    ))
            tx_id = f"TX-{next(self._ids)}"
            for n, amount in enumerate(transaction.amounts, start=1):
                amount.amount_id = f"{tx_id}/{n}"
            self._transactions.append(transaction)
            return Ok(tx_id)

    def clone(self, record: Amount | Transaction) -> Amount | Transaction:
        return record.detached_copy()

    def transactions(self) -> tuple[Transaction, ...]:
        with self._lock:
            return tuple(self._transactions)

    def amounts(self) -> tuple[Amount, ...]:
        """Every committed amount, in commit order."""
        with self._lock:
            return tuple(a for tx in self._transactions for a in tx.amounts)

    def amounts_for(self, account: Account) -> tuple[Amount, ...]:
        aid = account.account_id
        return tuple(
            a for a in self.amounts()
            if a.account is not None and a.account.account_id == aid
        )

    def count(self) -> int:
        """Test-only helper."""
        return len(self._transactions)
