"""Tests for doubleentry.infra.memory_adapter: in-memory test doubles."""

from __future__ import annotations

import pytest

from doubleentry.core.errors import AccountNotFoundError, PersistenceError
from doubleentry.core.result import Err, Ok
from doubleentry.infra.memory_adapter import InMemoryAccountStore, InMemoryPersistence
from doubleentry.infra.protocols import AccountStore, PersistenceBoundary
from doubleentry.ledger.accounts import Account
from doubleentry.ledger.amounts import Amount
from doubleentry.ledger.transactions import Transaction


class TestProtocols:
    def test_adapters_satisfy_protocols(self) -> None:
        assert isinstance(InMemoryAccountStore(), AccountStore)
        assert isinstance(InMemoryPersistence(), PersistenceBoundary)


class TestInMemoryAccountStore:
    def test_find(self, store: InMemoryAccountStore, cash: Account) -> None:
        assert store.find_account_by_name("Cash") == Ok(cash)

    def test_not_found(self, store: InMemoryAccountStore) -> None:
        result = store.find_account_by_name("cash")
        assert isinstance(result, Err)
        assert isinstance(result.error, AccountNotFoundError)

    def test_duplicate_name(self, store: InMemoryAccountStore, cash: Account) -> None:
        assert isinstance(store.add_account(cash), Err)
        assert len(store.accounts()) == 3

    def test_duplicate_name_in_constructor(self, cash: Account) -> None:
        with pytest.raises(TypeError, match="already registered: Cash"):
            InMemoryAccountStore((cash, cash))


class TestInMemoryPersistence:
    def test_assigns_ids(self, payment: Transaction, persistence: InMemoryPersistence) -> None:
        assert persistence.commit(payment) == Ok("TX-1")
        assert [a.amount_id for a in payment.amounts] == ["TX-1/1", "TX-1/2"]

    def test_refuses_amount_without_account(
        self, persistence: InMemoryPersistence, cash: Account,
    ) -> None:
        tx = Transaction("Orphan")
        tx.add_debit(Amount.debit(cash, "1"))
        tx.add_credit(Amount.credit(None, "1"))
        result = persistence.commit(tx)
        assert isinstance(result, Err)
        assert isinstance(result.error, PersistenceError)
        assert persistence.amounts() == ()

    def test_amounts_for(
        self, payment: Transaction, persistence: InMemoryPersistence, cash: Account,
    ) -> None:
        persistence.commit(payment)
        assert persistence.amounts_for(cash) == (payment.debit_amounts[0],)

    def test_clone_strips_identity(
        self, payment: Transaction, persistence: InMemoryPersistence,
    ) -> None:
        persistence.commit(payment)
        amount_copy = persistence.clone(payment.debit_amounts[0])
        tx_copy = persistence.clone(payment)
        assert isinstance(amount_copy, Amount)
        assert amount_copy.amount_id is None
        assert isinstance(tx_copy, Transaction)
        assert all(a.amount_id is None for a in tx_copy.amounts)
