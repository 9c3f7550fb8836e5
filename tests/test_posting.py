"""Tests for doubleentry.ledger.posting: the commit path."""

from __future__ import annotations

import io
import json
from decimal import Decimal

from doubleentry.core.errors import (
    IllegalTransitionError,
    PersistenceError,
    TransactionRejectedError,
    ViolationKind,
)
from doubleentry.core.logging_config import configure_logging
from doubleentry.core.result import Err, Ok
from doubleentry.infra.memory_adapter import InMemoryPersistence
from doubleentry.ledger.accounts import Account
from doubleentry.ledger.amounts import Amount
from doubleentry.ledger.balance import balance
from doubleentry.ledger.posting import commit
from doubleentry.ledger.transactions import Transaction, TransactionState


class TestCommit:
    def test_commit_valid(self, payment: Transaction, persistence: InMemoryPersistence) -> None:
        result = commit(payment, persistence)
        assert result == Ok(payment)
        assert payment.state is TransactionState.COMMITTED
        assert payment.transaction_id == "TX-1"
        assert all(a.amount_id is not None for a in payment.amounts)
        assert persistence.count() == 1

    def test_rejected_never_reaches_storage(self, persistence: InMemoryPersistence) -> None:
        tx = Transaction("")
        result = commit(tx, persistence)
        assert isinstance(result, Err)
        assert isinstance(result.error, TransactionRejectedError)
        assert result.error.violations == {
            ViolationKind.MISSING_DESCRIPTION,
            ViolationKind.NO_DEBIT_AMOUNTS,
            ViolationKind.NO_CREDIT_AMOUNTS,
        }
        assert tx.state is TransactionState.REJECTED
        assert persistence.count() == 0

    def test_revalidates_after_edit(
        self, payment: Transaction, persistence: InMemoryPersistence,
    ) -> None:
        payment.validate()
        payment.credit_amounts[0].set_value("900.00")
        result = commit(payment, persistence)
        assert isinstance(result, Err)
        assert result.error.violations == {ViolationKind.AMOUNTS_DO_NOT_BALANCE}
        assert persistence.count() == 0

    def test_storage_error_propagated_verbatim(
        self, payment: Transaction, persistence: InMemoryPersistence,
    ) -> None:
        persistence.fail_next = "disk full"
        result = commit(payment, persistence)
        assert isinstance(result, Err)
        assert isinstance(result.error, PersistenceError)
        assert result.error.message == "disk full"
        assert payment.state is TransactionState.VALIDATED
        assert payment.transaction_id is None

        assert isinstance(commit(payment, persistence), Ok)

    def test_double_commit_illegal(
        self, payment: Transaction, persistence: InMemoryPersistence,
    ) -> None:
        commit(payment, persistence)
        result = commit(payment, persistence)
        assert isinstance(result, Err)
        assert isinstance(result.error, IllegalTransitionError)
        assert persistence.count() == 1

    def test_committed_is_immutable(
        self, payment: Transaction, persistence: InMemoryPersistence, cash: Account,
    ) -> None:
        commit(payment, persistence)
        assert isinstance(payment.add_debit(Amount.debit(cash, "1")), Err)
        assert isinstance(payment.set_description("changed"), Err)
        assert payment.description == "Invoice payment"

    def test_balances_from_committed_history(
        self,
        payment: Transaction,
        persistence: InMemoryPersistence,
        cash: Account,
        receivables: Account,
    ) -> None:
        commit(payment, persistence)
        assert balance(cash, persistence.amounts()) == Decimal("1000.00")
        assert balance(receivables, persistence.amounts()) == Decimal("-1000.00")


class TestCommitLogging:
    def test_logs_commit_and_rejection(
        self, payment: Transaction, persistence: InMemoryPersistence,
    ) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)
        commit(Transaction("Empty"), persistence)
        commit(payment, persistence)

        events = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert [e["message"] for e in events] == ["transaction_rejected", "transaction_committed"]
        assert events[0]["violations"] == ["NoCreditAmounts", "NoDebitAmounts"]
        assert events[1]["transaction_id"] == "TX-1"
        assert events[1]["total"] == "1000.00"
