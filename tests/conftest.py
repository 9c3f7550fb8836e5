"""Hypothesis profiles and pytest fixtures for doubleentry."""

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal

import pytest
from hypothesis import HealthCheck, settings

from doubleentry.core.logging_config import reset_logging
from doubleentry.infra.memory_adapter import InMemoryAccountStore, InMemoryPersistence
from doubleentry.ledger.accounts import Account, AccountType
from doubleentry.ledger.amounts import Amount
from doubleentry.ledger.transactions import Transaction
from tests.strategies import make_account

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# FIXTURES
# ===================================================================


@pytest.fixture
def cash() -> Account:
    return make_account("Cash", AccountType.ASSET)


@pytest.fixture
def receivables() -> Account:
    return make_account("Accounts Receivable", AccountType.ASSET)


@pytest.fixture
def revenue() -> Account:
    return make_account("Sales", AccountType.REVENUE)


@pytest.fixture
def store(cash: Account, receivables: Account, revenue: Account) -> InMemoryAccountStore:
    return InMemoryAccountStore((cash, receivables, revenue))


@pytest.fixture
def persistence() -> InMemoryPersistence:
    return InMemoryPersistence()


@pytest.fixture
def payment(cash: Account, receivables: Account) -> Transaction:
    """Invoice payment: debit Cash 1000.00, credit Accounts Receivable 1000.00."""
    tx = Transaction("Invoice payment")
    tx.add_debit(Amount.debit(cash, Decimal("1000.00")))
    tx.add_credit(Amount.credit(receivables, Decimal("1000.00")))
    return tx


@pytest.fixture(autouse=True)
def _clean_logging() -> Iterator[None]:
    yield
    reset_logging()
