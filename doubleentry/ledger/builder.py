"""Build a transaction from plain attribute maps.

Each leg is a mapping with an ``amount`` and either an ``account`` (an
Account) or an ``account_name`` resolved through the account store:

    build_transaction(
        "Invoice payment",
        debits=[{"account_name": "Cash", "amount": "1000.00"}],
        credits=[{"account_name": "Accounts Receivable", "amount": "1000.00"}],
        store=accounts,
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from doubleentry.core.errors import AccountNotFoundError, FieldViolation, ValidationError
from doubleentry.core.money import parse_decimal
from doubleentry.core.result import Err, Ok
from doubleentry.core.types import UtcDatetime
from doubleentry.infra.protocols import AccountStore
from doubleentry.ledger.accounts import Account, DocumentRef, Side
from doubleentry.ledger.amounts import Amount
from doubleentry.ledger.transactions import Transaction

_SOURCE = "ledger.builder.build_transaction"


def _leg_error(path: str, constraint: str, actual: object) -> Err[ValidationError]:
    return Err(ValidationError(
        message=f"build_transaction: {path} {constraint}",
        code="INVALID_LEG",
        timestamp=UtcDatetime.now(),
        source=_SOURCE,
        fields=(FieldViolation(path=path, constraint=constraint, actual_value=repr(actual)),),
    ))


def build_amount(
    leg: Mapping[str, Any], side: Side, store: AccountStore, path: str,
) -> Ok[Amount] | Err[AccountNotFoundError | ValidationError]:
    """Turn one attribute map into an unattached Amount."""
    unknown = set(leg) - {"amount", "account", "account_name"}
    if unknown:
        return _leg_error(path, f"has unknown keys {sorted(unknown)}", dict(leg))
    if "account" in leg and "account_name" in leg:
        return _leg_error(path, "must give account or account_name, not both", dict(leg))

    match parse_decimal(leg.get("amount")):
        case Err(e):
            return _leg_error(f"{path}.amount", e, leg.get("amount"))
        case Ok(value):
            amount = Amount(side, value)

    if "account_name" in leg:
        match amount.set_account_by_name(leg["account_name"], store):
            case Err(e):
                return Err(e)
            case Ok():
                pass
    elif isinstance(leg.get("account"), Account):
        amount.set_account(leg["account"])
    else:
        return _leg_error(path, "needs an Account or an account_name", dict(leg))
    return Ok(amount)


def build_transaction(
    description: str,
    debits: Iterable[Mapping[str, Any]],
    credits: Iterable[Mapping[str, Any]],
    store: AccountStore,
    *,
    commercial_document: DocumentRef | None = None,
    created_at: UtcDatetime | None = None,
) -> Ok[Transaction] | Err[AccountNotFoundError | ValidationError]:
    """Assemble a BUILDING transaction. Stops at the first bad leg.

    The transaction is not validated; commit() does that.
    """
    tx = Transaction(
        description, created_at=created_at, commercial_document=commercial_document,
    )
    legs = [("debits", Side.DEBIT, debits), ("credits", Side.CREDIT, credits)]
    for name, side, entries in legs:
        for i, leg in enumerate(entries):
            match build_amount(leg, side, store, f"{name}[{i}]"):
                case Err() as e:
                    return e
                case Ok(amount):
                    tx.add_amount(amount)
    return Ok(tx)
