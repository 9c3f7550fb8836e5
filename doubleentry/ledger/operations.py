"""Transaction operations: reverse and adjust.

reverse() derives a new, independent transaction that cancels an existing
one. adjust() is the single sanctioned in-place edit of history: it rewrites
the last debit and last credit amount of a transaction.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from doubleentry.core.errors import (
    FieldViolation,
    IllegalTransitionError,
    NoAmountsToAdjustError,
    TransactionRejectedError,
    ValidationError,
    ViolationKind,
)
from doubleentry.core.logging_config import get_logger
from doubleentry.core.money import ZERO, parse_decimal
from doubleentry.core.result import Err, Ok
from doubleentry.core.types import UtcDatetime
from doubleentry.infra.config import DEFAULT_CONFIG, LedgerConfig
from doubleentry.infra.protocols import PersistenceBoundary
from doubleentry.ledger.accounts import DocumentRef
from doubleentry.ledger.amounts import Amount
from doubleentry.ledger.transactions import Transaction, violations

logger = get_logger("ledger.operations")

REVERSE_OVERRIDE_KEYS: frozenset[str] = frozenset({
    "description", "commercial_document", "created_at",
})


def is_inverted(transaction: Transaction) -> bool:
    """A transaction is inverted when its total debit value is negative."""
    return transaction.is_inverted


# ---------------------------------------------------------------------------
# Reverse
# ---------------------------------------------------------------------------


def reverse(
    transaction: Transaction,
    overrides: Mapping[str, Any] | None = None,
    *,
    boundary: PersistenceBoundary | None = None,
) -> Ok[Transaction] | Err[ValidationError | IllegalTransitionError]:
    """Build a transaction negating every amount of ``transaction``.

    Each amount is cloned with its identity stripped (through
    ``boundary.clone`` when given) and its value negated, keeping its side
    and account. The result is unvalidated and in BUILDING state; the caller
    commits it. Overrides are applied as given, so an empty description
    override is reported at commit time, not here.
    """
    match _parse_overrides(overrides or {}):
        case Err() as e:
            return e
        case Ok(parsed):
            pass

    now = UtcDatetime.now()
    reversed_tx = Transaction(
        transaction.description,
        created_at=parsed.get("created_at", now),
        commercial_document=transaction.commercial_document,
    )
    for original in transaction.amounts:
        clone = boundary.clone(original) if boundary is not None else original.detached_copy()
        clone._adjust_value(-original.value)
        match reversed_tx.add_amount(clone):
            case Err() as e:
                return e
            case Ok():
                pass

    if "description" in parsed:
        match reversed_tx.set_description(parsed["description"]):
            case Err() as e:
                return e
            case Ok():
                pass
    if "commercial_document" in parsed:
        reversed_tx.commercial_document = parsed["commercial_document"]

    logger.info(
        "transaction_reversed",
        extra={
            "original_transaction_id": transaction.transaction_id,
            "total": reversed_tx.total_debits,
        },
    )
    return Ok(reversed_tx)


def _parse_overrides(overrides: Mapping[str, Any]) -> Ok[dict[str, Any]] | Err[ValidationError]:
    problems: list[FieldViolation] = []
    parsed: dict[str, Any] = {}
    for key, raw in overrides.items():
        if key not in REVERSE_OVERRIDE_KEYS:
            problems.append(FieldViolation(f"overrides.{key}", "unknown attribute", repr(raw)))
        elif key == "description":
            if isinstance(raw, str):
                parsed[key] = raw
            else:
                problems.append(FieldViolation("overrides.description", "must be str", repr(raw)))
        elif key == "commercial_document":
            if raw is None or isinstance(raw, DocumentRef):
                parsed[key] = raw
            else:
                problems.append(FieldViolation(
                    "overrides.commercial_document", "must be DocumentRef or None", repr(raw),
                ))
        elif key == "created_at":
            if isinstance(raw, UtcDatetime):
                parsed[key] = raw
                continue
            if not isinstance(raw, (str, datetime)):
                problems.append(FieldViolation(
                    "overrides.created_at", "must be datetime or ISO-8601 str", repr(raw),
                ))
                continue
            match UtcDatetime.parse(raw):
                case Err(e):
                    problems.append(FieldViolation("overrides.created_at", e, repr(raw)))
                case Ok(ts):
                    parsed[key] = ts
    if problems:
        return Err(ValidationError(
            message="reverse: invalid overrides",
            code="INVALID_OVERRIDES",
            timestamp=UtcDatetime.now(),
            source="ledger.operations.reverse",
            fields=tuple(problems),
        ))
    return Ok(parsed)


# ---------------------------------------------------------------------------
# Adjust
# ---------------------------------------------------------------------------


def adjust(
    transaction: Transaction,
    amount: Decimal | int | str | float | None = None,
    description: str | None = None,
    *,
    config: LedgerConfig = DEFAULT_CONFIG,
) -> Ok[None] | Err[NoAmountsToAdjustError | TransactionRejectedError | ValidationError]:
    """Rewrite the last debit and last credit amount in place.

    With a non-zero ``amount``: both last amounts take that value and the
    description is kept. Without an amount, or with a zero one (the float
    ``0.0`` included), the charge is waived: both become zero and the
    description becomes ``description`` or ``config.waiver_description``.
    Any other float is refused.

    Invariants are re-checked after the rewrite. If the transaction ends up
    unbalanced (the other lines of a multi-line transaction do not cancel)
    or the change breaks another invariant, every change is undone. An
    uncommitted transaction goes back to BUILDING.
    """
    missing = tuple(
        side for side, collection in (
            ("DEBIT", transaction.debit_amounts), ("CREDIT", transaction.credit_amounts),
        )
        if not collection
    )
    if missing:
        return Err(NoAmountsToAdjustError(
            message=f"adjust: transaction has no {' or '.join(missing).lower()} amounts",
            code="NO_AMOUNTS_TO_ADJUST",
            timestamp=UtcDatetime.now(),
            source="ledger.operations.adjust",
            missing_sides=missing,
        ))

    if amount is None or (isinstance(amount, float) and amount == 0):
        new_value = ZERO
    else:
        match parse_decimal(amount):
            case Err(e):
                return Err(ValidationError(
                    message=f"adjust: {e}",
                    code="INVALID_AMOUNT",
                    timestamp=UtcDatetime.now(),
                    source="ledger.operations.adjust",
                    fields=(FieldViolation("amount", e, repr(amount)),),
                ))
            case Ok(new_value):
                pass
    waived = new_value == 0
    if waived:
        new_description = description if description is not None else config.waiver_description
    else:
        new_description = transaction.description

    last_debit: Amount = transaction.debit_amounts[-1]
    last_credit: Amount = transaction.credit_amounts[-1]
    saved = (last_debit.value, last_credit.value, transaction.description)
    before = violations(transaction)

    last_debit._adjust_value(new_value)
    last_credit._adjust_value(new_value)
    transaction._adjust_description(new_description)

    after = violations(transaction)
    introduced = (after - before) | (after & {ViolationKind.AMOUNTS_DO_NOT_BALANCE})
    if introduced:
        last_debit._adjust_value(saved[0])
        last_credit._adjust_value(saved[1])
        transaction._adjust_description(saved[2])
        names = ", ".join(sorted(v.value for v in introduced))
        return Err(TransactionRejectedError(
            message=f"adjust: change would break {names}",
            code="TRANSACTION_REJECTED",
            timestamp=UtcDatetime.now(),
            source="ledger.operations.adjust",
            violations=introduced,
        ))

    if not transaction.is_committed:
        transaction._begin_edit("adjust")
    transaction.updated_at = UtcDatetime.now()
    logger.info(
        "transaction_adjusted",
        extra={
            "transaction_id": transaction.transaction_id,
            "value": new_value,
            "waived": waived,
        },
    )
    return Ok(None)
