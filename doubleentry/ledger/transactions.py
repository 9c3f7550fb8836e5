"""Transaction aggregate and its validation state machine.

States: BUILDING -> VALIDATED -> COMMITTED, BUILDING -> REJECTED.
Editing a VALIDATED or REJECTED transaction sends it back to BUILDING.
A COMMITTED transaction is history: only reverse() and adjust() derive
new state from it.

Transaction is @final but NOT a dataclass; it holds mutable amount
collections and owns its amounts.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import TypeAlias, final

from doubleentry.core.errors import (
    FieldViolation,
    IllegalTransitionError,
    TransactionRejectedError,
    ValidationError,
    ViolationKind,
)
from doubleentry.core.result import Err, Ok
from doubleentry.core.serialization import transaction_digest
from doubleentry.core.types import UtcDatetime
from doubleentry.ledger.accounts import Account, DocumentRef, Side
from doubleentry.ledger.amounts import Amount
from doubleentry.ledger.balance import total

# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class TransactionState(Enum):
    BUILDING = "BUILDING"
    VALIDATED = "VALIDATED"
    COMMITTED = "COMMITTED"
    REJECTED = "REJECTED"


TransitionTable: TypeAlias = frozenset[tuple[TransactionState, TransactionState]]

TRANSACTION_TRANSITIONS: TransitionTable = frozenset({
    (TransactionState.BUILDING, TransactionState.VALIDATED),
    (TransactionState.BUILDING, TransactionState.REJECTED),
    (TransactionState.VALIDATED, TransactionState.COMMITTED),
    (TransactionState.VALIDATED, TransactionState.BUILDING),
    (TransactionState.REJECTED, TransactionState.BUILDING),
})


def check_transition(
    from_state: TransactionState,
    to_state: TransactionState,
    source: str = "ledger.transactions.check_transition",
) -> Ok[None] | Err[IllegalTransitionError]:
    """Validate a state transition against TRANSACTION_TRANSITIONS."""
    if (from_state, to_state) in TRANSACTION_TRANSITIONS:
        return Ok(None)
    return Err(IllegalTransitionError(
        message=f"Invalid transition: {from_state.value} -> {to_state.value}",
        code="ILLEGAL_TRANSITION",
        timestamp=UtcDatetime.now(),
        source=source,
        from_state=from_state.value,
        to_state=to_state.value,
    ))


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------


@final
class Transaction:
    """A journal entry: a description plus debit and credit amounts.

    Example:
        tx = Transaction("Invoice payment")
        tx.add_debit(Amount.debit(cash, Decimal("1000.00")))
        tx.add_credit(Amount.credit(receivables, Decimal("1000.00")))
        tx.validate()  # Ok(None)
    """

    def __init__(
        self,
        description: str,
        *,
        created_at: UtcDatetime | None = None,
        commercial_document: DocumentRef | None = None,
    ) -> None:
        self._description = description
        self._debit_amounts: list[Amount] = []
        self._credit_amounts: list[Amount] = []
        self._state = TransactionState.BUILDING
        self.created_at = created_at if created_at is not None else UtcDatetime.now()
        self.updated_at = self.created_at
        self.commercial_document = commercial_document
        self.transaction_id: str | None = None

    # --- read side ---------------------------------------------------------

    @property
    def description(self) -> str:
        return self._description

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def is_committed(self) -> bool:
        return self._state is TransactionState.COMMITTED

    @property
    def debit_amounts(self) -> tuple[Amount, ...]:
        return tuple(self._debit_amounts)

    @property
    def credit_amounts(self) -> tuple[Amount, ...]:
        return tuple(self._credit_amounts)

    @property
    def amounts(self) -> tuple[Amount, ...]:
        """Debits then credits, each in insertion order."""
        return (*self._debit_amounts, *self._credit_amounts)

    @property
    def total_debits(self) -> Decimal:
        return total(self._debit_amounts)

    @property
    def total_credits(self) -> Decimal:
        return total(self._credit_amounts)

    @property
    def is_inverted(self) -> bool:
        """True for reversal-shaped entries: total debits below zero."""
        return self.total_debits < 0

    @property
    def debit_accounts(self) -> tuple[Account, ...]:
        return _distinct_accounts(self._debit_amounts)

    @property
    def credit_accounts(self) -> tuple[Account, ...]:
        return _distinct_accounts(self._credit_amounts)

    def fingerprint(self) -> str:
        """Content hash over description, document link and amounts."""
        doc = self.commercial_document
        return transaction_digest(
            self._description,
            (doc.document_type.value, doc.document_id.value) if doc is not None else None,
            [_line(a) for a in self._debit_amounts],
            [_line(a) for a in self._credit_amounts],
        )

    # --- building ----------------------------------------------------------

    def _begin_edit(self, operation: str) -> Ok[None] | Err[IllegalTransitionError]:
        """Return a VALIDATED/REJECTED transaction to BUILDING before an edit."""
        if self._state is TransactionState.BUILDING:
            return Ok(None)
        match check_transition(
            self._state, TransactionState.BUILDING, f"ledger.transactions.{operation}",
        ):
            case Err() as e:
                return e
            case Ok():
                self._state = TransactionState.BUILDING
                self.updated_at = UtcDatetime.now()
                return Ok(None)

    def set_description(self, description: str) -> Ok[None] | Err[IllegalTransitionError]:
        match self._begin_edit("set_description"):
            case Err() as e:
                return e
            case Ok():
                self._description = description
                return Ok(None)

    def add_debit(
        self, amount: Amount,
    ) -> Ok[None] | Err[IllegalTransitionError | ValidationError]:
        return self._attach(amount, Side.DEBIT)

    def add_credit(
        self, amount: Amount,
    ) -> Ok[None] | Err[IllegalTransitionError | ValidationError]:
        return self._attach(amount, Side.CREDIT)

    def add_amount(
        self, amount: Amount,
    ) -> Ok[None] | Err[IllegalTransitionError | ValidationError]:
        """Attach an amount to the collection matching its side."""
        return self._attach(amount, amount.side)

    def remove_amount(
        self, amount: Amount,
    ) -> Ok[None] | Err[IllegalTransitionError | ValidationError]:
        """Detach an amount. The amount is discarded with its transaction link."""
        collection = self._collection(amount.side)
        if not any(a is amount for a in collection):
            return Err(_field_error(
                "remove_amount", "amount", "not attached to this transaction", repr(amount),
            ))
        match self._begin_edit("remove_amount"):
            case Err() as e:
                return e
            case Ok():
                pass
        collection[:] = [a for a in collection if a is not amount]
        amount.transaction = None
        return Ok(None)

    def _collection(self, side: Side) -> list[Amount]:
        return self._debit_amounts if side is Side.DEBIT else self._credit_amounts

    def _attach(
        self, amount: Amount, side: Side,
    ) -> Ok[None] | Err[IllegalTransitionError | ValidationError]:
        if amount.side is not side:
            return Err(_field_error(
                f"add_{side.value.lower()}", "amount.side",
                f"must be {side.value}", amount.side.value,
            ))
        if amount.transaction is not None:
            return Err(_field_error(
                f"add_{side.value.lower()}", "amount.transaction",
                "amount already belongs to a transaction", repr(amount),
            ))
        match self._begin_edit(f"add_{side.value.lower()}"):
            case Err() as e:
                return e
            case Ok():
                pass
        amount.transaction = self
        self._collection(side).append(amount)
        return Ok(None)

    # --- state machine -----------------------------------------------------

    def validate(self) -> Ok[None] | Err[TransactionRejectedError]:
        """Check every invariant and record VALIDATED or REJECTED.

        Re-validating an unchanged transaction returns the same result.
        A COMMITTED transaction keeps its state.
        """
        result = validate(self)
        if self._state is TransactionState.BUILDING:
            target = (
                TransactionState.VALIDATED if isinstance(result, Ok)
                else TransactionState.REJECTED
            )
            match check_transition(self._state, target, "ledger.transactions.validate"):
                case Ok():
                    self._state = target
                case Err():
                    pass
        return result

    def _mark_committed(self, transaction_id: str) -> Ok[None] | Err[IllegalTransitionError]:
        match check_transition(
            self._state, TransactionState.COMMITTED, "ledger.transactions.commit",
        ):
            case Err() as e:
                return e
            case Ok():
                self._state = TransactionState.COMMITTED
                self.transaction_id = transaction_id
                return Ok(None)

    def _adjust_description(self, description: str) -> None:
        """Overwrite the description regardless of state. Used only by adjust()."""
        self._description = description

    # --- copying -----------------------------------------------------------

    def detached_copy(self) -> Transaction:
        """In-memory copy in BUILDING state with every identity stripped."""
        copy = Transaction(
            self._description,
            created_at=self.created_at,
            commercial_document=self.commercial_document,
        )
        copy.updated_at = self.updated_at
        for amount in self.amounts:
            copy._attach(amount.detached_copy(), amount.side)
        return copy

    def __repr__(self) -> str:
        return (
            f"Transaction(description={self._description!r}, state={self._state.value}, "
            f"debits={self.total_debits}, credits={self.total_credits}, "
            f"transaction_id={self.transaction_id!r})"
        )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def violations(transaction: Transaction) -> frozenset[ViolationKind]:
    """Every invariant the transaction currently breaks."""
    found: set[ViolationKind] = set()
    if not transaction.description or not transaction.description.strip():
        found.add(ViolationKind.MISSING_DESCRIPTION)
    if not transaction.debit_amounts:
        found.add(ViolationKind.NO_DEBIT_AMOUNTS)
    if not transaction.credit_amounts:
        found.add(ViolationKind.NO_CREDIT_AMOUNTS)
    # an empty side is reported as such, not as an imbalance
    if (
        transaction.debit_amounts and transaction.credit_amounts
        and transaction.total_debits != transaction.total_credits
    ):
        found.add(ViolationKind.AMOUNTS_DO_NOT_BALANCE)
    if any(a.account is None for a in transaction.amounts):
        found.add(ViolationKind.AMOUNT_WITHOUT_ACCOUNT)
    return frozenset(found)


def validate(transaction: Transaction) -> Ok[None] | Err[TransactionRejectedError]:
    """Pure validation. Reports all violated invariants together."""
    found = violations(transaction)
    if not found:
        return Ok(None)
    names = ", ".join(sorted(v.value for v in found))
    return Err(TransactionRejectedError(
        message=f"Transaction rejected: {names}",
        code="TRANSACTION_REJECTED",
        timestamp=UtcDatetime.now(),
        source="ledger.transactions.validate",
        violations=found,
    ))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _distinct_accounts(amounts: list[Amount]) -> tuple[Account, ...]:
    seen: dict[str, Account] = {}
    for a in amounts:
        if a.account is not None and a.account.account_id.value not in seen:
            seen[a.account.account_id.value] = a.account
    return tuple(seen.values())


def _line(amount: Amount) -> tuple[str | None, Decimal]:
    account_id = amount.account.account_id.value if amount.account is not None else None
    return (account_id, amount.value)


def _field_error(operation: str, path: str, constraint: str, actual: str) -> ValidationError:
    return ValidationError(
        message=f"{operation}: {path} {constraint}",
        code="INVALID_ARGUMENT",
        timestamp=UtcDatetime.now(),
        source=f"ledger.transactions.{operation}",
        fields=(FieldViolation(path=path, constraint=constraint, actual_value=actual),),
    )
