"""Error value hierarchy: domain functions return these, they never raise them.

Every error is a frozen dataclass value that can be pattern-matched
and logged. Base class LedgerError, six @final subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import final

from doubleentry.core.types import UtcDatetime


class ViolationKind(Enum):
    """A transaction invariant that failed validation."""

    MISSING_DESCRIPTION = "MissingDescription"
    NO_DEBIT_AMOUNTS = "NoDebitAmounts"
    NO_CREDIT_AMOUNTS = "NoCreditAmounts"
    AMOUNTS_DO_NOT_BALANCE = "AmountsDoNotBalance"
    AMOUNT_WITHOUT_ACCOUNT = "AmountWithoutAccount"


@dataclass(frozen=True, slots=True)
class LedgerError:
    """Base error value. NOT @final, it has subclasses."""

    message: str
    code: str
    timestamp: UtcDatetime
    source: str  # "module.function" that produced this error


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single argument validation failure."""

    path: str  # e.g. "overrides.colour"
    constraint: str  # e.g. "unknown attribute"
    actual_value: str


@final
@dataclass(frozen=True, slots=True)
class ValidationError(LedgerError):
    """One or more arguments failed validation."""

    fields: tuple[FieldViolation, ...]


@final
@dataclass(frozen=True, slots=True)
class TransactionRejectedError(LedgerError):
    """A transaction broke one or more invariants. All of them are listed."""

    violations: frozenset[ViolationKind]


@final
@dataclass(frozen=True, slots=True)
class NoAmountsToAdjustError(LedgerError):
    """Adjust needs at least one debit and one credit amount."""

    missing_sides: tuple[str, ...]  # "DEBIT" and/or "CREDIT"


@final
@dataclass(frozen=True, slots=True)
class AccountNotFoundError(LedgerError):
    """No account with the given name exists in the account store."""

    name: str


@final
@dataclass(frozen=True, slots=True)
class IllegalTransitionError(LedgerError):
    """Transaction state transition is not allowed."""

    from_state: str
    to_state: str


@final
@dataclass(frozen=True, slots=True)
class PersistenceError(LedgerError):
    """Storage operation failed. Passed through unchanged by the core."""

    operation: str
