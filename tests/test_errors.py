"""Tests for doubleentry.core.errors: error values."""

from __future__ import annotations

import dataclasses

import pytest

from doubleentry.core.errors import (
    AccountNotFoundError,
    FieldViolation,
    IllegalTransitionError,
    LedgerError,
    NoAmountsToAdjustError,
    PersistenceError,
    TransactionRejectedError,
    ValidationError,
    ViolationKind,
)
from doubleentry.core.types import UtcDatetime


def _common() -> dict[str, object]:
    return {"message": "m", "code": "C", "timestamp": UtcDatetime.now(), "source": "test.fn"}


class TestLedgerError:
    def test_is_frozen(self) -> None:
        err = LedgerError(**_common())  # type: ignore[arg-type]
        with pytest.raises(dataclasses.FrozenInstanceError):
            err.message = "changed"  # type: ignore[misc]

    def test_equal_by_value(self) -> None:
        common = _common()
        assert AccountNotFoundError(**common, name="Cash") == AccountNotFoundError(  # type: ignore[arg-type]
            **common, name="Cash",  # type: ignore[arg-type]
        )


class TestSubclasses:
    @pytest.mark.parametrize(
        "err",
        [
            ValidationError(**_common(), fields=(FieldViolation("a", "b", "c"),)),  # type: ignore[arg-type]
            TransactionRejectedError(
                **_common(), violations=frozenset({ViolationKind.NO_DEBIT_AMOUNTS}),  # type: ignore[arg-type]
            ),
            NoAmountsToAdjustError(**_common(), missing_sides=("DEBIT",)),  # type: ignore[arg-type]
            AccountNotFoundError(**_common(), name="Cash"),  # type: ignore[arg-type]
            IllegalTransitionError(**_common(), from_state="A", to_state="B"),  # type: ignore[arg-type]
            PersistenceError(**_common(), operation="commit"),  # type: ignore[arg-type]
        ],
    )
    def test_is_ledger_error(self, err: LedgerError) -> None:
        assert isinstance(err, LedgerError)
        assert err.code == "C"

    def test_match_on_violations(self) -> None:
        err = TransactionRejectedError(
            **_common(),  # type: ignore[arg-type]
            violations=frozenset({
                ViolationKind.NO_CREDIT_AMOUNTS, ViolationKind.AMOUNTS_DO_NOT_BALANCE,
            }),
        )
        match err:
            case TransactionRejectedError(violations=v):
                assert ViolationKind.NO_CREDIT_AMOUNTS in v
                assert ViolationKind.MISSING_DESCRIPTION not in v


@pytest.mark.parametrize(
    ("kind", "value"),
    [
        (ViolationKind.MISSING_DESCRIPTION, "MissingDescription"),
        (ViolationKind.NO_DEBIT_AMOUNTS, "NoDebitAmounts"),
        (ViolationKind.NO_CREDIT_AMOUNTS, "NoCreditAmounts"),
        (ViolationKind.AMOUNTS_DO_NOT_BALANCE, "AmountsDoNotBalance"),
        (ViolationKind.AMOUNT_WITHOUT_ACCOUNT, "AmountWithoutAccount"),
    ],
)
def test_violation_kind_values(kind: ViolationKind, value: str) -> None:
    assert kind.value == value
