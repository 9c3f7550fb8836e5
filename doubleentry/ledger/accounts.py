"""Chart-of-accounts types: AccountType, NormalBalance, Account, DocumentRef."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import final

from doubleentry.core.money import NonEmptyStr
from doubleentry.core.result import Err, Ok


class Side(Enum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    @property
    def opposite(self) -> Side:
        return Side.CREDIT if self is Side.DEBIT else Side.DEBIT


class AccountType(Enum):
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"

    @property
    def normal_balance(self) -> Side:
        """Side on which this account type's balance is conventionally positive."""
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return Side.DEBIT
        return Side.CREDIT


@final
@dataclass(frozen=True, slots=True)
class Account:
    """A ledger account. Owned by the account store, referenced by amounts.

    A contra account carries the balance opposite to its type, e.g.
    accumulated depreciation is a credit-normal ASSET.
    """

    account_id: NonEmptyStr
    name: NonEmptyStr
    account_type: AccountType
    contra: bool = False

    @staticmethod
    def create(
        account_id: str, name: str, account_type: AccountType, *, contra: bool = False,
    ) -> Ok[Account] | Err[str]:
        match NonEmptyStr.parse(account_id):
            case Err(e):
                return Err(f"Account.account_id: {e}")
            case Ok(aid):
                pass
        match NonEmptyStr.parse(name):
            case Err(e):
                return Err(f"Account.name: {e}")
            case Ok(n):
                pass
        return Ok(Account(account_id=aid, name=n, account_type=account_type, contra=contra))

    @property
    def normal_balance(self) -> Side:
        side = self.account_type.normal_balance
        return side.opposite if self.contra else side


@final
@dataclass(frozen=True, slots=True)
class DocumentRef:
    """Link to the business document a transaction records, e.g. an invoice."""

    document_type: NonEmptyStr
    document_id: NonEmptyStr

    @staticmethod
    def create(document_type: str, document_id: str) -> Ok[DocumentRef] | Err[str]:
        if not document_type or not document_type.strip():
            return Err("DocumentRef.document_type must be non-empty")
        if not document_id or not document_id.strip():
            return Err("DocumentRef.document_id must be non-empty")
        return Ok(DocumentRef(
            document_type=NonEmptyStr(value=document_type),
            document_id=NonEmptyStr(value=document_id),
        ))
