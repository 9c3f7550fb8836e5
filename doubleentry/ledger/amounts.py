"""Amount: one debit or credit line of a transaction.

Amount is @final but NOT a dataclass: it is mutable while its transaction is
being built and holds a back-reference to that transaction.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, final

from doubleentry.core.errors import AccountNotFoundError, IllegalTransitionError
from doubleentry.core.money import to_decimal
from doubleentry.core.result import Err, Ok
from doubleentry.ledger.accounts import Account, Side

if TYPE_CHECKING:
    from doubleentry.infra.protocols import AccountStore
    from doubleentry.ledger.transactions import Transaction


@final
class Amount:
    """A signed exact-decimal value on one account, on one side of a transaction.

    Floats are rejected with TypeError; ints and numeric strings are coerced
    to Decimal.
    """

    __slots__ = ("_account", "_side", "_value", "amount_id", "transaction")

    def __init__(
        self,
        side: Side,
        value: Decimal | int | str,
        account: Account | None = None,
    ) -> None:
        self._side = side
        self._value = to_decimal(value)
        self._account = account
        self.transaction: Transaction | None = None
        self.amount_id: str | None = None

    @staticmethod
    def debit(account: Account | None, value: Decimal | int | str) -> Amount:
        return Amount(Side.DEBIT, value, account)

    @staticmethod
    def credit(account: Account | None, value: Decimal | int | str) -> Amount:
        return Amount(Side.CREDIT, value, account)

    @property
    def side(self) -> Side:
        return self._side

    @property
    def value(self) -> Decimal:
        return self._value

    @property
    def account(self) -> Account | None:
        return self._account

    @property
    def is_debit(self) -> bool:
        return self._side is Side.DEBIT

    @property
    def signed_value(self) -> Decimal:
        """Value with debits positive and credits negative."""
        return self._value if self.is_debit else -self._value

    def _begin_edit(self, operation: str) -> Ok[None] | Err[IllegalTransitionError]:
        if self.transaction is None:
            return Ok(None)
        return self.transaction._begin_edit(f"Amount.{operation}")

    def set_value(self, value: Decimal | int | str) -> Ok[None] | Err[IllegalTransitionError]:
        new_value = to_decimal(value)
        match self._begin_edit("set_value"):
            case Err() as e:
                return e
            case Ok():
                pass
        self._value = new_value
        return Ok(None)

    def set_account(self, account: Account) -> Ok[None] | Err[IllegalTransitionError]:
        match self._begin_edit("set_account"):
            case Err() as e:
                return e
            case Ok():
                pass
        self._account = account
        return Ok(None)

    def set_account_by_name(
        self, name: str, store: AccountStore,
    ) -> Ok[None] | Err[AccountNotFoundError | IllegalTransitionError]:
        """Look the account up by name. On failure the amount is left untouched."""
        match store.find_account_by_name(name):
            case Err() as e:
                return e
            case Ok(account):
                return self.set_account(account)

    def _adjust_value(self, value: Decimal) -> None:
        """Overwrite the value regardless of state. Used only by adjust()."""
        self._value = value

    def detached_copy(self) -> Amount:
        """Copy with identity and transaction link stripped."""
        return Amount(self._side, self._value, self._account)

    def __repr__(self) -> str:
        account = self._account.name.value if self._account is not None else None
        return (
            f"Amount(side={self._side.value}, value={self._value}, "
            f"account={account!r}, amount_id={self.amount_id!r})"
        )
