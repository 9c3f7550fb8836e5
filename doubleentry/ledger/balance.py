"""Balance calculator: pure functions over collections of amounts.

Nothing here touches storage: saved and unsaved amounts are summed the same
way. All sums are exact Decimal sums under LEDGER_DECIMAL_CONTEXT.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal, localcontext

from doubleentry.core.money import LEDGER_DECIMAL_CONTEXT, decimal_sum
from doubleentry.ledger.accounts import Account, AccountType, Side
from doubleentry.ledger.amounts import Amount


def total(amounts: Iterable[Amount]) -> Decimal:
    """Sum of amount values. Empty collection sums to zero."""
    return decimal_sum(a.value for a in amounts)


def side_total(amounts: Iterable[Amount], side: Side) -> Decimal:
    return decimal_sum(a.value for a in amounts if a.side is side)


def net_balance(account: Account, amounts_for_account: Iterable[Amount]) -> Decimal:
    """Balance of an account from amounts already known to reference it.

    Debit-normal accounts (assets, expenses) report debits minus credits;
    credit-normal accounts (liabilities, equity, revenue) the reverse.
    Contra accounts flip their type's convention.
    """
    amounts = tuple(amounts_for_account)
    debits = side_total(amounts, Side.DEBIT)
    credits = side_total(amounts, Side.CREDIT)
    with localcontext(LEDGER_DECIMAL_CONTEXT):
        if account.normal_balance is Side.DEBIT:
            return debits - credits
        return credits - debits


def balance(account: Account, amounts: Sequence[Amount] | Iterable[Amount]) -> Decimal:
    """Balance of account over an arbitrary amount history."""
    aid = account.account_id
    return net_balance(
        account,
        (a for a in amounts if a.account is not None and a.account.account_id == aid),
    )


def trial_balance(accounts: Iterable[Account], amounts: Iterable[Amount]) -> Decimal:
    """Assets - (liabilities + equity + revenue - expenses).

    Contra accounts count against their type. Zero for any ledger made of
    balanced transactions whose accounts are all listed.
    """
    history = tuple(amounts)
    by_type: dict[AccountType, Decimal] = {t: Decimal(0) for t in AccountType}
    with localcontext(LEDGER_DECIMAL_CONTEXT):
        for account in accounts:
            amount = balance(account, history)
            by_type[account.account_type] += -amount if account.contra else amount
        return by_type[AccountType.ASSET] - (
            by_type[AccountType.LIABILITY]
            + by_type[AccountType.EQUITY]
            + by_type[AccountType.REVENUE]
            - by_type[AccountType.EXPENSE]
        )
