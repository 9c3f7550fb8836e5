"""Decimal context and refined numeric/string types for ledger values.

All ledger arithmetic runs under LEDGER_DECIMAL_CONTEXT (prec=28,
ROUND_HALF_EVEN, traps for InvalidOperation/DivisionByZero/Overflow).
Binary floats are never accepted as monetary values.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN as _ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import final

from doubleentry.core.result import Err, Ok

LEDGER_DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

ZERO = Decimal(0)


def parse_decimal(raw: object) -> Ok[Decimal] | Err[str]:
    """Coerce a Decimal, int or numeric string to a finite Decimal.

    Floats and bools are rejected: a monetary value must be exact.
    """
    if isinstance(raw, (bool, float)):
        return Err(f"monetary value must be exact, got {type(raw).__name__} {raw!r}")
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, str):
        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            return Err(f"not a decimal number: {raw!r}")
    else:
        return Err(f"monetary value must be Decimal, int or str, got {type(raw).__name__}")
    if not value.is_finite():
        return Err(f"monetary value must be finite, got {value}")
    return Ok(value)


def to_decimal(raw: object) -> Decimal:
    """Like parse_decimal, but raises TypeError. For constructors."""
    match parse_decimal(raw):
        case Err(e):
            raise TypeError(e)
        case Ok(value):
            return value


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    """Exact sum under the ledger context. Empty input sums to zero."""
    total = ZERO
    with localcontext(LEDGER_DECIMAL_CONTEXT):
        for v in values:
            total += v
    return total


@final
@dataclass(frozen=True, slots=True)
class NonEmptyStr:
    """String constrained to contain non-whitespace characters."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise TypeError("NonEmptyStr requires non-empty string")

    @staticmethod
    def parse(raw: str) -> Ok[NonEmptyStr] | Err[str]:
        if not isinstance(raw, str) or not raw.strip():
            return Err("NonEmptyStr requires non-empty string")
        return Ok(NonEmptyStr(value=raw))
