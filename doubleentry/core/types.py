"""Core types: UtcDatetime.

Naive datetimes never enter the ledger. Every timestamp on a transaction is
a timezone-aware instant normalized to UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import final

from dateutil import parser as date_parser

from doubleentry.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class UtcDatetime:
    """Timezone-aware UTC datetime. Naive datetimes are rejected."""

    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            raise TypeError("UtcDatetime requires timezone-aware datetime, got naive")

    @staticmethod
    def parse(raw: datetime | str) -> Ok[UtcDatetime] | Err[str]:
        """Parse a datetime or ISO-8601 string, rejecting naive values."""
        if isinstance(raw, str):
            try:
                raw = date_parser.isoparse(raw)
            except ValueError as e:
                return Err(f"UtcDatetime: cannot parse '{raw}': {e}")
        if not isinstance(raw, datetime):
            return Err(f"UtcDatetime requires datetime or str, got {type(raw).__name__}")
        if raw.tzinfo is None:
            return Err("UtcDatetime requires timezone-aware datetime, got naive")
        return Ok(UtcDatetime(value=raw.astimezone(UTC)))

    @staticmethod
    def now() -> UtcDatetime:
        """Current UTC time."""
        return UtcDatetime(value=datetime.now(tz=UTC))

    def isoformat(self) -> str:
        return self.value.isoformat()
