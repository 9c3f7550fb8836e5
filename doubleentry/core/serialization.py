"""Canonical form of a transaction's content, for fingerprinting.

Two transactions with the same description, document link and lines
(account, value) in the same order get the same digest, whatever the
scale of their decimal values.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from decimal import Decimal


def canonical_value(value: Decimal) -> str:
    """1000.00 and 1E+3 render the same; every zero is "0"."""
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def transaction_digest(
    description: str,
    document: tuple[str, str] | None,
    debits: Sequence[tuple[str | None, Decimal]],
    credits: Sequence[tuple[str | None, Decimal]],
) -> str:
    """SHA-256 hex digest of the canonical JSON of a transaction's content.

    ``document`` is (document_type, document_id); each line is
    (account_id, value).
    """
    payload = {
        "description": description,
        "document": list(document) if document is not None else None,
        "debits": [[account_id, canonical_value(v)] for account_id, v in debits],
        "credits": [[account_id, canonical_value(v)] for account_id, v in credits],
    }
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
