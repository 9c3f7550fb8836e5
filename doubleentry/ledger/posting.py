"""Commit path: the only route from an in-memory transaction to storage.

commit() always re-validates. A rejected transaction never reaches the
persistence boundary; storage errors come back unchanged.
"""

from __future__ import annotations

from doubleentry.core.errors import (
    IllegalTransitionError,
    PersistenceError,
    TransactionRejectedError,
)
from doubleentry.core.logging_config import get_logger
from doubleentry.core.result import Err, Ok
from doubleentry.core.types import UtcDatetime
from doubleentry.infra.protocols import PersistenceBoundary
from doubleentry.ledger.transactions import (
    Transaction,
    TransactionState,
    check_transition,
)

logger = get_logger("ledger.posting")


def commit(
    transaction: Transaction, boundary: PersistenceBoundary,
) -> Ok[Transaction] | Err[TransactionRejectedError | IllegalTransitionError | PersistenceError]:
    """Validate and hand the transaction to the persistence boundary.

    1. COMMITTED already -> Err(IllegalTransitionError)
    2. Re-validate; REJECTED -> Err(TransactionRejectedError), boundary untouched
    3. boundary.commit(); storage failure -> Err(PersistenceError), state stays VALIDATED
    4. Record transaction id, state COMMITTED
    """
    if transaction.is_committed:
        return check_transition(
            TransactionState.COMMITTED, TransactionState.COMMITTED, "ledger.posting.commit",
        )

    match transaction.validate():
        case Err(rejected):
            logger.info(
                "transaction_rejected",
                extra={
                    "description": transaction.description,
                    "violations": sorted(v.value for v in rejected.violations),
                },
            )
            return Err(rejected)
        case Ok():
            pass

    match boundary.commit(transaction):
        case Err(storage_error):
            logger.warning(
                "transaction_commit_failed",
                extra={"description": transaction.description, "detail": storage_error.message},
            )
            return Err(storage_error)
        case Ok(transaction_id):
            pass

    match transaction._mark_committed(transaction_id):
        case Err() as e:
            return e
        case Ok():
            pass

    transaction.updated_at = UtcDatetime.now()
    logger.info(
        "transaction_committed",
        extra={
            "transaction_id": transaction_id,
            "total": transaction.total_debits,
            "fingerprint": transaction.fingerprint(),
        },
    )
    return Ok(transaction)
