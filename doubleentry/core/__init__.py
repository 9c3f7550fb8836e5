"""doubleentry.core: results, errors, decimal discipline, logging."""

from doubleentry.core.errors import AccountNotFoundError as AccountNotFoundError
from doubleentry.core.errors import FieldViolation as FieldViolation
from doubleentry.core.errors import IllegalTransitionError as IllegalTransitionError
from doubleentry.core.errors import LedgerError as LedgerError
from doubleentry.core.errors import NoAmountsToAdjustError as NoAmountsToAdjustError
from doubleentry.core.errors import PersistenceError as PersistenceError
from doubleentry.core.errors import TransactionRejectedError as TransactionRejectedError
from doubleentry.core.errors import ValidationError as ValidationError
from doubleentry.core.errors import ViolationKind as ViolationKind
from doubleentry.core.logging_config import configure_logging as configure_logging
from doubleentry.core.logging_config import get_logger as get_logger
from doubleentry.core.money import LEDGER_DECIMAL_CONTEXT as LEDGER_DECIMAL_CONTEXT
from doubleentry.core.money import NonEmptyStr as NonEmptyStr
from doubleentry.core.money import parse_decimal as parse_decimal
from doubleentry.core.money import to_decimal as to_decimal
from doubleentry.core.result import Err as Err
from doubleentry.core.result import Ok as Ok
from doubleentry.core.result import Result as Result
from doubleentry.core.result import unwrap as unwrap
from doubleentry.core.types import UtcDatetime as UtcDatetime
