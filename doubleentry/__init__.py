"""doubleentry: double-entry bookkeeping core.

Validates transactions against the balancing invariants, derives account
balances from amount history, and reverses or adjusts recorded entries.
"""

from doubleentry.core.errors import ViolationKind as ViolationKind
from doubleentry.core.result import Err as Err
from doubleentry.core.result import Ok as Ok
from doubleentry.ledger import Account as Account
from doubleentry.ledger import AccountType as AccountType
from doubleentry.ledger import Amount as Amount
from doubleentry.ledger import Side as Side
from doubleentry.ledger import Transaction as Transaction
from doubleentry.ledger import TransactionState as TransactionState
from doubleentry.ledger import adjust as adjust
from doubleentry.ledger import balance as balance
from doubleentry.ledger import build_transaction as build_transaction
from doubleentry.ledger import commit as commit
from doubleentry.ledger import reverse as reverse
from doubleentry.ledger import validate as validate

__version__ = "0.1.0"
