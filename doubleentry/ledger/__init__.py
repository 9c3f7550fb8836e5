"""doubleentry.ledger: accounts, amounts, transactions and their operations."""

from doubleentry.ledger.accounts import Account as Account
from doubleentry.ledger.accounts import AccountType as AccountType
from doubleentry.ledger.accounts import DocumentRef as DocumentRef
from doubleentry.ledger.accounts import Side as Side
from doubleentry.ledger.amounts import Amount as Amount
from doubleentry.ledger.balance import balance as balance
from doubleentry.ledger.balance import net_balance as net_balance
from doubleentry.ledger.balance import side_total as side_total
from doubleentry.ledger.balance import total as total
from doubleentry.ledger.balance import trial_balance as trial_balance
from doubleentry.ledger.builder import build_transaction as build_transaction
from doubleentry.ledger.operations import adjust as adjust
from doubleentry.ledger.operations import is_inverted as is_inverted
from doubleentry.ledger.operations import reverse as reverse
from doubleentry.ledger.posting import commit as commit
from doubleentry.ledger.transactions import TRANSACTION_TRANSITIONS as TRANSACTION_TRANSITIONS
from doubleentry.ledger.transactions import Transaction as Transaction
from doubleentry.ledger.transactions import TransactionState as TransactionState
from doubleentry.ledger.transactions import check_transition as check_transition
from doubleentry.ledger.transactions import validate as validate
from doubleentry.ledger.transactions import violations as violations
