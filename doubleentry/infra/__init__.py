"""doubleentry.infra: collaborator protocols, in-memory adapters, configuration."""

from doubleentry.infra.config import DEFAULT_CONFIG as DEFAULT_CONFIG
from doubleentry.infra.config import LedgerConfig as LedgerConfig
from doubleentry.infra.memory_adapter import InMemoryAccountStore as InMemoryAccountStore
from doubleentry.infra.memory_adapter import InMemoryPersistence as InMemoryPersistence
from doubleentry.infra.protocols import AccountStore as AccountStore
from doubleentry.infra.protocols import PersistenceBoundary as PersistenceBoundary
