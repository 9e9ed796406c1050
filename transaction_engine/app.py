"""Engine factory - wires ledger, selection, drafts, transactions and analytics together"""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional, Union

from transaction_engine.config import Settings, settings as default_settings
from transaction_engine.infrastructure.database.session import build_engine, build_session_factory
from transaction_engine.infrastructure.directory import CustomerDirectory
from transaction_engine.infrastructure.ledger.store import LedgerStore
from transaction_engine.infrastructure.observability.logging import setup_logging
from transaction_engine.infrastructure.snapshot.loader import load_snapshot
from transaction_engine.infrastructure.storage.kv import InMemoryKeyValueStore, KeyValueStore, SqlKeyValueStore
from transaction_engine.services.analytics import SpendingAnalytics
from transaction_engine.services.drafts import DraftManager
from transaction_engine.services.selection import SelectionContext
from transaction_engine.services.transactions import TransactionService
from transaction_engine.utils.date_utils import utc_now


@dataclass
class TransactionEngine:
    """All collaborators of one single-user session"""

    directory: CustomerDirectory
    ledger: LedgerStore
    selection: SelectionContext
    drafts: DraftManager
    transactions: TransactionService
    analytics: SpendingAnalytics

    def load(self, path: Union[str, Path]) -> None:
        """Replace reference data and ledger with a JSON snapshot directory"""
        load_snapshot(path, self.directory, self.ledger)


def durable_store(config: Optional[Settings] = None) -> SqlKeyValueStore:
    """Key-value store persisted in the configured database"""
    config = config or default_settings
    engine = build_engine(config.database_url)
    return SqlKeyValueStore(build_session_factory(engine), prefix=config.storage_prefix)


def create_transaction_engine(
    config: Optional[Settings] = None,
    *,
    directory: Optional[CustomerDirectory] = None,
    ledger: Optional[LedgerStore] = None,
    local_store: Optional[KeyValueStore] = None,
    session_store: Optional[KeyValueStore] = None,
    today: Callable[[], date] = date.today,
    now: Callable[[], datetime] = utc_now,
    configure_logging: bool = False,
) -> TransactionEngine:
    """
    Create and wire a TransactionEngine.

    Args:
        config: Settings (default: environment-backed module settings)
        directory: Customers/accounts (default: empty)
        ledger: Ledger store (default: empty)
        local_store: Store for the draft slot (default: in-memory)
        session_store: Store for the selected customer (default: in-memory)
        today: Clock for date-only rules
        now: Clock for creation/save timestamps
        configure_logging: Install the JSON log handler at config.log_level
    """
    config = config or default_settings
    if configure_logging:
        setup_logging(config.log_level)

    directory = directory if directory is not None else CustomerDirectory()
    ledger = ledger if ledger is not None else LedgerStore()
    local_store = local_store if local_store is not None else InMemoryKeyValueStore(config.storage_prefix)
    session_store = session_store if session_store is not None else InMemoryKeyValueStore(config.storage_prefix)

    selection = SelectionContext(directory, session_store, config)
    drafts = DraftManager(local_store, config, clock=now)
    transactions = TransactionService(ledger, selection, drafts, config, today=today, now=now)
    analytics = SpendingAnalytics(ledger, selection, config, today=today)

    return TransactionEngine(
        directory=directory,
        ledger=ledger,
        selection=selection,
        drafts=drafts,
        transactions=transactions,
        analytics=analytics,
    )
