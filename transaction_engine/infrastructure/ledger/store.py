"""In-memory ledger store - the single source of truth for transaction records"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional

from transaction_engine.domain.exceptions import TransactionNotFoundError
from transaction_engine.domain.models import Transaction

logger = logging.getLogger(__name__)

Listener = Callable[[str, Optional[Transaction]], None]


class LedgerStore:
    """
    Observable collection of transactions across all accounts.

    Performs no validation; callers are expected to validate before appending.
    Every mutation bumps `version` and notifies listeners with
    ("appended" | "updated" | "removed", transaction), or ("replaced", None)
    after a bulk load.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions: Dict[str, Transaction] = {t.id: t for t in transactions}
        self._listeners: List[Listener] = []
        self.version = 0

    def list(self) -> List[Transaction]:
        """Snapshot of all records in insertion order"""
        return list(self._transactions.values())

    def get(self, transaction_id: str) -> Transaction | None:
        return self._transactions.get(transaction_id)

    def append(self, transaction: Transaction) -> None:
        self._transactions[transaction.id] = transaction
        logger.debug("Transaction added to ledger", extra={"transaction_id": transaction.id})
        self._changed("appended", transaction)

    def update(self, transaction_id: str, **fields) -> Transaction:
        """
        Replace fields of an existing record; identity is preserved.

        Raises:
            TransactionNotFoundError: No record with this id
        """
        current = self._transactions.get(transaction_id)
        if current is None:
            raise TransactionNotFoundError(transaction_id)

        updated = replace(current, **fields)
        self._transactions[transaction_id] = updated
        logger.debug("Transaction updated in ledger", extra={"transaction_id": transaction_id})
        self._changed("updated", updated)
        return updated

    def remove(self, transaction_id: str) -> bool:
        """Remove a record; returns False when it was not present"""
        removed = self._transactions.pop(transaction_id, None)
        if removed is None:
            return False
        logger.debug("Transaction removed from ledger", extra={"transaction_id": transaction_id})
        self._changed("removed", removed)
        return True

    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        """Swap in a freshly loaded data set (bulk load / reload)"""
        self._transactions = {t.id: t for t in transactions}
        logger.debug("Ledger replaced", extra={"transactions": len(self._transactions)})
        self._changed("replaced", None)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it"""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def __len__(self) -> int:
        return len(self._transactions)

    def _changed(self, event: str, transaction: Optional[Transaction]) -> None:
        self.version += 1
        for listener in list(self._listeners):
            listener(event, transaction)
