"""Selected customer/account context shared by the transaction and analytics services"""

import logging
from typing import List, Optional

from transaction_engine.config import Settings, settings as default_settings
from transaction_engine.domain.models import Account, Customer
from transaction_engine.infrastructure.directory import CustomerDirectory
from transaction_engine.infrastructure.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


class SelectionContext:
    """
    Tracks which customer and account are currently in focus.

    Changing the customer resets the account. Only accounts owned by the
    selected customer can be selected. The customer id is written to the
    session store and restored on construction; the account is not.
    """

    def __init__(
        self,
        directory: CustomerDirectory,
        session_store: Optional[KeyValueStore] = None,
        config: Optional[Settings] = None,
    ):
        self.directory = directory
        self.session_store = session_store
        self.config = config or default_settings
        self._customer_id: Optional[str] = None
        self._account_id: Optional[str] = None
        self._restore()

    @property
    def current_customer_id(self) -> Optional[str]:
        return self._customer_id

    @property
    def current_account_id(self) -> Optional[str]:
        return self._account_id

    @property
    def current_customer(self) -> Optional[Customer]:
        if not self._customer_id:
            return None
        return self.directory.get_customer(self._customer_id)

    @property
    def current_account(self) -> Optional[Account]:
        if not self._account_id:
            return None
        return next((a for a in self.customer_accounts() if a.id == self._account_id), None)

    def customer_accounts(self) -> List[Account]:
        if not self._customer_id:
            return []
        return self.directory.accounts_for_customer(self._customer_id)

    def select_customer(self, customer_id: Optional[str]) -> None:
        previous_id = self._customer_id
        if previous_id == customer_id:
            return

        self._customer_id = customer_id
        self._account_id = None

        if self.session_store is not None:
            if customer_id:
                self.session_store.set(self.config.selected_customer_key, customer_id)
            else:
                self.session_store.remove(self.config.selected_customer_key)

        logger.info("Customer selected", extra={"customer_id": customer_id, "previous_id": previous_id})

    def select_account(self, account_id: Optional[str]) -> bool:
        """Select one of the current customer's accounts; returns False (and keeps the old selection) otherwise"""
        if account_id is None:
            self._account_id = None
            return True

        if not any(a.id == account_id for a in self.customer_accounts()):
            logger.warning("Ignoring selection of account outside current customer", extra={"account_id": account_id})
            return False

        self._account_id = account_id
        logger.debug("Account selected", extra={"account_id": account_id})
        return True

    def clear(self) -> None:
        self._customer_id = None
        self._account_id = None
        if self.session_store is not None:
            self.session_store.remove(self.config.selected_customer_key)

    def _restore(self) -> None:
        if self.session_store is None:
            return
        stored_id = self.session_store.get(self.config.selected_customer_key)
        if stored_id:
            self._customer_id = stored_id
            logger.debug("Restored selected customer", extra={"customer_id": stored_id})
