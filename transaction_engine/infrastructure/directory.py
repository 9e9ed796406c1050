"""Customer and account reference data"""

from typing import Dict, Iterable, List, Optional

from transaction_engine.domain.exceptions import AccountNotFoundError
from transaction_engine.domain.models import Account, Customer


class CustomerDirectory:
    """In-memory registry of customers and their accounts"""

    def __init__(self, customers: Iterable[Customer] = (), accounts: Iterable[Account] = ()):
        self._customers: Dict[str, Customer] = {c.id: c for c in customers}
        self._accounts: Dict[str, Account] = {a.id: a for a in accounts}
        self.version = 0

    def customers(self) -> List[Customer]:
        return list(self._customers.values())

    def accounts(self) -> List[Account]:
        return list(self._accounts.values())

    def add_customer(self, customer: Customer) -> None:
        self._customers[customer.id] = customer
        self.version += 1

    def add_account(self, account: Account) -> None:
        self._accounts[account.id] = account
        self.version += 1

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self._customers.get(customer_id)

    def find_account(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def get_account(self, account_id: str) -> Account:
        """
        Raises:
            AccountNotFoundError: Unknown account id
        """
        account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def accounts_for_customer(self, customer_id: str) -> List[Account]:
        return [a for a in self._accounts.values() if a.customer_id == customer_id]

    def replace_all(self, customers: Iterable[Customer], accounts: Iterable[Account]) -> None:
        self._customers = {c.id: c for c in customers}
        self._accounts = {a.id: a for a in accounts}
        self.version += 1
