"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidLedgerDataError(DomainException):
    """Snapshot or stored transaction data is malformed or invalid"""

    pass


class TransactionNotFoundError(DomainException):
    """No transaction with the given id exists in the ledger"""

    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction not found: {transaction_id}")
        self.transaction_id = transaction_id


class AccountNotFoundError(DomainException):
    """No account with the given id exists in the directory"""

    def __init__(self, account_id: str):
        super().__init__(f"Account not found: {account_id}")
        self.account_id = account_id
