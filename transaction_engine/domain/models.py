"""Domain models - pure Python dataclasses representing banking entities"""

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional


class Currency(str, enum.Enum):
    EGP = "EGP"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    SAR = "SAR"


class AccountStatus(str, enum.Enum):
    ACTIVE = "active"
    FROZEN = "frozen"
    INACTIVE = "inactive"


class AccountType(str, enum.Enum):
    SAVINGS = "savings"
    CHECKING = "checking"
    CURRENT = "current"


class TransactionType(str, enum.Enum):
    """Direction of a transaction relative to the account"""

    CREDIT = "credit"
    DEBIT = "debit"


class TransactionStatus(str, enum.Enum):
    """
    Lifecycle status of a transaction.

    DRAFT and REVERSED are reserved: no flow in the engine produces them.
    """

    COMPLETED = "completed"
    SCHEDULED = "scheduled"
    DRAFT = "draft"
    REVERSED = "reversed"


class TransactionCategory(str, enum.Enum):
    SALARY = "salary"
    TRANSFER = "transfer"
    PAYMENT = "payment"
    WITHDRAWAL = "withdrawal"
    DEPOSIT = "deposit"
    INCOME = "income"
    FEES = "fees"
    REFUND = "refund"
    OTHER = "other"


CREDIT_ONLY_CATEGORIES = frozenset(
    {TransactionCategory.INCOME, TransactionCategory.REFUND, TransactionCategory.DEPOSIT}
)
DEBIT_ONLY_CATEGORIES = frozenset(
    {TransactionCategory.FEES, TransactionCategory.WITHDRAWAL, TransactionCategory.PAYMENT}
)


class ValidationErrorCode(str, enum.Enum):
    """Closed set of business rule violations returned by the validator"""

    NO_ACCOUNT = "NO_ACCOUNT"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    ACCOUNT_FROZEN = "ACCOUNT_FROZEN"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    DATE_BEFORE_OPENING = "DATE_BEFORE_OPENING"
    INVALID_CATEGORY = "INVALID_CATEGORY"
    DAILY_LIMIT_EXCEEDED = "DAILY_LIMIT_EXCEEDED"
    MAX_TRANSACTIONS_EXCEEDED = "MAX_TRANSACTIONS_EXCEEDED"


@dataclass
class Customer:
    """Bank customer owning one or more accounts"""

    id: str
    name: str
    email: str = ""
    phone: str = ""
    national_id: str = ""
    created_at: Optional[datetime] = None


@dataclass
class Account:
    """
    Bank account. The balance is never stored here; it is always derived
    from the opening balance and the completed transactions in the ledger.
    """

    id: str
    customer_id: str
    currency: Currency
    status: AccountStatus
    opening_date: date
    opening_balance: Decimal
    account_number: str = ""
    type: AccountType = AccountType.CURRENT


@dataclass
class Transaction:
    """Single ledger record"""

    id: str
    account_id: str
    type: TransactionType
    category: TransactionCategory
    amount: Decimal
    currency: Currency
    description: str
    date: date
    status: TransactionStatus
    created_at: datetime
    reference: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == TransactionType.CREDIT else -self.amount


@dataclass
class DraftTransaction:
    """Partially filled transaction form, not yet submitted"""

    account_id: Optional[str] = None
    type: Optional[TransactionType] = None
    category: Optional[TransactionCategory] = None
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    date: Optional[date] = None
    saved_at: Optional[datetime] = None


@dataclass
class ValidationError:
    """A single business rule violation, ready for display"""

    code: ValidationErrorCode
    message: str
    field: Optional[str] = None


@dataclass
class CreateTransactionResult:
    """Outcome of a create request: the new record or the rule violations"""

    success: bool
    transaction: Optional[Transaction] = None
    errors: List[ValidationError] = field(default_factory=list)


@dataclass
class MonthlySpending:
    """Debit totals for one calendar month"""

    month: str  # "Jan", "Feb", ...
    year: int
    total: Decimal
    count: int


@dataclass
class CategorySpending:
    category: TransactionCategory
    amount: Decimal


@dataclass
class AbnormalSpendingReport:
    detected: bool
    transactions: List[Transaction] = field(default_factory=list)
    message: str = ""


@dataclass
class MonthOverMonthChange:
    change: Decimal
    percentage: int
    direction: str  # "up" | "down" | "stable"


@dataclass
class AnalyticsSummary:
    """Headline analytics for the selected customer"""

    spending_trend: List[MonthlySpending]
    average_transaction_size: Decimal
    total_transactions: int
    abnormal_spending_detected: bool
    abnormal_spending_details: str
