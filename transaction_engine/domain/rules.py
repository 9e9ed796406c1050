"""
Transaction rule validator - business rules as an ordered list of pure functions.

Each rule receives a RuleContext and returns a ValidationError or None. The
first two rules are gates: when they fire, nothing else is evaluated. All the
others accumulate, in the order of RULES, so callers can rely on a stable
error order (the first error is the one the UI emphasises).
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Sequence

from transaction_engine.config import Settings, settings as default_settings
from transaction_engine.domain.balance import remaining_daily_limit, today_debit_total, today_transaction_count
from transaction_engine.domain.models import (
    CREDIT_ONLY_CATEGORIES,
    DEBIT_ONLY_CATEGORIES,
    Account,
    AccountStatus,
    Transaction,
    TransactionCategory,
    TransactionType,
    ValidationError,
    ValidationErrorCode,
)
from transaction_engine.utils.date_utils import DateLike, as_date
from transaction_engine.utils.money import AmountLike, format_amount, parse_amount


@dataclass(frozen=True)
class RuleLimits:
    daily_debit_limit: Decimal
    max_transactions_per_day: int

    @classmethod
    def from_settings(cls, config: Settings) -> "RuleLimits":
        return cls(
            daily_debit_limit=Decimal(config.daily_debit_limit),
            max_transactions_per_day=config.max_transactions_per_day,
        )


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at; built once per validation"""

    amount: Optional[Decimal]  # None when the input was not a number
    type: TransactionType
    category: TransactionCategory
    txn_date: date
    account: Optional[Account]
    today: date
    debited_today: Decimal
    completed_today: int
    limits: RuleLimits

    @property
    def is_today(self) -> bool:
        return self.txn_date == self.today


Rule = Callable[[RuleContext], Optional[ValidationError]]


# ---------------------------------------------------------------------------
# Gate rules
# ---------------------------------------------------------------------------


def account_required(ctx: RuleContext) -> Optional[ValidationError]:
    if ctx.account is None:
        return ValidationError(ValidationErrorCode.NO_ACCOUNT, "Please select an account")
    return None


def account_not_inactive(ctx: RuleContext) -> Optional[ValidationError]:
    if ctx.account.status == AccountStatus.INACTIVE:
        return ValidationError(
            ValidationErrorCode.ACCOUNT_INACTIVE,
            "Transactions are disabled for inactive accounts",
        )
    return None


# ---------------------------------------------------------------------------
# Accumulating rules
# ---------------------------------------------------------------------------


def frozen_account_blocks_debits(ctx: RuleContext) -> Optional[ValidationError]:
    if ctx.account.status == AccountStatus.FROZEN and ctx.type == TransactionType.DEBIT:
        return ValidationError(
            ValidationErrorCode.ACCOUNT_FROZEN,
            "Debit transactions are disabled for frozen accounts. Only credits are allowed.",
        )
    return None


def amount_positive(ctx: RuleContext) -> Optional[ValidationError]:
    if ctx.amount is None or ctx.amount <= 0:
        return ValidationError(ValidationErrorCode.INVALID_AMOUNT, "Amount must be greater than zero", "amount")
    return None


def date_not_before_opening(ctx: RuleContext) -> Optional[ValidationError]:
    opening = ctx.account.opening_date
    if ctx.txn_date < opening:
        return ValidationError(
            ValidationErrorCode.DATE_BEFORE_OPENING,
            f"Transaction date cannot be before account opening date ({opening.isoformat()})",
            "date",
        )
    return None


def credit_category_allowed(ctx: RuleContext) -> Optional[ValidationError]:
    if ctx.type == TransactionType.CREDIT and ctx.category in DEBIT_ONLY_CATEGORIES:
        return ValidationError(
            ValidationErrorCode.INVALID_CATEGORY,
            f"{ctx.category.value} category is only allowed for debit transactions",
            "category",
        )
    return None


def debit_category_allowed(ctx: RuleContext) -> Optional[ValidationError]:
    if ctx.type == TransactionType.DEBIT and ctx.category in CREDIT_ONLY_CATEGORIES:
        return ValidationError(
            ValidationErrorCode.INVALID_CATEGORY,
            f"{ctx.category.value} category is only allowed for credit transactions",
            "category",
        )
    return None


def daily_debit_limit(ctx: RuleContext) -> Optional[ValidationError]:
    """Only same-day debits count; future-dated debits are checked when created, not when they mature"""
    if ctx.type != TransactionType.DEBIT or not ctx.is_today or ctx.amount is None:
        return None

    limit = ctx.limits.daily_debit_limit
    if ctx.debited_today + ctx.amount <= limit:
        return None

    currency = ctx.account.currency.value
    remaining = remaining_daily_limit(ctx.debited_today, limit)
    if remaining <= 0:
        message = (
            f"Daily debit limit of {format_amount(limit, currency)} exceeded. "
            "No remaining allowance today."
        )
    else:
        message = (
            f"Daily debit limit of {format_amount(limit, currency)} exceeded. "
            f"Reduce amount; remaining today: {format_amount(remaining, currency)}"
        )
    return ValidationError(ValidationErrorCode.DAILY_LIMIT_EXCEEDED, message, "amount")


def daily_transaction_cap(ctx: RuleContext) -> Optional[ValidationError]:
    if ctx.is_today and ctx.completed_today >= ctx.limits.max_transactions_per_day:
        return ValidationError(
            ValidationErrorCode.MAX_TRANSACTIONS_EXCEEDED,
            f"Maximum {ctx.limits.max_transactions_per_day} transactions per day exceeded",
        )
    return None


GATE_RULES: Sequence[Rule] = (account_required, account_not_inactive)

RULES: Sequence[Rule] = (
    frozen_account_blocks_debits,
    amount_positive,
    date_not_before_opening,
    credit_category_allowed,
    debit_category_allowed,
    daily_debit_limit,
    daily_transaction_cap,
)


def run_rules(ctx: RuleContext) -> List[ValidationError]:
    """Apply gate rules (stop at the first hit), then collect every accumulating rule's error"""
    for gate in GATE_RULES:
        error = gate(ctx)
        if error is not None:
            return [error]

    return [error for error in (rule(ctx) for rule in RULES) if error is not None]


def validate_transaction(
    amount: AmountLike,
    type: TransactionType,
    category: TransactionCategory,
    txn_date: DateLike,
    account: Optional[Account],
    transactions: Iterable[Transaction] = (),
    *,
    today: Optional[date] = None,
    limits: Optional[RuleLimits] = None,
) -> List[ValidationError]:
    """
    Validate a proposed transaction against the account and its ledger history.

    Args:
        amount: Proposed amount; anything non-numeric is reported as INVALID_AMOUNT
        type: credit or debit
        category: Transaction category
        txn_date: Transaction date (datetimes and ISO strings are reduced to a date)
        account: Target account, or None when nothing is selected
        transactions: Existing ledger records; only this account's completed ones are used
        today: Reference "today" (default: date.today())
        limits: Daily limits (default: from settings)

    Returns:
        Validation errors in rule order; empty when the transaction is allowed
    """
    today = today or date.today()
    limits = limits or RuleLimits.from_settings(default_settings)
    history = list(transactions)

    ctx = RuleContext(
        amount=parse_amount(amount),
        type=TransactionType(type),
        category=TransactionCategory(category),
        txn_date=as_date(txn_date),
        account=account,
        today=today,
        debited_today=today_debit_total(account, history, today) if account else Decimal("0"),
        completed_today=today_transaction_count(account, history, today) if account else 0,
        limits=limits,
    )
    return run_rules(ctx)
