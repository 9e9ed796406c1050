"""Balance derivation - balances and daily aggregates are never stored, only computed"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List

from transaction_engine.domain.models import Account, Transaction, TransactionStatus, TransactionType


def completed_only(transactions: Iterable[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.status == TransactionStatus.COMPLETED]


def calculate_balance(account: Account, transactions: Iterable[Transaction]) -> Decimal:
    """
    Derive the current balance of an account.

    Requirements:
    - Only completed transactions count; scheduled/draft/reversed are ignored
    - Credits add, debits subtract, starting from the opening balance
    - Decimal arithmetic so repeated folds never drift by a cent
    """
    balance = Decimal(account.opening_balance)
    for txn in completed_only(transactions):
        balance += txn.signed_amount
    return balance


def today_debit_total(account: Account, transactions: Iterable[Transaction], today: date) -> Decimal:
    """Sum of completed debits on this account dated today"""
    return sum(
        (
            t.amount
            for t in completed_only(transactions)
            if t.account_id == account.id and t.type == TransactionType.DEBIT and t.date == today
        ),
        Decimal("0"),
    )


def today_transaction_count(account: Account, transactions: Iterable[Transaction], today: date) -> int:
    """Number of completed transactions (either direction) on this account dated today"""
    return sum(1 for t in completed_only(transactions) if t.account_id == account.id and t.date == today)


def remaining_daily_limit(debited_today: Decimal, daily_limit: Decimal) -> Decimal:
    """Debit allowance left for today, floored at zero"""
    return max(Decimal("0"), daily_limit - debited_today)
