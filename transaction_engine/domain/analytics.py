"""Spending analytics - pure aggregations over completed transactions"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Sequence

from transaction_engine.domain.models import (
    AbnormalSpendingReport,
    CategorySpending,
    MonthlySpending,
    MonthOverMonthChange,
    Transaction,
    TransactionCategory,
    TransactionType,
)
from transaction_engine.utils.date_utils import month_label, trailing_months
from transaction_engine.utils.money import round_whole

ABNORMAL_MIN_SAMPLE = 3


def debits_of(transactions: Sequence[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.type == TransactionType.DEBIT]


def credits_of(transactions: Sequence[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.type == TransactionType.CREDIT]


def total_amount(transactions: Sequence[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), Decimal("0"))


def average_amount(transactions: Sequence[Transaction]) -> Decimal:
    """Mean amount rounded half-up to whole units; 0 for an empty set"""
    if not transactions:
        return Decimal("0")
    return round_whole(total_amount(transactions) / len(transactions))


def spending_trend(debits: Sequence[Transaction], today: date, months: int = 3) -> List[MonthlySpending]:
    """
    Debit totals per calendar month for the `months` months ending with
    today's month, oldest first. Months without debits are present with zeros.
    """
    trend = []
    for year, month in trailing_months(today, months):
        in_month = [t for t in debits if t.date.year == year and t.date.month == month]
        trend.append(
            MonthlySpending(
                month=month_label(month),
                year=year,
                total=total_amount(in_month),
                count=len(in_month),
            )
        )
    return trend


def detect_abnormal_spending(debits: Sequence[Transaction], multiplier: Decimal) -> AbnormalSpendingReport:
    """
    Flag debits larger than `multiplier` times the average debit.

    Requirements:
    - At least ABNORMAL_MIN_SAMPLE debits and a positive average, otherwise
      nothing is evaluated (detected=False, empty message)
    - Otherwise a message is always produced, counting the flagged debits
    """
    average = average_amount(debits)
    if average == 0 or len(debits) < ABNORMAL_MIN_SAMPLE:
        return AbnormalSpendingReport(detected=False)

    threshold = average * multiplier
    flagged = [t for t in debits if t.amount > threshold]

    if not flagged:
        return AbnormalSpendingReport(detected=False, message="No abnormal spending detected")

    percent = round_whole(multiplier * 100)
    return AbnormalSpendingReport(
        detected=True,
        transactions=flagged,
        message=f"{len(flagged)} transaction(s) exceed {percent}% of average spending",
    )


def spending_by_category(debits: Sequence[Transaction]) -> List[CategorySpending]:
    """Debit totals per category, largest first; equal totals keep first-seen order"""
    totals: Dict[TransactionCategory, Decimal] = defaultdict(Decimal)
    for txn in debits:
        totals[txn.category] += txn.amount

    # sorted() is stable and dicts keep insertion order, so ties stay first-seen
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategorySpending(category=category, amount=amount) for category, amount in ranked]


def month_over_month_change(trend: Sequence[MonthlySpending]) -> MonthOverMonthChange:
    """Compare the last two months of a spending trend"""
    if len(trend) < 2:
        return MonthOverMonthChange(change=Decimal("0"), percentage=0, direction="stable")

    current = trend[-1].total
    previous = trend[-2].total

    if previous == 0:
        return MonthOverMonthChange(change=current, percentage=0, direction="stable")

    change = current - previous
    percentage = int(round_whole(change / previous * 100))
    if change > 0:
        direction = "up"
    elif change < 0:
        direction = "down"
    else:
        direction = "stable"

    return MonthOverMonthChange(change=change, percentage=percentage, direction=direction)
