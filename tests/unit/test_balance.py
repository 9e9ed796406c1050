"""Unit tests for balance derivation"""

import random
from datetime import timedelta
from decimal import Decimal

from transaction_engine.domain.balance import (
    calculate_balance,
    remaining_daily_limit,
    today_debit_total,
    today_transaction_count,
)
from transaction_engine.domain.models import TransactionStatus, TransactionType


def test_calculate_balance_opening_plus_credit(active_account, make_transaction):
    """Opening balance 1000 plus one completed credit of 500"""
    credit = make_transaction("500", TransactionType.CREDIT)

    assert calculate_balance(active_account, [credit]) == Decimal("1500")


def test_calculate_balance_ignores_non_completed(active_account, make_transaction):
    """Scheduled, draft and reversed records never touch the balance"""
    transactions = [
        make_transaction("200", TransactionType.CREDIT),
        make_transaction("50", TransactionType.DEBIT),
        make_transaction("999", TransactionType.CREDIT, status=TransactionStatus.SCHEDULED),
        make_transaction("999", TransactionType.DEBIT, status=TransactionStatus.DRAFT),
        make_transaction("999", TransactionType.DEBIT, status=TransactionStatus.REVERSED),
    ]

    assert calculate_balance(active_account, transactions) == Decimal("1150")


def test_calculate_balance_order_independent(active_account, make_transaction):
    """Any permutation of the same records yields the same balance"""
    transactions = [
        make_transaction("0.10", TransactionType.CREDIT),
        make_transaction("0.20", TransactionType.CREDIT),
        make_transaction("0.30", TransactionType.DEBIT),
        make_transaction("1234.56", TransactionType.DEBIT),
        make_transaction("99.99", TransactionType.CREDIT),
    ]
    expected = Decimal("1000") + Decimal("0.10") + Decimal("0.20") - Decimal("0.30") - Decimal("1234.56") + Decimal("99.99")

    rng = random.Random(7)
    for _ in range(10):
        shuffled = transactions[:]
        rng.shuffle(shuffled)
        assert calculate_balance(active_account, shuffled) == expected


def test_calculate_balance_no_cent_drift(active_account, make_transaction):
    """Ten credits of 0.10 add up to exactly 1.00"""
    transactions = [make_transaction("0.10", TransactionType.CREDIT) for _ in range(10)]

    assert calculate_balance(active_account, transactions) == Decimal("1001.00")


def test_today_aggregates_only_count_completed_on_account(active_account, make_transaction, today):
    transactions = [
        make_transaction("300", TransactionType.DEBIT),
        make_transaction("200", TransactionType.DEBIT),
        make_transaction("700", TransactionType.CREDIT),
        make_transaction("50", TransactionType.DEBIT, txn_date=today - timedelta(days=1)),
        make_transaction("80", TransactionType.DEBIT, account_id="acc_savings"),
        make_transaction("90", TransactionType.DEBIT, status=TransactionStatus.SCHEDULED),
    ]

    assert today_debit_total(active_account, transactions, today) == Decimal("500")
    assert today_transaction_count(active_account, transactions, today) == 3


def test_remaining_daily_limit_floors_at_zero():
    assert remaining_daily_limit(Decimal("19500"), Decimal("20000")) == Decimal("500")
    assert remaining_daily_limit(Decimal("25000"), Decimal("20000")) == Decimal("0")
