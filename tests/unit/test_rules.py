"""Unit tests for the transaction rule validator"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from transaction_engine.domain.models import (
    TransactionCategory,
    TransactionStatus,
    TransactionType,
    ValidationErrorCode,
)
from transaction_engine.domain.rules import RULES, RuleLimits, validate_transaction

LIMITS = RuleLimits(daily_debit_limit=Decimal("20000"), max_transactions_per_day=10)


def codes(errors):
    return [e.code for e in errors]


def test_valid_transaction_has_no_errors(active_account, today):
    errors = validate_transaction(
        "250", TransactionType.DEBIT, TransactionCategory.PAYMENT, today, active_account, today=today, limits=LIMITS
    )
    assert errors == []


def test_no_account_short_circuits(today):
    """Nothing else is checked without an account, even an invalid amount"""
    errors = validate_transaction(
        -5, TransactionType.DEBIT, TransactionCategory.INCOME, today, None, today=today, limits=LIMITS
    )
    assert codes(errors) == [ValidationErrorCode.NO_ACCOUNT]
    assert errors[0].message == "Please select an account"


def test_inactive_account_short_circuits(inactive_account, today):
    errors = validate_transaction(
        0, TransactionType.CREDIT, TransactionCategory.FEES, today, inactive_account, today=today, limits=LIMITS
    )
    assert codes(errors) == [ValidationErrorCode.ACCOUNT_INACTIVE]


def test_frozen_account_blocks_debit_but_allows_credit(frozen_account, today):
    debit = validate_transaction(
        "10", TransactionType.DEBIT, TransactionCategory.PAYMENT, today, frozen_account, today=today, limits=LIMITS
    )
    credit = validate_transaction(
        "10", TransactionType.CREDIT, TransactionCategory.DEPOSIT, today, frozen_account, today=today, limits=LIMITS
    )

    assert codes(debit) == [ValidationErrorCode.ACCOUNT_FROZEN]
    assert credit == []


def test_frozen_account_errors_accumulate(frozen_account, today):
    """Frozen is not a gate: later rules still report"""
    errors = validate_transaction(
        0, TransactionType.DEBIT, TransactionCategory.INCOME, today, frozen_account, today=today, limits=LIMITS
    )
    assert codes(errors) == [
        ValidationErrorCode.ACCOUNT_FROZEN,
        ValidationErrorCode.INVALID_AMOUNT,
        ValidationErrorCode.INVALID_CATEGORY,
    ]


@pytest.mark.parametrize("amount", [0, -1, "0.00", "abc", "", None, float("nan")])
def test_invalid_amount(active_account, today, amount):
    errors = validate_transaction(
        amount, TransactionType.CREDIT, TransactionCategory.SALARY, today, active_account, today=today, limits=LIMITS
    )
    assert codes(errors) == [ValidationErrorCode.INVALID_AMOUNT]
    assert errors[0].field == "amount"


def test_date_before_opening_is_the_only_error(active_account, today):
    """A valid debit dated one day before opening reports exactly DATE_BEFORE_OPENING"""
    day_before = active_account.opening_date - timedelta(days=1)
    errors = validate_transaction(
        "100", TransactionType.DEBIT, TransactionCategory.PAYMENT, day_before, active_account, today=today, limits=LIMITS
    )

    assert codes(errors) == [ValidationErrorCode.DATE_BEFORE_OPENING]
    assert errors[0].field == "date"
    assert "2024-01-01" in errors[0].message


def test_date_comparison_ignores_time_of_day(active_account, today):
    """A late-evening timestamp on the opening day is still on the opening day"""
    evening = datetime(2024, 1, 1, 23, 59)
    errors = validate_transaction(
        "100", TransactionType.CREDIT, TransactionCategory.SALARY, evening, active_account, today=today, limits=LIMITS
    )
    assert errors == []


@pytest.mark.parametrize(
    "type, category, allowed",
    [
        (TransactionType.CREDIT, TransactionCategory.FEES, "debit"),
        (TransactionType.CREDIT, TransactionCategory.WITHDRAWAL, "debit"),
        (TransactionType.CREDIT, TransactionCategory.PAYMENT, "debit"),
        (TransactionType.DEBIT, TransactionCategory.INCOME, "credit"),
        (TransactionType.DEBIT, TransactionCategory.REFUND, "credit"),
        (TransactionType.DEBIT, TransactionCategory.DEPOSIT, "credit"),
    ],
)
def test_category_restricted_by_direction(active_account, today, type, category, allowed):
    errors = validate_transaction("10", type, category, today, active_account, today=today, limits=LIMITS)

    assert codes(errors) == [ValidationErrorCode.INVALID_CATEGORY]
    assert errors[0].field == "category"
    assert errors[0].message == f"{category.value} category is only allowed for {allowed} transactions"


@pytest.mark.parametrize("category", ["salary", "transfer", "other"])
@pytest.mark.parametrize("type", ["credit", "debit"])
def test_unrestricted_categories(active_account, today, type, category):
    assert validate_transaction("10", type, category, today, active_account, today=today, limits=LIMITS) == []


def test_invalid_amount_and_category_both_reported(active_account, today):
    errors = validate_transaction(
        0, TransactionType.CREDIT, TransactionCategory.FEES, today, active_account, today=today, limits=LIMITS
    )
    assert codes(errors) == [ValidationErrorCode.INVALID_AMOUNT, ValidationErrorCode.INVALID_CATEGORY]


def test_daily_limit_exceeded_reports_remaining(active_account, make_transaction, today):
    """19500 already debited today; 600 more breaks the 20000 limit with 500 left"""
    history = [make_transaction("19500", TransactionType.DEBIT)]
    errors = validate_transaction(
        "600", TransactionType.DEBIT, TransactionCategory.PAYMENT, today, active_account, history, today=today, limits=LIMITS
    )

    assert codes(errors) == [ValidationErrorCode.DAILY_LIMIT_EXCEEDED]
    assert errors[0].field == "amount"
    assert "20,000 EGP" in errors[0].message
    assert "remaining today: 500 EGP" in errors[0].message


def test_daily_limit_exactly_reached_is_allowed(active_account, make_transaction, today):
    history = [make_transaction("19500", TransactionType.DEBIT)]
    errors = validate_transaction(
        "500", TransactionType.DEBIT, TransactionCategory.PAYMENT, today, active_account, history, today=today, limits=LIMITS
    )
    assert errors == []


def test_daily_limit_no_allowance_left(active_account, make_transaction, today):
    history = [make_transaction("20000", TransactionType.DEBIT)]
    errors = validate_transaction(
        "1", TransactionType.DEBIT, TransactionCategory.PAYMENT, today, active_account, history, today=today, limits=LIMITS
    )
    assert codes(errors) == [ValidationErrorCode.DAILY_LIMIT_EXCEEDED]
    assert "No remaining allowance today" in errors[0].message


def test_daily_limit_ignores_future_dates_and_credits(active_account, make_transaction, today):
    history = [make_transaction("19500", TransactionType.DEBIT)]
    tomorrow = today + timedelta(days=1)

    future_debit = validate_transaction(
        "5000", TransactionType.DEBIT, TransactionCategory.PAYMENT, tomorrow, active_account, history, today=today, limits=LIMITS
    )
    credit = validate_transaction(
        "50000", TransactionType.CREDIT, TransactionCategory.SALARY, today, active_account, history, today=today, limits=LIMITS
    )
    assert future_debit == []
    assert credit == []


def test_daily_limit_only_counts_this_account(active_account, make_transaction, today):
    history = [
        make_transaction("19500", TransactionType.DEBIT, account_id="acc_savings"),
        make_transaction("19500", TransactionType.DEBIT, status=TransactionStatus.SCHEDULED),
    ]
    errors = validate_transaction(
        "600", TransactionType.DEBIT, TransactionCategory.PAYMENT, today, active_account, history, today=today, limits=LIMITS
    )
    assert errors == []


def test_max_transactions_per_day(active_account, make_transaction, today):
    history = [make_transaction("1", TransactionType.CREDIT) for _ in range(10)]
    errors = validate_transaction(
        "1", TransactionType.CREDIT, TransactionCategory.SALARY, today, active_account, history, today=today, limits=LIMITS
    )

    assert codes(errors) == [ValidationErrorCode.MAX_TRANSACTIONS_EXCEEDED]
    assert errors[0].field is None
    assert errors[0].message == "Maximum 10 transactions per day exceeded"


def test_max_transactions_not_applied_to_other_days(active_account, make_transaction, today):
    history = [make_transaction("1", TransactionType.CREDIT) for _ in range(10)]
    errors = validate_transaction(
        "1",
        TransactionType.CREDIT,
        TransactionCategory.SALARY,
        today + timedelta(days=3),
        active_account,
        history,
        today=today,
        limits=LIMITS,
    )
    assert errors == []


def test_daily_limit_and_cap_fire_together(active_account, make_transaction, today):
    history = [make_transaction("2000", TransactionType.DEBIT) for _ in range(10)]
    errors = validate_transaction(
        "1", TransactionType.DEBIT, TransactionCategory.PAYMENT, today, active_account, history, today=today, limits=LIMITS
    )
    assert codes(errors) == [ValidationErrorCode.DAILY_LIMIT_EXCEEDED, ValidationErrorCode.MAX_TRANSACTIONS_EXCEEDED]


def test_rule_order_is_fixed():
    assert [rule.__name__ for rule in RULES] == [
        "frozen_account_blocks_debits",
        "amount_positive",
        "date_not_before_opening",
        "credit_category_allowed",
        "debit_category_allowed",
        "daily_debit_limit",
        "daily_transaction_cap",
    ]


def test_limits_come_from_settings(active_account, make_transaction, today, config):
    config.daily_debit_limit = Decimal("100")
    history = [make_transaction("90", TransactionType.DEBIT)]
    errors = validate_transaction(
        "20",
        TransactionType.DEBIT,
        TransactionCategory.PAYMENT,
        today,
        active_account,
        history,
        today=today,
        limits=RuleLimits.from_settings(config),
    )
    assert codes(errors) == [ValidationErrorCode.DAILY_LIMIT_EXCEEDED]
    assert "remaining today: 10 EGP" in errors[0].message
