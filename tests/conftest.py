"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable

from transaction_engine.app import TransactionEngine, create_transaction_engine
from transaction_engine.config import Settings
from transaction_engine.domain.models import (
    Account,
    AccountStatus,
    Currency,
    Customer,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)
from transaction_engine.infrastructure.database.session import build_engine, build_session_factory
from transaction_engine.infrastructure.directory import CustomerDirectory
from transaction_engine.infrastructure.ledger.store import LedgerStore
from transaction_engine.infrastructure.storage.kv import InMemoryKeyValueStore, SqlKeyValueStore


# Fixed clock: mid-month so the three-month window is Apr, May, Jun 2024
TODAY = date(2024, 6, 15)
NOW = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def config() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def active_account() -> Account:
    return Account(
        id="acc_active",
        customer_id="cust_1",
        currency=Currency.EGP,
        status=AccountStatus.ACTIVE,
        opening_date=date(2024, 1, 1),
        opening_balance=Decimal("1000"),
        account_number="EG-0001",
    )


@pytest.fixture
def savings_account() -> Account:
    """Second account of the same customer"""
    return Account(
        id="acc_savings",
        customer_id="cust_1",
        currency=Currency.EGP,
        status=AccountStatus.ACTIVE,
        opening_date=date(2023, 6, 1),
        opening_balance=Decimal("5000"),
    )


@pytest.fixture
def frozen_account() -> Account:
    return Account(
        id="acc_frozen",
        customer_id="cust_1",
        currency=Currency.USD,
        status=AccountStatus.FROZEN,
        opening_date=date(2024, 1, 1),
        opening_balance=Decimal("300"),
    )


@pytest.fixture
def inactive_account() -> Account:
    return Account(
        id="acc_inactive",
        customer_id="cust_1",
        currency=Currency.EGP,
        status=AccountStatus.INACTIVE,
        opening_date=date(2024, 1, 1),
        opening_balance=Decimal("0"),
    )


@pytest.fixture
def other_customer_account() -> Account:
    return Account(
        id="acc_other",
        customer_id="cust_2",
        currency=Currency.EUR,
        status=AccountStatus.ACTIVE,
        opening_date=date(2024, 1, 1),
        opening_balance=Decimal("100"),
    )


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for ledger records with sensible defaults"""
    counter = {"n": 0}

    def factory(
        amount="100",
        type=TransactionType.DEBIT,
        txn_date: date = TODAY,
        account_id: str = "acc_active",
        category=TransactionCategory.OTHER,
        status=TransactionStatus.COMPLETED,
    ) -> Transaction:
        counter["n"] += 1
        return Transaction(
            id=f"txn_{counter['n']}",
            account_id=account_id,
            type=TransactionType(type),
            category=TransactionCategory(category),
            amount=Decimal(amount),
            currency=Currency.EGP,
            description="Test",
            date=txn_date,
            status=TransactionStatus(status),
            created_at=NOW - timedelta(days=1),
        )

    return factory


@pytest.fixture
def directory(active_account, savings_account, frozen_account, inactive_account, other_customer_account) -> CustomerDirectory:
    return CustomerDirectory(
        customers=[Customer(id="cust_1", name="Mona Hassan"), Customer(id="cust_2", name="Omar Adel")],
        accounts=[active_account, savings_account, frozen_account, inactive_account, other_customer_account],
    )


@pytest.fixture
def ledger() -> LedgerStore:
    return LedgerStore()


@pytest.fixture
def local_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def engine(config, directory, ledger, local_store) -> TransactionEngine:
    """Engine with cust_1 / acc_active selected and the clock fixed at TODAY"""
    engine = create_transaction_engine(
        config,
        directory=directory,
        ledger=ledger,
        local_store=local_store,
        today=lambda: TODAY,
        now=lambda: NOW,
    )
    engine.selection.select_customer("cust_1")
    engine.selection.select_account("acc_active")
    return engine


@pytest.fixture
def sql_store() -> SqlKeyValueStore:
    """Key-value store on a private in-memory SQLite database"""
    db_engine = build_engine("sqlite:///:memory:")
    try:
        yield SqlKeyValueStore(build_session_factory(db_engine))
    finally:
        db_engine.dispose()
