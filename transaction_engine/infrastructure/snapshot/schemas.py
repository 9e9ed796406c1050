"""Pydantic schemas for the static JSON data set (camelCase on the wire)"""

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from transaction_engine.domain.models import (
    Account,
    AccountStatus,
    AccountType,
    Currency,
    Customer,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)
from transaction_engine.utils.date_utils import as_date


class SnapshotRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerRecord(SnapshotRecord):
    """Entry of customers.json"""

    id: str = Field(..., min_length=1)
    name: str
    email: str = ""
    phone: str = ""
    national_id: str = ""
    created_at: Optional[dt.datetime] = None

    def to_domain(self) -> Customer:
        return Customer(
            id=self.id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            national_id=self.national_id,
            created_at=self.created_at,
        )


class AccountRecord(SnapshotRecord):
    """Entry of accounts.json"""

    id: str = Field(..., min_length=1)
    customer_id: str
    account_number: str = ""
    type: AccountType = AccountType.CURRENT
    status: AccountStatus
    currency: Currency
    opening_date: dt.date
    opening_balance: Decimal

    @field_validator("opening_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        # timestamps such as "2021-03-01T00:00:00Z" are reduced to their calendar date
        return as_date(value) if isinstance(value, str) else value

    def to_domain(self) -> Account:
        return Account(
            id=self.id,
            customer_id=self.customer_id,
            account_number=self.account_number,
            type=self.type,
            status=self.status,
            currency=self.currency,
            opening_date=self.opening_date,
            opening_balance=self.opening_balance,
        )


class TransactionRecord(SnapshotRecord):
    """Entry of transactions.json"""

    id: str = Field(..., min_length=1)
    account_id: str
    type: TransactionType
    category: TransactionCategory
    amount: Decimal = Field(..., gt=0)
    currency: Currency
    description: str = ""
    date: dt.date
    status: TransactionStatus
    created_at: dt.datetime
    reference: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value):
        return as_date(value) if isinstance(value, str) else value

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            account_id=self.account_id,
            type=self.type,
            category=self.category,
            amount=self.amount,
            currency=self.currency,
            description=self.description,
            date=self.date,
            status=self.status,
            created_at=self.created_at,
            reference=self.reference,
        )


class Snapshot(BaseModel):
    customers: List[CustomerRecord] = []
    accounts: List[AccountRecord] = []
    transactions: List[TransactionRecord] = []
