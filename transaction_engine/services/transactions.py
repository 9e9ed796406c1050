"""Transaction lifecycle - creation, maturation of scheduled records and single-level undo"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, List, Optional

from transaction_engine.config import Settings, settings as default_settings
from transaction_engine.domain.balance import (
    calculate_balance,
    remaining_daily_limit,
    today_debit_total,
    today_transaction_count,
)
from transaction_engine.domain.models import (
    Account,
    CreateTransactionResult,
    Transaction,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
    ValidationError,
)
from transaction_engine.domain.rules import RuleLimits, validate_transaction
from transaction_engine.infrastructure.ledger.store import LedgerStore
from transaction_engine.infrastructure.observability.logging import (
    log_scheduled_processed,
    log_transaction_created,
    log_transaction_rejected,
    log_transaction_undone,
)
from transaction_engine.infrastructure.observability.metrics import (
    record_scheduled_matured,
    record_transaction_created,
    record_validation_failures,
    undo_counter,
)
from transaction_engine.services.drafts import DraftManager
from transaction_engine.services.selection import SelectionContext
from transaction_engine.utils.date_utils import DateLike, as_date, utc_now
from transaction_engine.utils.money import AmountLike, parse_amount


def generate_reference(type: TransactionType, now: datetime) -> str:
    """Cosmetic reference code: CR-/DR- plus the last 8 digits of the millisecond clock"""
    prefix = "CR" if type == TransactionType.CREDIT else "DR"
    millis = str(int(now.timestamp() * 1000))
    return f"{prefix}-{millis[-8:]}"


class TransactionService:
    """
    Creates transactions for the selected account and manages their lifecycle.

    Undo is a single slot: it holds the most recent *completed* creation and is
    overwritten by every new creation (a scheduled creation empties it).
    """

    def __init__(
        self,
        ledger: LedgerStore,
        selection: SelectionContext,
        drafts: Optional[DraftManager] = None,
        config: Optional[Settings] = None,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = utc_now,
    ):
        self.ledger = ledger
        self.selection = selection
        self.drafts = drafts
        self.config = config or default_settings
        self.limits = RuleLimits.from_settings(self.config)
        self._today = today
        self._now = now
        self._last_transaction: Optional[Transaction] = None
        self.ledger.subscribe(self._on_ledger_change)

    # ------------------------------------------------------------------
    # Read-side views for the selected account
    # ------------------------------------------------------------------

    @property
    def last_transaction(self) -> Optional[Transaction]:
        return self._last_transaction

    @property
    def can_undo(self) -> bool:
        return self._last_transaction is not None

    def account_transactions(self) -> List[Transaction]:
        """Selected account's records, newest date first"""
        account_id = self.selection.current_account_id
        if not account_id:
            return []
        records = [t for t in self.ledger.list() if t.account_id == account_id]
        return sorted(records, key=lambda t: t.date, reverse=True)

    def completed_transactions(self) -> List[Transaction]:
        return [t for t in self.account_transactions() if t.status == TransactionStatus.COMPLETED]

    def scheduled_transactions(self) -> List[Transaction]:
        return [t for t in self.account_transactions() if t.status == TransactionStatus.SCHEDULED]

    def account_balance(self) -> Decimal:
        account = self.selection.current_account
        if account is None:
            return Decimal("0")
        return calculate_balance(account, self.completed_transactions())

    def today_debit_total(self) -> Decimal:
        account = self.selection.current_account
        if account is None:
            return Decimal("0")
        return today_debit_total(account, self.ledger.list(), self._today())

    def remaining_daily_limit(self) -> Decimal:
        return remaining_daily_limit(self.today_debit_total(), self.limits.daily_debit_limit)

    def today_transaction_count(self) -> int:
        account = self.selection.current_account
        if account is None:
            return 0
        return today_transaction_count(account, self.ledger.list(), self._today())

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def validate(
        self,
        amount: AmountLike,
        type: TransactionType,
        category: TransactionCategory,
        txn_date: DateLike,
        account: Optional[Account] = None,
    ) -> List[ValidationError]:
        """Validate against the ledger; defaults to the selected account"""
        target = account if account is not None else self.selection.current_account
        return validate_transaction(
            amount,
            type,
            category,
            txn_date,
            target,
            self.ledger.list(),
            today=self._today(),
            limits=self.limits,
        )

    def create_transaction(
        self,
        type: TransactionType,
        category: TransactionCategory,
        amount: AmountLike,
        description: str,
        txn_date: DateLike,
    ) -> CreateTransactionResult:
        """
        Validate and, if allowed, append a new transaction for the selected account.

        Flow:
        1. Run the rule validator; on any error return them with no side effects
        2. Status is scheduled for future dates, completed otherwise
        3. Append to the ledger
        4. Completed records take the undo slot; scheduled ones empty it
        5. Clear the saved draft
        """
        account = self.selection.current_account
        errors = self.validate(amount, type, category, txn_date, account)
        if errors:
            codes = [e.code.value for e in errors]
            record_validation_failures(codes)
            log_transaction_rejected(account.id if account else None, codes)
            return CreateTransactionResult(success=False, errors=errors)

        type = TransactionType(type)
        txn_date = as_date(txn_date)
        now = self._now()
        status = TransactionStatus.SCHEDULED if txn_date > self._today() else TransactionStatus.COMPLETED

        transaction = Transaction(
            id=str(uuid.uuid4()),
            account_id=account.id,
            type=type,
            category=TransactionCategory(category),
            amount=parse_amount(amount),
            currency=account.currency,
            description=description,
            date=txn_date,
            status=status,
            created_at=now,
            reference=generate_reference(type, now),
        )
        self.ledger.append(transaction)

        self._last_transaction = transaction if status == TransactionStatus.COMPLETED else None

        if self.drafts is not None:
            self.drafts.clear_draft()

        record_transaction_created(type.value, status.value)
        log_transaction_created(transaction.id, account.id, type.value, str(transaction.amount), status.value)
        return CreateTransactionResult(success=True, transaction=transaction)

    def undo_last_transaction(self) -> bool:
        """Remove the transaction in the undo slot; False when the slot is empty"""
        last = self._last_transaction
        if last is None:
            return False

        self._last_transaction = None
        if not self.ledger.remove(last.id):
            return False

        undo_counter.inc()
        log_transaction_undone(last.id)
        return True

    def clear_undo_state(self) -> None:
        self._last_transaction = None

    def _on_ledger_change(self, event: str, transaction: Optional[Transaction]) -> None:
        # the undo slot must never outlive its ledger record
        if event == "replaced":
            self.clear_undo_state()
        elif event == "removed" and self._last_transaction is not None and transaction.id == self._last_transaction.id:
            self.clear_undo_state()

    def process_scheduled_transactions(self) -> int:
        """
        Complete every scheduled transaction of the selected account that is due.

        Rules are not re-run here: a record validated at creation matures even
        if it would now break the daily limit. Idempotent.

        Returns:
            Number of transactions moved to completed
        """
        today = self._today()
        processed = 0
        for txn in self.scheduled_transactions():
            if txn.date <= today:
                self.ledger.update(txn.id, status=TransactionStatus.COMPLETED)
                processed += 1

        if processed > 0:
            record_scheduled_matured(processed)
            log_scheduled_processed(self.selection.current_account_id, processed)

        return processed
