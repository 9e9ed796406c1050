"""Customer-level spending analytics over the shared ledger"""

from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from transaction_engine.config import Settings, settings as default_settings
from transaction_engine.domain import analytics
from transaction_engine.domain.balance import completed_only
from transaction_engine.domain.models import (
    AbnormalSpendingReport,
    AnalyticsSummary,
    CategorySpending,
    MonthlySpending,
    MonthOverMonthChange,
    Transaction,
)
from transaction_engine.infrastructure.ledger.store import LedgerStore
from transaction_engine.infrastructure.observability.metrics import abnormal_spending_counter
from transaction_engine.services.selection import SelectionContext


class SpendingAnalytics:
    """
    Analytics for the selected *customer*: completed transactions across all
    of the customer's accounts, not only the selected account.

    The customer's transaction set is memoised on (ledger version, directory
    version, customer, today), so any ledger mutation invalidates it before
    the next read.
    """

    def __init__(
        self,
        ledger: LedgerStore,
        selection: SelectionContext,
        config: Optional[Settings] = None,
        today: Callable[[], date] = date.today,
    ):
        self.ledger = ledger
        self.selection = selection
        self.config = config or default_settings
        self._today = today
        self._cache_key: Optional[Tuple[int, int, Optional[str], date]] = None
        self._cached: List[Transaction] = []

    def customer_transactions(self) -> List[Transaction]:
        customer_id = self.selection.current_customer_id
        key = (self.ledger.version, self.selection.directory.version, customer_id, self._today())
        if key != self._cache_key:
            self._cached = self._load(customer_id)
            self._cache_key = key
        return list(self._cached)

    def debit_transactions(self) -> List[Transaction]:
        return analytics.debits_of(self.customer_transactions())

    def spending_trend(self) -> List[MonthlySpending]:
        return analytics.spending_trend(self.debit_transactions(), self._today(), self.config.spending_trend_months)

    def average_transaction_size(self) -> Decimal:
        return analytics.average_amount(self.customer_transactions())

    def average_spending(self) -> Decimal:
        return analytics.average_amount(self.debit_transactions())

    def total_spending(self) -> Decimal:
        return analytics.total_amount(self.debit_transactions())

    def total_credits(self) -> Decimal:
        return analytics.total_amount(analytics.credits_of(self.customer_transactions()))

    def total_transactions(self) -> int:
        return len(self.customer_transactions())

    def abnormal_spending(self) -> AbnormalSpendingReport:
        debits = self.debit_transactions()
        report = analytics.detect_abnormal_spending(debits, Decimal(self.config.abnormal_spending_multiplier))
        if report.detected:
            outcome = "detected"
        elif report.message:
            outcome = "clear"
        else:
            outcome = "insufficient_data"
        abnormal_spending_counter.labels(outcome=outcome).inc()
        return report

    def spending_by_category(self) -> List[CategorySpending]:
        return analytics.spending_by_category(self.debit_transactions())

    def month_over_month_change(self) -> MonthOverMonthChange:
        return analytics.month_over_month_change(self.spending_trend())

    def summary(self) -> AnalyticsSummary:
        abnormal = self.abnormal_spending()
        return AnalyticsSummary(
            spending_trend=self.spending_trend(),
            average_transaction_size=self.average_transaction_size(),
            total_transactions=self.total_transactions(),
            abnormal_spending_detected=abnormal.detected,
            abnormal_spending_details=abnormal.message,
        )

    def _load(self, customer_id: Optional[str]) -> List[Transaction]:
        if not customer_id:
            return []
        account_ids = {a.id for a in self.selection.directory.accounts_for_customer(customer_id)}
        return [t for t in completed_only(self.ledger.list()) if t.account_id in account_ids]
