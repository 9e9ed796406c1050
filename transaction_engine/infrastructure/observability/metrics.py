"""Prometheus metrics for transaction volume, rule rejections and analytics checks"""

from typing import Iterable

from prometheus_client import Counter

# Lifecycle metrics
transactions_created_counter = Counter(
    "txn_engine_transactions_created_total",
    "Transactions appended to the ledger",
    ["direction", "status"],  # credit | debit, completed | scheduled
)

validation_failure_counter = Counter(
    "txn_engine_validation_failures_total",
    "Rule violations returned by the validator",
    ["code"],
)

undo_counter = Counter(
    "txn_engine_undo_total",
    "Transactions removed through undo",
)

scheduled_matured_counter = Counter(
    "txn_engine_scheduled_matured_total",
    "Scheduled transactions transitioned to completed",
)

# Analytics metrics
abnormal_spending_counter = Counter(
    "txn_engine_abnormal_spending_checks_total",
    "Abnormal spending evaluations",
    ["outcome"],  # detected | clear | insufficient_data
)


def record_transaction_created(direction: str, status: str) -> None:
    transactions_created_counter.labels(direction=direction, status=status).inc()


def record_validation_failures(codes: Iterable[str]) -> None:
    """Count each rejected rule separately so co-occurring violations are all visible"""
    for code in codes:
        validation_failure_counter.labels(code=code).inc()


def record_scheduled_matured(count: int) -> None:
    if count > 0:
        scheduled_matured_counter.inc(count)
