"""Unit tests for JSON logging and metric helpers"""

import io
import json
import logging

from prometheus_client import REGISTRY

from transaction_engine.infrastructure.observability.logging import CustomJsonFormatter, log_transaction_created
from transaction_engine.infrastructure.observability.metrics import record_scheduled_matured, record_validation_failures


def test_json_formatter_adds_service_metadata():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root = logging.getLogger()
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    try:
        log_transaction_created("t1", "a1", "debit", "10.50", "completed")
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)

    record = json.loads(stream.getvalue().splitlines()[-1])
    assert record["message"] == "Transaction created"
    assert record["level"] == "INFO"
    assert record["service"] == "transaction-engine"
    assert record["transaction_id"] == "t1"
    assert record["amount"] == "10.50"
    assert "timestamp" in record


def test_record_validation_failures_counts_each_code():
    name = "txn_engine_validation_failures_total"
    before = REGISTRY.get_sample_value(name, {"code": "ACCOUNT_FROZEN"}) or 0.0

    record_validation_failures(["ACCOUNT_FROZEN", "ACCOUNT_FROZEN"])

    assert REGISTRY.get_sample_value(name, {"code": "ACCOUNT_FROZEN"}) == before + 2


def test_record_scheduled_matured_ignores_zero():
    name = "txn_engine_scheduled_matured_total"
    before = REGISTRY.get_sample_value(name) or 0.0

    record_scheduled_matured(0)
    record_scheduled_matured(3)

    assert REGISTRY.get_sample_value(name) == before + 3
