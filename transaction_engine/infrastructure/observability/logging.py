"""Structured JSON logging for transaction engine events"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from transaction_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_transaction_created(
    transaction_id: str,
    account_id: str,
    direction: str,
    amount: str,
    status: str,
) -> None:
    """Log a newly created ledger record"""
    logging.info(
        "Transaction created",
        extra={
            "transaction_id": transaction_id,
            "account_id": account_id,
            "step": "transaction_created",
            "direction": direction,
            "amount": amount,
            "status": status,
        },
    )


def log_transaction_rejected(account_id: str | None, codes: list[str]) -> None:
    logging.info(
        "Transaction rejected",
        extra={"account_id": account_id, "step": "validation_failed", "error_codes": codes},
    )


def log_transaction_undone(transaction_id: str) -> None:
    logging.info("Transaction undone", extra={"transaction_id": transaction_id, "step": "undo"})


def log_scheduled_processed(account_id: str, count: int) -> None:
    logging.info(
        "Processed scheduled transactions",
        extra={"account_id": account_id, "step": "maturation", "count": count},
    )
