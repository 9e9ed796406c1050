"""Loads the static customers/accounts/transactions data set into memory"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import ValidationError as SchemaValidationError

from transaction_engine.domain.exceptions import InvalidLedgerDataError
from transaction_engine.infrastructure.directory import CustomerDirectory
from transaction_engine.infrastructure.ledger.store import LedgerStore
from transaction_engine.infrastructure.snapshot.schemas import Snapshot

logger = logging.getLogger(__name__)

SNAPSHOT_FILES = ("customers", "accounts", "transactions")


def parse_snapshot(data: Dict[str, List[Dict[str, Any]]]) -> Snapshot:
    """
    Validate raw records.

    Raises:
        InvalidLedgerDataError: A record is missing fields or has invalid values
    """
    try:
        return Snapshot.model_validate(data)
    except SchemaValidationError as e:
        raise InvalidLedgerDataError(f"Invalid snapshot data: {e}") from e


def read_snapshot(directory: Union[str, Path]) -> Snapshot:
    """
    Read <name>.json for each of customers, accounts, transactions.

    A missing file is treated as an empty list.

    Raises:
        InvalidLedgerDataError: On unreadable JSON or invalid records
    """
    base = Path(directory)
    data: Dict[str, List[Dict[str, Any]]] = {}
    for name in SNAPSHOT_FILES:
        path = base / f"{name}.json"
        if not path.exists():
            data[name] = []
            continue
        try:
            data[name] = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise InvalidLedgerDataError(f"Cannot read {path.name}: {e}") from e
    return parse_snapshot(data)


def apply_snapshot(snapshot: Snapshot, directory: CustomerDirectory, ledger: LedgerStore) -> None:
    """Replace directory and ledger contents with the snapshot"""
    directory.replace_all(
        [c.to_domain() for c in snapshot.customers],
        [a.to_domain() for a in snapshot.accounts],
    )
    ledger.replace_all([t.to_domain() for t in snapshot.transactions])

    logger.info(
        "Static data loaded successfully",
        extra={
            "customers": len(snapshot.customers),
            "accounts": len(snapshot.accounts),
            "transactions": len(snapshot.transactions),
        },
    )


def load_snapshot(path: Union[str, Path], directory: CustomerDirectory, ledger: LedgerStore) -> Snapshot:
    snapshot = read_snapshot(path)
    apply_snapshot(snapshot, directory, ledger)
    return snapshot
