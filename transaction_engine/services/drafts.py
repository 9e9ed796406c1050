"""Draft persistence - one unsubmitted transaction kept in a key-value slot"""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional

from transaction_engine.config import Settings, settings as default_settings
from transaction_engine.domain.models import DraftTransaction, TransactionCategory, TransactionType
from transaction_engine.infrastructure.storage.kv import KeyValueStore
from transaction_engine.utils.date_utils import utc_now
from transaction_engine.utils.money import parse_amount

logger = logging.getLogger(__name__)


def draft_to_dict(draft: DraftTransaction) -> Dict[str, Any]:
    return {
        "account_id": draft.account_id,
        "type": draft.type.value if draft.type else None,
        "category": draft.category.value if draft.category else None,
        "amount": str(draft.amount) if draft.amount is not None else None,
        "description": draft.description,
        "date": draft.date.isoformat() if draft.date else None,
        "saved_at": draft.saved_at.isoformat() if draft.saved_at else None,
    }


def draft_from_dict(data: Dict[str, Any]) -> DraftTransaction:
    return DraftTransaction(
        account_id=data.get("account_id"),
        type=TransactionType(data["type"]) if data.get("type") else None,
        category=TransactionCategory(data["category"]) if data.get("category") else None,
        amount=parse_amount(data["amount"]) if data.get("amount") is not None else None,
        description=data.get("description"),
        date=date.fromisoformat(data["date"]) if data.get("date") else None,
        saved_at=datetime.fromisoformat(data["saved_at"]) if data.get("saved_at") else None,
    )


class DraftManager:
    """Thin pass-through to the key-value store plus a cached has-draft flag"""

    def __init__(
        self,
        store: KeyValueStore,
        config: Optional[Settings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.key = (config or default_settings).draft_key
        self.clock = clock
        self.has_draft = self.get_draft() is not None

    def save_draft(self, draft: DraftTransaction) -> DraftTransaction:
        """Overwrite the draft slot; returns the draft stamped with its save time"""
        stamped = replace(draft, saved_at=self.clock())
        self.store.set(self.key, draft_to_dict(stamped))
        self.has_draft = True
        logger.debug("Draft saved")
        return stamped

    def get_draft(self) -> Optional[DraftTransaction]:
        data = self.store.get(self.key)
        if not data:
            return None
        try:
            return draft_from_dict(data)
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Failed to read stored draft: {e}", extra={"key": self.key})
            return None

    def clear_draft(self) -> None:
        self.store.remove(self.key)
        self.has_draft = False
        logger.debug("Draft cleared")
