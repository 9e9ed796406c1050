"""Data access layer for key-value entries"""

from typing import Any, Optional

from sqlalchemy.orm import Session

from transaction_engine.infrastructure.database.models import KeyValueEntry


class KeyValueRepository:
    """Repository for key-value slots"""

    def __init__(self, db: Session):
        self.db = db

    def upsert(self, key: str, value: Any) -> KeyValueEntry:
        """Insert or overwrite the value stored under key"""
        entry = self.db.get(KeyValueEntry, key)
        if entry is None:
            entry = KeyValueEntry(key=key, value=value)
            self.db.add(entry)
        else:
            entry.value = value
        self.db.flush()
        return entry

    def get_value(self, key: str) -> Optional[Any]:
        entry = self.db.get(KeyValueEntry, key)
        return entry.value if entry is not None else None

    def delete(self, key: str) -> bool:
        """Delete the entry; returns False when nothing was stored"""
        entry = self.db.get(KeyValueEntry, key)
        if entry is None:
            return False
        self.db.delete(entry)
        return True
