"""Key-value stores backing drafts and the persisted selection"""

import json
import logging
from typing import Any, Dict, Optional, Protocol

from sqlalchemy.orm import sessionmaker

from transaction_engine.config import settings
from transaction_engine.infrastructure.database.repositories import KeyValueRepository

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal contract: values are JSON-serialisable structures"""

    def set(self, key: str, value: Any) -> None: ...

    def get(self, key: str) -> Optional[Any]: ...

    def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """
    Process-local store. Values are kept as JSON text so callers always get a
    fresh copy back, never a reference to what they stored.
    """

    def __init__(self, prefix: Optional[str] = None):
        self.prefix = settings.storage_prefix if prefix is None else prefix
        self._items: Dict[str, str] = {}

    def set(self, key: str, value: Any) -> None:
        self._items[self.prefix + key] = json.dumps(value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._items.get(self.prefix + key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.error(f"Failed to decode stored value: {e}", extra={"key": key})
            return None

    def remove(self, key: str) -> None:
        self._items.pop(self.prefix + key, None)

    def clear(self) -> None:
        self._items.clear()


class SqlKeyValueStore:
    """Durable store: one row per key in the kv_entry table"""

    def __init__(self, session_factory: sessionmaker, prefix: Optional[str] = None):
        self.session_factory = session_factory
        self.prefix = settings.storage_prefix if prefix is None else prefix

    def set(self, key: str, value: Any) -> None:
        with self.session_factory() as db:
            KeyValueRepository(db).upsert(self.prefix + key, value)
            db.commit()

    def get(self, key: str) -> Optional[Any]:
        with self.session_factory() as db:
            return KeyValueRepository(db).get_value(self.prefix + key)

    def remove(self, key: str) -> None:
        with self.session_factory() as db:
            if KeyValueRepository(db).delete(self.prefix + key):
                db.commit()
