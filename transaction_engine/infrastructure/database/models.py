"""SQLAlchemy ORM models for durable engine storage"""

from sqlalchemy import JSON, Column, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class KeyValueEntry(Base):
    """One slot of the key-value store (e.g. the saved transaction draft)"""

    __tablename__ = "kv_entry"

    key = Column(Text, primary_key=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
