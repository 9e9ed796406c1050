"""Database engine and session factory"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from transaction_engine.config import settings
from transaction_engine.infrastructure.database.models import Base


def build_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create an engine and make sure the schema exists.

    In-memory SQLite shares one connection so every session sees the same database.
    """
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)
    else:
        engine = create_engine(url, pool_pre_ping=True)

    Base.metadata.create_all(bind=engine)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
