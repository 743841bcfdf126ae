"""
NoteKeeper Backend — Database Engine & Base Model
===================================================

What:  Async SQLAlchemy engine construction, declarative base and the
       timezone-aware timestamp column type shared by the models.
Why:   Keeps every piece of connection configuration in one place.
How:   build_engine() turns a connection URL into an async engine with
       connection pooling; the StorageClient owns the result.

Connection Pooling Strategy:
    pool_size / max_overflow: persistent connections plus burst headroom
    pool_pre_ping:            validates connections before use
    pool_recycle=3600:        recycles connections every hour

    SQLite (aiosqlite) gets none of these; SQLAlchemy picks its own pool
    class for file and in-memory databases.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import DateTime
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so that Base.metadata knows every
    table the storage client may need to create.
    """
    pass


class UTCDateTime(TypeDecorator):
    """
    Timestamp column that always hands back timezone-aware UTC datetimes.

    PostgreSQL stores the offset; SQLite drops it and returns naive values.
    Naive values are treated as UTC in both directions.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    """Current instant in UTC; the single clock used for note timestamps."""
    return datetime.now(timezone.utc)


def build_engine(
    database_url: str,
    pool_size: int = 10,
    max_overflow: int = 5,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create the async engine for `database_url`.

    Pool arguments are dropped for SQLite, whose pool classes reject them.
    The engine connects lazily: nothing touches the network until the first
    statement runs.
    """
    url = make_url(database_url)
    options: Dict[str, Any] = {"echo": echo}
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(url, **options)
