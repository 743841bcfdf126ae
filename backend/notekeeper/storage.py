"""
NoteKeeper Backend — Storage Client
=====================================

What:  The single owner of the database engine and its connection pool.
Why:   One pool per process. Every request borrows connections from it;
       nothing else in the application creates engines.
How:   The application lifespan builds one StorageClient from settings and
       stores it on app.state; routes receive it through a FastAPI dependency
       (notekeeper.dependencies.get_storage) and pass it to the handlers.
       Because the instance lives on the application object, re-importing
       modules never creates a second pool.

Outcome contract:
    The client reports what the database did, nothing more:
    - reads return the row, or None when no row matched
    - update/delete raise RecordNotFoundError when no row matched
    - driver and connection errors propagate unchanged
    Turning those into API errors is the error mapper's job.

Each public method is one statement in its own transaction. Update and
delete use RETURNING so that the write and the read-back are one atomic
round trip.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from sqlalchemy import delete, select, text, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from notekeeper.config import Settings
from notekeeper.database import Base, build_engine, utcnow
from notekeeper.models.note import Note, new_note_id

logger = logging.getLogger(__name__)


class RecordNotFoundError(LookupError):
    """An update or delete matched no row."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"No row in '{table}' with id '{record_id}'")


class StorageClient:
    """
    Async data access for notes over one pooled engine.

    Safe for concurrent use by any number of in-flight requests: every call
    opens its own session, and the engine's pool serializes access to
    individual connections.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: returned Note objects stay readable after
        # their session is closed
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageClient":
        """Build a client from application settings (connection URL + pool sizing)."""
        engine = build_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )
        logger.info("Storage client created for %s", engine.url.render_as_string(hide_password=True))
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        One transaction: commit on success, roll back on any error, always close.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_notes(self) -> List[Note]:
        """All notes, most recently created first."""
        async with self.session() as session:
            result = await session.execute(
                select(Note).order_by(Note.created_at.desc())
            )
            return list(result.scalars().all())

    async def get_note(self, note_id: str) -> Optional[Note]:
        async with self.session() as session:
            return await session.get(Note, note_id)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_note(self, title: str, content: str) -> Note:
        """
        Insert a note. id and both timestamps come from this call, and the
        two timestamps share one clock reading.
        """
        now = utcnow()
        note = Note(
            id=new_note_id(),
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )
        async with self.session() as session:
            session.add(note)
        return note

    async def update_note(self, note_id: str, changes: Dict[str, Any]) -> Note:
        """
        Write `changes` plus a fresh updated_at and return the new row.

        Raises:
            RecordNotFoundError: no note has this id
        """
        stmt = (
            update(Note)
            .where(Note.id == note_id)
            .values(**changes, updated_at=utcnow())
            .returning(Note)
            .execution_options(synchronize_session=False)
        )
        async with self.session() as session:
            result = await session.execute(stmt)
            note = result.scalar_one_or_none()
        if note is None:
            raise RecordNotFoundError(Note.__tablename__, note_id)
        return note

    async def delete_note(self, note_id: str) -> Note:
        """
        Delete the note and return the row as it was, in one statement.

        Raises:
            RecordNotFoundError: no note has this id
        """
        stmt = (
            delete(Note)
            .where(Note.id == note_id)
            .returning(Note)
            .execution_options(synchronize_session=False)
        )
        async with self.session() as session:
            result = await session.execute(stmt)
            note = result.scalar_one_or_none()
        if note is None:
            raise RecordNotFoundError(Note.__tablename__, note_id)
        return note

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def ping(self) -> None:
        """Round-trip SELECT 1; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_tables(self) -> None:
        """CREATE TABLE IF NOT EXISTS for every model registered on Base."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
