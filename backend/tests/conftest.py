"""
NoteKeeper Backend — Test Configuration (conftest.py)
=======================================================

Shared pytest fixtures for the whole suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_storage:  AsyncMock standing in for StorageClient (no database)
    ├── make_note:     factory for transient Note rows
    ├── storage:       real StorageClient on a scratch SQLite file (aiosqlite)
    └── test_client:   HTTPX AsyncClient talking to an app bound to `storage`
"""

import os

# Settings are read when notekeeper.config is first imported, so the test
# environment must be in place before any notekeeper import below.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

from datetime import datetime, timedelta, timezone  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from notekeeper.database import build_engine  # noqa: E402
from notekeeper.models.note import Note  # noqa: E402
from notekeeper.storage import StorageClient  # noqa: E402


@pytest.fixture
def mock_storage():
    """
    A StorageClient double.

    spec= keeps the mock honest: calling a method the real client does not
    have fails the test. Every coroutine method is an AsyncMock.
    """
    return AsyncMock(spec=StorageClient)


@pytest.fixture
def make_note():
    """Factory for Note rows that never touch a database."""

    def _make(title="Groceries", content="<p>milk</p>", age_seconds=0):
        stamp = datetime.now(timezone.utc) - timedelta(seconds=age_seconds)
        return Note(
            id=str(uuid4()),
            title=title,
            content=content,
            created_at=stamp,
            updated_at=stamp,
        )

    return _make


@pytest_asyncio.fixture
async def storage(tmp_path):
    """StorageClient on a fresh SQLite file with the notes table created."""
    client = StorageClient(build_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"))
    await client.create_tables()
    yield client
    await client.dispose()


@pytest_asyncio.fixture
async def test_client(storage):
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    ASGITransport does not run the lifespan, so the app gets its storage
    client injected through create_app().
    """
    from notekeeper.main import create_app

    app = create_app(storage=storage)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
