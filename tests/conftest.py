from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine

from sql_playground.main import app
from sql_playground.core.database import Database, get_db
from sql_playground.core.security import SessionStore, get_session_store


# Every test gets its own database file so tables never leak between tests
@pytest_asyncio.fixture(scope="function")
async def db(tmp_path):
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'practice_test.db'}", echo=False
    )
    database = Database(test_engine)
    yield database  # Tests happens here
    await database.dispose()


@pytest.fixture(scope="function")
def session_store():
    return SessionStore(timedelta(minutes=60))


# Client
@pytest_asyncio.fixture(scope="function")
async def client(db: Database, session_store: SessionStore):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_session_store] = lambda: session_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# Students table with a few rows
@pytest_asyncio.fixture(scope="function")
async def students(db: Database):
    await db.run(
        "CREATE TABLE students (id INTEGER PRIMARY KEY, name VARCHAR(255), age integer)"
    )
    await db.run(
        "INSERT INTO students (name, age) VALUES ('Alice', 20), ('Bob', 22), ('Cara', 21)"
    )
    return "students"
