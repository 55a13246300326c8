"""
Shared fixtures: a throwaway SQLite database per test.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from weekplan.infrastructure.local.database import init_db


@pytest.fixture
async def session_factory(tmp_path):
    """Session factory over a fresh file-backed SQLite database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await init_db(engine)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def test_user_id():
    return "test_user_123"
