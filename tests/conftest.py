"""
Pytest configuration and fixtures
"""

import io
import zipfile
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool
from core.database import create_tables
from models.base import Base
from typing import Callable, Dict


SCENARIO_CSV = (
    "id,name,category,price,create_date\n"
    "1,Apple,Fruit,1.50,2024-01-01\n"
    "2,Banana,Fruit,0.75,2024-01-02\n"
    "3,Widget,Hardware,9.99,bad-date-ok\n"
    "4,Bad,Oops,notanumber,2024-01-03\n"
)


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a throw-away SQLite database with the prices table"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'prices.db'}",
        echo=False,
        poolclass=NullPool,
    )

    await create_tables(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database"""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def scenario_csv() -> str:
    """Four data rows, one with a non-numeric price"""
    return SCENARIO_CSV


@pytest.fixture
def build_archive() -> Callable[..., bytes]:
    """Build a zip archive in memory from {member_name: text_or_bytes}"""

    def _build(members: Dict[str, object]) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            for name, content in members.items():
                if isinstance(content, str):
                    content = content.encode("utf-8")
                archive.writestr(name, content)
        return buffer.getvalue()

    return _build
