"""
Database engine and session factory with SQLAlchemy async

The engine's connection pool is the only state shared between requests.
Each import borrows one session for the length of its unit of work.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from core.config import settings
from models import Base
import logging

logger = logging.getLogger(__name__)

# Create async engine
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.ENVIRONMENT == "development",
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
)

# Create session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


async def create_tables(bind=None) -> list:
    """
    Create the prices table if it is absent and return the table names.

    Used by application startup and scripts/init_db.py; existing tables
    are left untouched.
    """
    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    table_names = sorted(Base.metadata.tables)
    logger.info(f"Tables ready: {', '.join(table_names)}")
    return table_names
