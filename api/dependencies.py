"""
FastAPI dependency providers

The session factory is the one shared resource; every request builds
its own pipeline around it. Tests override get_session_factory.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from core.database import async_session_maker
from ingestion.runner import ImportPipeline, ExportPipeline


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory"""
    return async_session_maker


async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory)
):
    """Yield a database session for the duration of a request"""
    async with session_factory() as session:
        yield session


def get_import_pipeline(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory)
) -> ImportPipeline:
    return ImportPipeline(session_factory)


def get_export_pipeline(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory)
) -> ExportPipeline:
    return ExportPipeline(session_factory)
