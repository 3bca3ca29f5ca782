"""
Core utilities and configuration for the price archive service.

This package provides foundational components used by the import and
export pipelines:

Modules:
    config: Application configuration and environment variable management
    database: Async engine and session factory
    exceptions: Exception hierarchy mapped onto client/server failures
    logging: Logging configuration

Usage:
    from core.config import settings
    from core.database import async_session_maker
    from core.exceptions import FormatError, PersistenceError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Borrow a session for one unit of work
    async with async_session_maker() as session:
        async with session.begin():
            pass
"""

__all__ = [
    "settings",
    "engine",
    "async_session_maker",
    "setup_logging",
    # Exceptions
    "PriceServiceError",
    "ClientError",
    "FormatError",
    "NotFoundError",
    "EmptyDatasetError",
    "PayloadTooLargeError",
    "PersistenceError",
]
