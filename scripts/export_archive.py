"""
Script to write the full prices export to a local zip archive
"""

import argparse
import asyncio
import sys
import os
import logging
from pathlib import Path

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from core.config import settings
from core.exceptions import PriceServiceError
from core.logging import setup_logging
from ingestion.runner import ExportPipeline

logger = logging.getLogger(__name__)


async def export_archive(path: Path) -> int:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)

    AsyncSessionLocal = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    try:
        archive_bytes = await ExportPipeline(AsyncSessionLocal).run()
    except PriceServiceError as e:
        logger.error(f"Export failed: {e}")
        return 1
    finally:
        await engine.dispose()

    path.write_bytes(archive_bytes)
    logger.info(f"Wrote {len(archive_bytes)} bytes to {path}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Export all prices as a zipped CSV")
    parser.add_argument("output", type=Path, nargs="?", default=Path(settings.EXPORT_FILENAME))
    args = parser.parse_args()

    setup_logging()

    sys.exit(asyncio.run(export_archive(args.output)))


if __name__ == "__main__":
    main()
