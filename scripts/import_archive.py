"""
Script to import a local zip archive of prices without going through HTTP
"""

import argparse
import asyncio
import json
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
from ingestion.runner import ImportPipeline

logger = logging.getLogger(__name__)


async def import_archive(path: Path) -> int:
    """Import one archive and print the resulting totals as JSON"""

    engine = create_async_engine(settings.DATABASE_URL, echo=False)

    AsyncSessionLocal = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    try:
        pipeline = ImportPipeline(AsyncSessionLocal)
        totals = await pipeline.run(path.read_bytes())
    except PriceServiceError as e:
        logger.error(f"Import of {path} failed: {e}")
        return 1
    finally:
        await engine.dispose()

    print(json.dumps({
        "total_items": totals.total_items,
        "total_categories": totals.total_categories,
        "total_price": float(totals.total_price),
    }))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Import a zipped CSV of prices")
    parser.add_argument("archive", type=Path, help="Path to the .zip archive")
    args = parser.parse_args()

    setup_logging()

    if not args.archive.is_file():
        parser.error(f"no such file: {args.archive}")

    sys.exit(asyncio.run(import_archive(args.archive)))


if __name__ == "__main__":
    main()
