"""
Script to create the prices table before the service first starts

The API also does this on startup; run it on its own when the database
is provisioned separately from the application.
"""

import argparse
import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from sqlalchemy.exc import SQLAlchemyError
from core.config import settings
from core.database import engine, create_tables
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def init_database() -> int:
    target = settings.DATABASE_URL.split("@")[-1]
    logger.info(f"Bootstrapping schema on {target}")

    try:
        table_names = await create_tables()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Could not create tables on {target}: {e}")
        return 1
    finally:
        await engine.dispose()

    print("\n".join(table_names))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the prices table if it is absent")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")
    args = parser.parse_args()

    setup_logging(args.log_level)
    sys.exit(asyncio.run(init_database()))


if __name__ == "__main__":
    main()
