"""
Persist accepted price rows and compute table-wide aggregates in one transaction
"""

from decimal import Decimal
from typing import List, Sequence
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from models.price import PriceRecord
from schemas.records import CandidateRecord, PriceRecordRead, AggregateResult
from core.exceptions import PersistenceError
import logging

logger = logging.getLogger(__name__)


class PriceLoader:
    """
    Load candidates into the prices table.

    Ensures:
    - All inserts of a batch commit together or not at all
    - Aggregates are queried from the whole table inside the same
      transaction, so they include this batch and every earlier import
    - Sessions are borrowed per call and never held between requests
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def import_batch(self, candidates: Sequence[CandidateRecord]) -> AggregateResult:
        """
        Insert candidates and return totals over the post-import table.

        An empty batch inserts nothing and returns the current totals.

        Raises:
            PersistenceError: Any insert, query or commit failed; nothing was committed
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    if candidates:
                        session.add_all(
                            PriceRecord(**candidate.model_dump()) for candidate in candidates
                        )
                        await session.flush()

                    totals = await self.compute_totals(session)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Import of {len(candidates)} rows rolled back: {e}")
            raise PersistenceError(
                "failed to import rows",
                context={"operation": "import_batch", "batch_size": len(candidates)},
                original_exception=e
            )

        logger.info(
            f"Imported {len(candidates)} rows: total_items={totals.total_items}, "
            f"total_categories={totals.total_categories}, total_price={totals.total_price}"
        )
        return totals

    async def fetch_all(self) -> List[PriceRecordRead]:
        """Read every stored row ordered by ascending id"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(PriceRecord).order_by(PriceRecord.id.asc())
                )
                records = [PriceRecordRead.model_validate(row) for row in result.scalars().all()]
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to read prices: {e}")
            raise PersistenceError(
                "failed to read rows",
                context={"operation": "fetch_all"},
                original_exception=e
            )

        logger.info(f"Fetched {len(records)} rows")
        return records

    @staticmethod
    async def compute_totals(session: AsyncSession) -> AggregateResult:
        """Count rows, distinct categories and the exact price sum of the whole table"""
        result = await session.execute(
            select(
                func.count(PriceRecord.id),
                func.count(PriceRecord.category.distinct()),
                func.coalesce(func.sum(PriceRecord.price), 0),
            )
        )
        total_items, total_categories, total_price = result.one()

        return AggregateResult(
            total_items=total_items,
            total_categories=total_categories,
            total_price=Decimal(str(total_price)),
        )
