# ============================================================================
# File: ingestion/runner.py
# Description: Import and export pipelines over the prices table
# ============================================================================
"""
Pipeline runners - orchestrate the codecs, validator and loader.

Import:  archive bytes -> extract -> parse -> validate -> import_batch -> aggregates
Export:  fetch_all -> serialize -> package -> archive bytes

Every stage failure is terminal for the request and propagates as one of
the core.exceptions classes; nothing is retried. Rejected rows are not
failures: the import continues with whatever rows were accepted, even none.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
import logging
import time

from ingestion.codecs.archive import ArchiveCodec
from ingestion.codecs.tabular import TabularCodec
from ingestion.transformers.row_validator import RowValidator
from ingestion.loaders.price_loader import PriceLoader
from schemas.records import AggregateResult
from core.exceptions import PriceServiceError

logger = logging.getLogger(__name__)


class ImportPipeline:
    """
    Import one uploaded archive.

    Responsibilities:
    - Run extract, parse, validate and load in order
    - Stop at the first failing stage
    - Return aggregates over the whole table as of commit
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        archive_codec: Optional[ArchiveCodec] = None,
        tabular_codec: Optional[TabularCodec] = None,
        validator: Optional[RowValidator] = None,
        loader: Optional[PriceLoader] = None
    ):
        self.archive_codec = archive_codec or ArchiveCodec()
        self.tabular_codec = tabular_codec or TabularCodec()
        self.validator = validator or RowValidator()
        self.loader = loader or PriceLoader(session_factory)

    async def run(self, archive_bytes: bytes) -> AggregateResult:
        """
        Import an archive and return the post-import totals.

        Raises:
            FormatError: Container or tabular text unreadable
            NotFoundError: No tabular member in the container
            EmptyDatasetError: Header only, no data rows
            PersistenceError: Storage failed; nothing was committed
        """
        start_time = time.perf_counter()

        try:
            tabular_bytes = self.archive_codec.extract(archive_bytes)
            rows = self.tabular_codec.parse(tabular_bytes)
            outcome = self.validator.validate(rows)
            totals = await self.loader.import_batch(outcome.accepted)
        except PriceServiceError as e:
            logger.warning(f"Import failed: {e.message} ({e.__class__.__name__})")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Import finished in {duration_ms:.2f}ms: rows={len(rows)}, "
            f"accepted={len(outcome.accepted)}, rejected={outcome.rejected_count}"
        )
        return totals


class ExportPipeline:
    """Export the whole prices table as a zipped CSV"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        archive_codec: Optional[ArchiveCodec] = None,
        tabular_codec: Optional[TabularCodec] = None,
        loader: Optional[PriceLoader] = None
    ):
        self.archive_codec = archive_codec or ArchiveCodec()
        self.tabular_codec = tabular_codec or TabularCodec()
        self.loader = loader or PriceLoader(session_factory)

    async def run(self) -> bytes:
        """
        Build the export archive.

        Raises:
            PersistenceError: The table could not be read
        """
        records = await self.loader.fetch_all()
        tabular_bytes = self.tabular_codec.serialize(records)
        archive_bytes = self.archive_codec.package(tabular_bytes)

        logger.info(f"Export built: {len(records)} rows, {len(archive_bytes)} bytes")
        return archive_bytes
