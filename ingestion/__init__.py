"""
Import/export pipeline components for the prices table.

Modules:
    runner: ImportPipeline and ExportPipeline orchestration

Subpackages:
    codecs: Zip container and CSV encoding/decoding
    transformers: Row validation into candidate records
    loaders: Transactional persistence and aggregate computation

Architecture:
    Import runs four stages; the first failing stage ends the request:

    1. Extract - Pull the CSV member out of the uploaded zip
    2. Parse - Split CSV text into rows, drop the header
    3. Validate - Keep rows with enough fields and a numeric price
    4. Load - Insert accepted rows and compute whole-table totals in one transaction

    Export reads the table in id order, writes CSV and zips it.

Usage:
    from core.database import async_session_maker
    from ingestion.runner import ImportPipeline, ExportPipeline

Example:
    pipeline = ImportPipeline(async_session_maker)
    totals = await pipeline.run(archive_bytes)

    print(f"{totals.total_items} items in {totals.total_categories} categories")

Error Handling:
    Stage failures raise the classes in core.exceptions. Rejected rows
    are dropped silently and only counted.
"""

__all__ = [
    "ImportPipeline",
    "ExportPipeline",
    "ArchiveCodec",
    "TabularCodec",
    "RowValidator",
    "PriceLoader",
]
