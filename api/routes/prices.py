"""
Price import and export endpoints
"""

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response
from api.dependencies import get_import_pipeline, get_export_pipeline
from core.config import settings
from core.exceptions import FormatError, PayloadTooLargeError
from ingestion.runner import ImportPipeline, ExportPipeline
from schemas.api import ImportResponse, ErrorResponse
import uuid
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v0", tags=["Prices"])


@router.post(
    "/prices",
    response_model=ImportResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def import_prices(
    request: Request,
    file: UploadFile = File(..., description="Zip archive holding one CSV file"),
    pipeline: ImportPipeline = Depends(get_import_pipeline)
):
    """
    Import a zipped CSV of prices.

    Rows with fewer than five fields or a non-numeric price are skipped.
    Returns totals over every row stored so far, not only this upload.
    """
    request_id = getattr(request.state, "request_id", f"req_{uuid.uuid4().hex[:12]}")

    logger.info(f"[{request_id}] POST /api/v0/prices - file={file.filename}")

    if not file.filename or not file.filename.lower().endswith(".zip"):
        raise FormatError(
            "file must be a zip archive",
            context={"filename": file.filename}
        )

    payload = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(payload) > settings.MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError(
            "upload too large",
            context={"filename": file.filename, "limit_bytes": settings.MAX_UPLOAD_BYTES}
        )

    totals = await pipeline.run(payload)

    logger.info(
        f"[{request_id}] Import totals: items={totals.total_items}, "
        f"categories={totals.total_categories}, price={totals.total_price}"
    )
    return ImportResponse(**totals.model_dump())


@router.get(
    "/prices",
    response_class=Response,
    responses={200: {"content": {"application/zip": {}}}, 500: {"model": ErrorResponse}},
)
async def export_prices(
    request: Request,
    pipeline: ExportPipeline = Depends(get_export_pipeline)
):
    """Download every stored price as a zipped CSV ordered by id"""
    request_id = getattr(request.state, "request_id", f"req_{uuid.uuid4().hex[:12]}")

    logger.info(f"[{request_id}] GET /api/v0/prices")

    archive_bytes = await pipeline.run()

    return Response(
        content=archive_bytes,
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={settings.EXPORT_FILENAME}"}
    )
