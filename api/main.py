"""
FastAPI application initialization
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from api.routes import health, prices
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.database import engine, create_tables
from core.exceptions import PriceServiceError
from core.logging import setup_logging
from schemas.api import ErrorResponse
import logging

setup_logging()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Price Archive Service",
    description="Import zipped CSV price lists and export the accumulated dataset",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)


# Include routers
app.include_router(health.router)
app.include_router(prices.router)


@app.exception_handler(PriceServiceError)
async def price_service_error_handler(request: Request, exc: PriceServiceError):
    """Translate pipeline failures into client-visible responses"""
    request_id = getattr(request.state, "request_id", None)

    if exc.status_code >= 500:
        logger.error(f"[{request_id}] {exc}")
    else:
        logger.warning(f"[{request_id}] {exc}")

    body = ErrorResponse(
        detail=exc.message,
        error_type=exc.__class__.__name__,
        request_id=request_id,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting Price Archive Service")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'configured'}")

    await create_tables()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down Price Archive Service")
    await engine.dispose()


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Price Archive Service",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "prices": "/api/v0/prices"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.API_HOST, port=settings.API_PORT)
