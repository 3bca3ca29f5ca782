"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Import Schemas
# ============================================================================

class ImportResponse(BaseModel):
    """Aggregates over the whole table after a successful import"""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "total_items": 3,
                "total_categories": 2,
                "total_price": 12.24
            }
        }
    )

    total_items: int = Field(..., ge=0, description="Rows currently stored")
    total_categories: int = Field(..., ge=0, description="Distinct categories currently stored")
    total_price: Decimal = Field(
        ...,
        description=(
            "Sum of all stored prices as a JSON number; exact to about 15 "
            "significant digits, larger totals are rounded on the wire"
        )
    )

    @field_serializer("total_price", when_used="json")
    def serialize_total_price(self, value: Decimal) -> float:
        """
        Render the total as a JSON number.

        JSON numbers are read as IEEE doubles by most clients, so only
        about 15 significant digits survive. The exact Decimal stays
        available through model_dump() and the server log.
        """
        return float(value)


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response model"""

    status: str = Field(..., description="Overall status: healthy or unhealthy")
    database_connected: bool
    timestamp: datetime = Field(default_factory=_utcnow)


# ============================================================================
# Error Response Schema
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response"""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "no tabular member",
                "error_type": "NotFoundError",
                "request_id": "3f0c9f2e-8a43-4a0c-b3a5-0d7f9d8f6a11",
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
    )

    detail: str
    error_type: str
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)
