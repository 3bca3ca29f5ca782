"""
Pydantic schemas for data validation and serialization.

Schemas:
    records: Candidate rows, persisted rows and import aggregates
    api: API endpoint response schemas

Usage:
    from schemas.records import CandidateRecord, AggregateResult
    from schemas.api import ImportResponse, HealthResponse
"""

__all__ = [
    "CandidateRecord",
    "PriceRecordRead",
    "AggregateResult",
    "ValidationOutcome",
    "ImportResponse",
    "HealthResponse",
    "ErrorResponse",
]
