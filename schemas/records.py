"""
Pydantic schemas for price rows as they move through the pipelines
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

# A parsed tabular line: the raw string fields in their original order
Row = List[str]


class CandidateRecord(BaseModel):
    """
    A data row that passed validation and is eligible for persistence.

    name, category and create_date are carried verbatim; empty strings
    are allowed.
    """

    name: str
    category: str
    price: Decimal
    create_date: str


class PriceRecordRead(CandidateRecord):
    """A persisted row read back from the store"""

    model_config = ConfigDict(from_attributes=True)

    id: int


class ValidationOutcome(BaseModel):
    """Result of filtering parsed rows: accepted candidates plus how many were dropped"""

    accepted: List[CandidateRecord] = Field(default_factory=list)
    rejected_count: int = 0


class AggregateResult(BaseModel):
    """Dataset-wide totals computed from the whole table at commit time"""

    total_items: int = Field(..., ge=0)
    total_categories: int = Field(..., ge=0)
    total_price: Decimal
