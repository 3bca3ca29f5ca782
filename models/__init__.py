"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class
    price: Persisted price records (table ``prices``)

Database Schema:
    A single logical table. Ids are assigned by the store at insert time
    and are never reused; rows are never updated or deleted by the service.

Usage:
    from models import Base, PriceRecord

Example:
    record = PriceRecord(
        name="Apple",
        category="Fruit",
        price=Decimal("1.50"),
        create_date="2024-01-01"
    )
    session.add(record)
"""

from models.base import Base
from models.price import PriceRecord

__all__ = [
    "Base",
    "PriceRecord",
]
