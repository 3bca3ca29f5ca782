from sqlalchemy import Column, Integer, String, Numeric, Text, Index
from models.base import Base


class PriceRecord(Base):
    """
    A price row accepted by an import.

    Design:
    - id is store-assigned; the client's own id column is never stored
    - price is an unconstrained NUMERIC so sums stay exact
    - create_date is kept verbatim as text, it is not parsed as a date
    """
    __tablename__ = "prices"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), nullable=False)
    category = Column(String(255), nullable=False)
    price = Column(Numeric(asdecimal=True), nullable=False)
    create_date = Column(Text, nullable=False)

    __table_args__ = (
        Index("idx_prices_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<PriceRecord id={self.id} name={self.name!r} category={self.category!r} price={self.price}>"
