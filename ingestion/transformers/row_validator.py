"""
Row-level validation: turn parsed CSV rows into candidate records
"""

import re
from decimal import Decimal
from typing import Iterable, Optional
from schemas.records import Row, CandidateRecord, ValidationOutcome
import logging

logger = logging.getLogger(__name__)

MIN_FIELDS = 5

# Column positions in an uploaded row; field 0 (client id) is ignored
NAME_INDEX = 1
CATEGORY_INDEX = 2
PRICE_INDEX = 3
CREATE_DATE_INDEX = 4

# Plain ASCII decimal notation with an optional exponent: no "_", no
# non-ASCII digits, no NaN or Infinity
_PRICE_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)

# Prices beyond 10**1000 (or below 10**-1000) are rejected as out of range
MAX_PRICE_EXPONENT = 1000


class RowValidator:
    """
    Classify rows as accepted or rejected.

    Rules, applied in order, first failure rejects:
    1. At least five fields (extra trailing fields are ignored)
    2. Price is plain decimal notation within 10**-1000 .. 10**1000
    3. name, category and create_date are taken verbatim

    Rejection is silent: it never raises, it only increments a counter.
    """

    def validate(self, rows: Iterable[Row]) -> ValidationOutcome:
        """Filter rows, keeping their original order"""
        outcome = ValidationOutcome()

        for line_index, row in enumerate(rows, start=1):
            candidate = self.to_candidate(row)
            if candidate is None:
                outcome.rejected_count += 1
                logger.debug(f"Rejected data row {line_index}: {row!r}")
                continue
            outcome.accepted.append(candidate)

        logger.info(
            f"Validated rows: accepted={len(outcome.accepted)}, "
            f"rejected={outcome.rejected_count}"
        )
        return outcome

    def to_candidate(self, row: Row) -> Optional[CandidateRecord]:
        """Build a candidate from one row, or None if the row is rejected"""
        if len(row) < MIN_FIELDS:
            return None

        price = self._parse_price(row[PRICE_INDEX])
        if price is None:
            return None

        return CandidateRecord(
            name=row[NAME_INDEX],
            category=row[CATEGORY_INDEX],
            price=price,
            create_date=row[CREATE_DATE_INDEX],
        )

    @staticmethod
    def _parse_price(value: str) -> Optional[Decimal]:
        text = value.strip()
        if not _PRICE_PATTERN.fullmatch(text):
            return None
        price = Decimal(text)
        if price and abs(price.adjusted()) > MAX_PRICE_EXPONENT:
            return None
        return price
