"""
CSV codec: parse uploaded text into rows, serialize stored records back to CSV
"""

import csv
import io
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, List

import pandas as pd

from core.exceptions import FormatError, EmptyDatasetError
from schemas.records import Row, PriceRecordRead
import logging

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["id", "name", "category", "price", "create_date"]

_CENTS = Decimal("0.01")


class TabularCodec:
    """
    Convert between CSV bytes and rows.

    Parsing keeps every field as a raw string so that field counts survive
    for validation. Serialization writes a fixed five-column layout.
    """

    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding

    def parse(self, tabular_bytes: bytes) -> List[Row]:
        """
        Split CSV bytes into data rows, discarding the header.

        Raises:
            FormatError: Bytes are not decodable or quoting is malformed
            EmptyDatasetError: Fewer than two non-blank rows
        """
        try:
            text = tabular_bytes.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise FormatError(
                "tabular data is not valid text",
                context={"stage": "tabular", "encoding": self.encoding},
                original_exception=e
            )

        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        rows: List[Row] = []
        try:
            for row in reader:
                if not row:
                    continue
                rows.append(row)
        except csv.Error as e:
            raise FormatError(
                "tabular data is malformed",
                context={"stage": "tabular", "line_number": reader.line_num},
                original_exception=e
            )

        if len(rows) < 2:
            raise EmptyDatasetError(
                "tabular data must contain a header and at least one data row",
                context={"rows_found": len(rows)}
            )

        # The header is discarded whatever it contains
        data_rows = rows[1:]
        logger.info(f"Parsed {len(data_rows)} data rows")
        return data_rows

    def serialize(self, records: Iterable[PriceRecordRead]) -> bytes:
        """Render records as CSV in the given order, prices with two decimals"""
        frame = pd.DataFrame(
            [
                [
                    str(record.id),
                    record.name,
                    record.category,
                    self.format_price(record.price),
                    record.create_date,
                ]
                for record in records
            ],
            columns=EXPORT_COLUMNS,
            dtype=object,
        )

        text = frame.to_csv(index=False, lineterminator="\n")
        logger.info(f"Serialized {len(frame)} records")
        return text.encode("utf-8")

    @staticmethod
    def format_price(price: Decimal) -> str:
        """Two fractional digits, half-up, exact for any magnitude"""
        price = Decimal(price)
        with localcontext() as ctx:
            # Room for every integer digit, two decimals and a rounding carry
            ctx.prec = max(ctx.prec, price.adjusted() + 4)
            ctx.rounding = ROUND_HALF_UP
            return str(price.quantize(_CENTS))
