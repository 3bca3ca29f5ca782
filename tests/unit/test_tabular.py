"""
Unit tests for the CSV codec
"""

from decimal import Decimal
import pytest
from ingestion.codecs.tabular import TabularCodec, EXPORT_COLUMNS
from schemas.records import PriceRecordRead
from core.exceptions import FormatError, EmptyDatasetError


class TestTabularParse:
    """Test CSV parsing into raw rows"""

    def test_parse_discards_header(self, scenario_csv):
        rows = TabularCodec().parse(scenario_csv.encode("utf-8"))

        assert len(rows) == 4
        assert rows[0] == ["1", "Apple", "Fruit", "1.50", "2024-01-01"]
        assert rows[3] == ["4", "Bad", "Oops", "notanumber", "2024-01-03"]

    def test_parse_discards_malformed_header(self):
        """The first row is dropped even when it has the wrong shape"""
        rows = TabularCodec().parse(b"garbage\n1,A,B,2.00,2024-01-01\n")

        assert rows == [["1", "A", "B", "2.00", "2024-01-01"]]

    def test_parse_keeps_ragged_rows(self):
        """Field counts are preserved for the validator"""
        data = b"h\n1,A\n1,A,B,2.00,2024-01-01,extra\n"

        rows = TabularCodec().parse(data)

        assert rows == [["1", "A"], ["1", "A", "B", "2.00", "2024-01-01", "extra"]]

    def test_parse_handles_quoted_fields(self):
        data = b'h\n1,"Nuts, mixed","Food ""bulk""",3.10,2024-02-01\n'

        rows = TabularCodec().parse(data)

        assert rows == [["1", "Nuts, mixed", 'Food "bulk"', "3.10", "2024-02-01"]]

    def test_parse_handles_crlf_and_bom(self):
        data = "\ufeffid,name,category,price,create_date\r\n1,A,B,1,2024\r\n".encode("utf-8")

        rows = TabularCodec().parse(data)

        assert rows == [["1", "A", "B", "1", "2024"]]

    def test_parse_skips_blank_lines(self):
        data = b"h\n\n1,A,B,1,2024\n\n"

        assert TabularCodec().parse(data) == [["1", "A", "B", "1", "2024"]]

    def test_parse_header_only_raises_empty_dataset(self):
        with pytest.raises(EmptyDatasetError) as exc_info:
            TabularCodec().parse(b"id,name,category,price,create_date\n")

        assert exc_info.value.context["rows_found"] == 1

    def test_parse_empty_bytes_raises_empty_dataset(self):
        with pytest.raises(EmptyDatasetError):
            TabularCodec().parse(b"")

    def test_parse_invalid_utf8_raises_format_error(self):
        with pytest.raises(FormatError):
            TabularCodec().parse(b"h\n\xff\xfe\xfa,broken\n")

    def test_parse_unterminated_quote_raises_format_error(self):
        with pytest.raises(FormatError):
            TabularCodec().parse(b'h\n1,"unterminated,B,1,2024\n')

    def test_parse_bare_quote_raises_format_error(self):
        """Strict quoting: a quote followed by text is malformed"""
        with pytest.raises(FormatError):
            TabularCodec().parse(b'h\n1,"A"x,B,1,2024\n')


class TestTabularSerialize:
    """Test CSV export rendering"""

    def _record(self, record_id, name, category, price, create_date):
        return PriceRecordRead(
            id=record_id,
            name=name,
            category=category,
            price=Decimal(price),
            create_date=create_date,
        )

    def test_serialize_writes_fixed_header(self):
        text = TabularCodec().serialize([]).decode("utf-8")

        assert text == ",".join(EXPORT_COLUMNS) + "\n"

    def test_serialize_rows_in_given_order(self):
        records = [
            self._record(7, "Widget", "Hardware", "9.99", "bad-date-ok"),
            self._record(2, "Apple", "Fruit", "1.5", "2024-01-01"),
        ]

        text = TabularCodec().serialize(records).decode("utf-8")

        assert text.splitlines() == [
            "id,name,category,price,create_date",
            "7,Widget,Hardware,9.99,bad-date-ok",
            "2,Apple,Fruit,1.50,2024-01-01",
        ]

    def test_serialize_quotes_fields_with_delimiters(self):
        records = [self._record(1, "Nuts, mixed", 'Food "bulk"', "3.1", "")]

        text = TabularCodec().serialize(records).decode("utf-8")

        assert text.splitlines()[1] == '1,"Nuts, mixed","Food ""bulk""",3.10,'

    def test_serialized_output_parses_back(self):
        records = [self._record(1, "Nuts, mixed", "Food", "3.1", "2024-01-01")]
        codec = TabularCodec()

        rows = codec.parse(codec.serialize(records))

        assert rows == [["1", "Nuts, mixed", "Food", "3.10", "2024-01-01"]]

    @pytest.mark.parametrize("price, expected", [
        ("1", "1.00"),
        ("0.75", "0.75"),
        ("2.005", "2.01"),
        ("-3.4", "-3.40"),
        ("1.5000000000", "1.50"),
        ("12345678.9", "12345678.90"),
        ("1E+27", "1000000000000000000000000000.00"),
        ("123456789012345678901234567890.125", "123456789012345678901234567890.13"),
        ("-99999999999999999999999999999.995", "-100000000000000000000000000000.00"),
        ("0E-10", "0.00"),
    ])
    def test_format_price_two_decimals(self, price, expected):
        assert TabularCodec.format_price(Decimal(price)) == expected
