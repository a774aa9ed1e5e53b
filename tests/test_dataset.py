"""
Unit tests for CSV parsing and the Dataset/Record types
"""

import pytest

from csvinsight.dataset import Dataset, Record, make_dataset, parse_csv
from csvinsight.errors import CsvParseError, EmptyInput


class TestParseCsv:
    """Test cases for parse_csv"""

    def test_parses_header_and_rows(self, sales_csv):
        """Columns keep header order and every row becomes a record"""
        dataset = parse_csv(sales_csv)

        assert dataset.columns == ("region", "units", "price", "notes")
        assert dataset.row_count == 5
        assert dataset.column_count == 4
        assert dataset.records[0]["region"] == "north"
        assert dataset.records[0]["price"] == "2.50"

    def test_empty_cells_stay_empty_strings(self, sales_csv):
        """Empty fields are '' rather than NaN, and nothing is type-converted"""
        dataset = parse_csv(sales_csv)

        assert dataset.records[1]["notes"] == ""
        assert dataset.records[3]["units"] == ""
        assert dataset.records[4]["notes"] == " "
        assert isinstance(dataset.records[0]["units"], str)

    def test_na_tokens_are_not_converted(self):
        """Strings such as NA or null are ordinary text"""
        dataset = parse_csv("a,b\nNA,null\n")

        assert dataset.records[0]["a"] == "NA"
        assert dataset.records[0]["b"] == "null"

    def test_quoted_fields(self):
        """Standard CSV quoting with embedded commas and doubled quotes"""
        dataset = parse_csv('name,quote\n"Smith, J","He said ""hi"""\n')

        assert dataset.records[0]["name"] == "Smith, J"
        assert dataset.records[0]["quote"] == 'He said "hi"'

    def test_blank_lines_are_skipped(self):
        dataset = parse_csv("a,b\n1,2\n\n3,4\n\n")

        assert dataset.row_count == 2

    def test_short_row_is_padded_with_empty_cells(self):
        """A row with fewer fields than the header gets '' for the tail"""
        dataset = parse_csv("a,b,c\n1,2,3\n4\n")

        record = dataset.records[1]
        assert record["a"] == "4"
        assert record["b"] == ""
        assert record["c"] == ""

    def test_duplicate_header_names_are_made_unique(self):
        dataset = parse_csv("a,a,b\n1,2,3\n")

        assert dataset.columns == ("a", "a.1", "b")

    def test_header_only_raises_empty_input(self):
        """A header with no data rows never reaches analysis"""
        with pytest.raises(EmptyInput):
            parse_csv("a,b,c\n")

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_empty_text_raises_empty_input(self, text):
        with pytest.raises(EmptyInput):
            parse_csv(text)

    def test_row_with_extra_fields_raises_parse_error(self):
        with pytest.raises(CsvParseError):
            parse_csv("a,b\n1,2\n3,4,5\n")

    def test_trailing_comma_on_every_row_raises_parse_error(self):
        """A trailing delimiter is never taken as an index column"""
        with pytest.raises(CsvParseError):
            parse_csv("a,b\n1,2,\n3,4,\n")

    def test_every_row_with_extra_field_raises_parse_error(self):
        with pytest.raises(CsvParseError):
            parse_csv("a,b\n1,2,3\n4,5,6\n")

    def test_first_field_stays_in_first_column(self):
        dataset = parse_csv("a,b\n1,2\n3,4\n")

        assert dataset.records[0] == {"a": "1", "b": "2"}
        assert dataset.records[1] == {"a": "3", "b": "4"}

    def test_repeated_duplicate_header_names(self):
        dataset = parse_csv("a,a,a.1,a\n1,2,3,4\n")

        assert dataset.columns == ("a", "a.1", "a.1.1", "a.2")


class TestDataset:
    """Test cases for the Dataset type"""

    def test_rejects_unknown_record_keys(self):
        with pytest.raises(ValueError):
            make_dataset(["a"], [{"a": "1", "b": "2"}])

    def test_rejects_duplicate_columns(self):
        with pytest.raises(ValueError):
            Dataset(columns=("a", "a"), records=())

    def test_records_are_read_only(self):
        dataset = make_dataset(["a"], [{"a": "1"}])

        with pytest.raises(TypeError):
            dataset.records[0]["a"] = "2"

    def test_column_values_reports_absent_cells_as_none(self):
        dataset = make_dataset(["a", "b"], [{"a": "1", "b": "x"}, {"a": "2"}])

        assert dataset.column_values("b") == ["x", None]

    def test_preview_limits_rows_and_fills_blanks(self):
        rows = [{"a": str(i)} for i in range(15)]
        dataset = make_dataset(["a", "b"], rows)

        preview = dataset.preview(10)

        assert len(preview) == 10
        assert preview[0] == {"a": "0", "b": ""}

    def test_to_csv_text_round_trips_through_parser(self, sales_csv):
        dataset = parse_csv(sales_csv)

        text = dataset.to_csv_text()

        assert text.splitlines()[0] == "region,units,price,notes"
        assert parse_csv(text).records[0] == dataset.records[0]

    def test_record_equality_and_len(self):
        assert Record({"a": "1"}) == Record({"a": "1"})
        assert len(Record({"a": "1", "b": ""})) == 2
