"""
Tests for per-type value formatting.
"""

from datetime import datetime

import pytest

from fixed2csv.errors import FieldFormatError
from fixed2csv.formatters import format_value
from fixed2csv.models import LogicalType


class TestDateFormatting:
    """DATE values: YYYY-MM-DD in, DD/MM/YYYY out."""

    def test_valid_date(self):
        assert format_value("2023-10-26", LogicalType.DATE) == "26/10/2023"

    def test_surrounding_whitespace_is_ignored(self):
        assert format_value("  1990-05-15 ", LogicalType.DATE) == "15/05/1990"

    @pytest.mark.parametrize("raw", ["", "          "])
    def test_blank_date(self, raw):
        assert format_value(raw, LogicalType.DATE) == ""

    @pytest.mark.parametrize("raw", ["2024-02-29", "0001-01-01", "1999-12-31"])
    def test_round_trip_preserves_calendar_date(self, raw):
        formatted = format_value(raw, LogicalType.DATE)
        assert datetime.strptime(formatted, "%d/%m/%Y").date() == datetime.strptime(raw, "%Y-%m-%d").date()

    def test_formatting_is_not_idempotent(self):
        formatted = format_value("2023-10-26", LogicalType.DATE)
        with pytest.raises(FieldFormatError):
            format_value(formatted, LogicalType.DATE)

    @pytest.mark.parametrize(
        "raw",
        ["26/10/2023", "2023/10/26", "2023-13-01", "2023-02-30", "2023-1-01", "abcd-ef-gh", "2023-10-26T00"],
    )
    def test_invalid_dates(self, raw):
        with pytest.raises(FieldFormatError, match="Expected format: YYYY-MM-DD") as exc_info:
            format_value(raw, LogicalType.DATE)
        assert exc_info.value.raw_value == raw
        assert exc_info.value.column_type is LogicalType.DATE


class TestNumericFormatting:
    """NUMERIC values: integers and decimals normalized."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("12345", "12345"),
            ("0000000001", "1"),
            ("007", "7"),
            ("  42  ", "42"),
            ("-15", "-15"),
            ("+8", "8"),
            ("123.45", "123.45"),
            ("1.50", "1.5"),
            ("0010.000", "10.0"),
            ("-.5", "-0.5"),
        ],
    )
    def test_valid_numbers(self, raw, expected):
        assert format_value(raw, LogicalType.NUMERIC) == expected

    def test_large_integer_is_kept_exact(self):
        assert format_value("123456789012345678901234", LogicalType.NUMERIC) == "123456789012345678901234"

    @pytest.mark.parametrize("raw", ["", "     "])
    def test_blank_number(self, raw):
        assert format_value(raw, LogicalType.NUMERIC) == ""

    @pytest.mark.parametrize("raw", ["00012", "-3", "98765"])
    def test_integers_round_trip(self, raw):
        assert int(format_value(raw, LogicalType.NUMERIC)) == int(raw)

    @pytest.mark.parametrize("raw", ["3.14", "0.1", "-2.50"])
    def test_decimals_round_trip(self, raw):
        assert float(format_value(raw, LogicalType.NUMERIC)) == float(raw)

    @pytest.mark.parametrize(
        "raw",
        ["ABCDEFGHIJ", "12a", "1e5", "1.5e3", "1,5", "1_000", "nan", "inf", ".", "1.2.3", "- 5"],
    )
    def test_invalid_numbers(self, raw):
        with pytest.raises(FieldFormatError, match="Invalid numeric format") as exc_info:
            format_value(raw, LogicalType.NUMERIC)
        assert exc_info.value.raw_value == raw
        assert exc_info.value.column_type is LogicalType.NUMERIC


class TestStringFormatting:
    """STRING values: trailing whitespace only is removed."""

    def test_trailing_whitespace_removed(self):
        assert format_value("Ceci est une chaîne   ", LogicalType.STRING) == "Ceci est une chaîne"

    def test_leading_and_internal_whitespace_preserved(self):
        assert format_value("  Ma  chaine  ", LogicalType.STRING) == "  Ma  chaine"

    def test_empty_string(self):
        assert format_value("", LogicalType.STRING) == ""
        assert format_value("    ", LogicalType.STRING) == ""

    @pytest.mark.parametrize("raw", ["line\nbreak", "carriage\rreturn", "trailing\n", "\r\n"])
    def test_line_breaks_are_forbidden(self, raw):
        with pytest.raises(FieldFormatError, match="forbidden characters") as exc_info:
            format_value(raw, LogicalType.STRING)
        assert exc_info.value.column_type is LogicalType.STRING


class TestPaddingCharacters:
    """Only the space and the ASCII control characters count as padding."""

    def test_non_breaking_space_kept_in_string(self):
        assert format_value("Caf\u00e9\u00a0  ", LogicalType.STRING) == "Caf\u00e9\u00a0"

    def test_control_characters_trimmed_from_string(self):
        assert format_value("abc\t\x00 ", LogicalType.STRING) == "abc"

    @pytest.mark.parametrize("raw", ["7\u00a0", "\u20037", "\u30007"])
    def test_unicode_space_makes_number_invalid(self, raw):
        with pytest.raises(FieldFormatError, match="Invalid numeric format"):
            format_value(raw, LogicalType.NUMERIC)

    def test_control_characters_trimmed_from_number(self):
        assert format_value("\t42\x0b", LogicalType.NUMERIC) == "42"

    def test_unicode_space_makes_date_invalid(self):
        with pytest.raises(FieldFormatError, match="Expected format"):
            format_value("2023-10-26\u00a0", LogicalType.DATE)

    def test_non_breaking_spaces_are_not_blank(self):
        with pytest.raises(FieldFormatError):
            format_value("\u00a0\u00a0", LogicalType.NUMERIC)


class TestUnknownType:
    """Defensive branch for values that are not a LogicalType."""

    def test_unknown_type(self):
        with pytest.raises(FieldFormatError, match="Unknown or unsupported column type"):
            format_value("abc", "boolean")
