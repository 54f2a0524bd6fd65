"""Tests for CSV loader with column detection and normalization."""

from decimal import Decimal

from statement_pipeline.csv_loader import (
    detect_column_mapping,
    find_column,
    normalize_merchant,
    parse_amount_value,
    parse_csv,
    standardize_amount,
    standardize_date,
)
from statement_pipeline.models import ColumnMapping, ParseStatus

SIGNED = ColumnMapping(
    date="Date", amount="Amount", description="Description", debit=None, credit=None,
    format_type="signed",
)
SPLIT = ColumnMapping(
    date="Date", amount="Debit", description="Description", debit="Debit", credit="Credit",
    format_type="debit_credit",
)


class TestColumnMappingDetection:
    """Tests for synonym-based column detection."""

    def test_detect_signed_format(self):
        """Test a plain Date/Amount/Description header."""
        mapping = detect_column_mapping(["Date", "Amount", "Description"])

        assert mapping.date == "Date"
        assert mapping.amount == "Amount"
        assert mapping.description == "Description"
        assert mapping.format_type == "signed"

    def test_detect_debit_credit_format(self):
        """Test split Debit/Credit columns switch the format type."""
        mapping = detect_column_mapping(["Transaction Date", "Debit", "Credit", "Merchant Name"])

        assert mapping.date == "Transaction Date"
        assert mapping.debit == "Debit"
        assert mapping.credit == "Credit"
        assert mapping.description == "Merchant Name"
        assert mapping.format_type == "debit_credit"

    def test_first_candidate_wins(self):
        """Test candidate priority beats header order."""
        headers = ["Posting Date", "Transaction Date", "Amount", "Memo"]

        assert find_column(headers, ["transaction date", "posting date"]) == "Transaction Date"

    def test_case_insensitive_exact_match(self):
        """Test matching ignores case but not partial names."""
        assert find_column(["DATE"], ["date"]) == "DATE"
        assert find_column(["Date of Birth"], ["date"]) is None


class TestDateStandardization:
    """Tests for the ordered date format list and fallback."""

    def test_us_format(self):
        assert standardize_date("01/21/2026") == "2026-01-21"

    def test_iso_format(self):
        assert standardize_date("2026-01-21") == "2026-01-21"

    def test_day_first_when_month_invalid(self):
        """Test 21/01/2026 falls through to the day-first pattern."""
        assert standardize_date("21/01/2026") == "2026-01-21"

    def test_written_month(self):
        assert standardize_date("Jan 21, 2026") == "2026-01-21"
        assert standardize_date("January 21, 2026") == "2026-01-21"

    def test_two_digit_year(self):
        assert standardize_date("01/21/26") == "2026-01-21"

    def test_unparseable_date(self):
        assert standardize_date("not a date") is None

    def test_empty_and_non_string(self):
        assert standardize_date("") is None
        assert standardize_date("   ") is None
        assert standardize_date(None) is None


class TestAmountParsing:
    """Tests for signed amount resolution."""

    def test_currency_and_thousands_separator(self):
        assert parse_amount_value("$1,234.56") == Decimal("1234.56")

    def test_parentheses_are_negative(self):
        assert parse_amount_value("(45.00)") == Decimal("-45.00")

    def test_leading_minus(self):
        assert parse_amount_value("-12.50") == Decimal("-12.50")

    def test_leading_plus(self):
        assert parse_amount_value("+45.00") == Decimal("45.00")
        assert parse_amount_value("+$1,200.00") == Decimal("1200.00")

    def test_only_one_sign_is_stripped(self):
        assert parse_amount_value("+-5.00") is None
        assert parse_amount_value("++5.00") is None

    def test_invalid_amounts(self):
        """Test non-numeric and non-finite text parse to None."""
        assert parse_amount_value("abc") is None
        assert parse_amount_value("") is None
        assert parse_amount_value("NaN") is None
        assert parse_amount_value("Infinity") is None

    def test_debit_only_is_negative(self):
        assert standardize_amount(None, "20.00", None, SPLIT) == Decimal("-20.00")

    def test_credit_only_is_positive(self):
        assert standardize_amount(None, None, "15.00", SPLIT) == Decimal("15.00")

    def test_debit_wins_when_both_positive(self):
        assert standardize_amount(None, "20.00", "15.00", SPLIT) == Decimal("-20.00")

    def test_zero_debit_falls_back_to_credit(self):
        assert standardize_amount(None, "0.00", "15.00", SPLIT) == Decimal("15.00")

    def test_signed_column(self):
        assert standardize_amount("-3.25", None, None, SIGNED) == Decimal("-3.25")


class TestMerchantNormalization:
    """Tests for the merchant grouping key."""

    def test_strips_hash_and_uppercases(self):
        assert normalize_merchant("Starbucks #123") == "STARBUCKS 123"

    def test_strips_noise_tokens(self):
        assert normalize_merchant("POS DEBIT SHELL OIL 57442") == "SHELL OIL 57442"

    def test_noise_tokens_only_removed_as_words(self):
        """Test POS inside another word survives."""
        assert normalize_merchant("POSTMATES") == "POSTMATES"

    def test_punctuation_and_whitespace(self):
        assert normalize_merchant("  netflix.com   ") == "NETFLIX COM"

    def test_empty_result_is_none(self):
        assert normalize_merchant("POS DEBIT") is None
        assert normalize_merchant(None) is None


class TestParseCSV:
    """Tests for whole-file parsing."""

    def test_parse_simple_file(self):
        """Test one well-formed row."""
        rows, headers = parse_csv("Date,Amount,Description\n01/21/2026,-12.50,STARBUCKS #123\n")

        assert headers == ["Date", "Amount", "Description"]
        assert len(rows) == 1
        row = rows[0]
        assert row.row_index == 0
        assert row.parse_status == ParseStatus.OK
        assert row.parse_error is None
        assert row.date_chosen == "2026-01-21"
        assert row.amount_signed == Decimal("-12.50")
        assert row.merchant_norm == "STARBUCKS 123"
        assert row.raw["Description"] == "STARBUCKS #123"

    def test_headers_are_trimmed(self):
        _, headers = parse_csv(" Date , Amount , Description \n01/21/2026,1.00,X\n")

        assert headers == ["Date", "Amount", "Description"]

    def test_bad_date_marks_row_error(self):
        """Test an unparseable date is recorded, not raised."""
        rows, _ = parse_csv("Date,Amount,Description\nnot a date,-5.00,COFFEE\n")

        assert rows[0].parse_status == ParseStatus.ERROR
        assert rows[0].date_chosen is None
        assert rows[0].parse_error == "Unable to parse date: not a date"
        assert rows[0].amount_signed == Decimal("-5.00")

    def test_bad_amount_marks_row_error(self):
        rows, _ = parse_csv("Date,Amount,Description\n01/21/2026,lots,COFFEE\n")

        assert rows[0].parse_status == ParseStatus.ERROR
        assert rows[0].parse_error == "Unable to parse amount: lots"

    def test_debit_credit_file(self):
        csv_text = (
            "Posting Date,Description,Debit,Credit\n"
            "01/02/2026,KROGER #412,20.00,\n"
            "01/03/2026,ACME PAYROLL,,1500.00\n"
        )
        rows, _ = parse_csv(csv_text)

        assert [row.amount_signed for row in rows] == [Decimal("-20.00"), Decimal("1500.00")]
        assert all(row.parse_status == ParseStatus.OK for row in rows)

    def test_empty_input(self):
        assert parse_csv("") == ([], [])

    def test_header_only(self):
        rows, headers = parse_csv("Date,Amount,Description\n")

        assert rows == []
        assert headers == ["Date", "Amount", "Description"]

    def test_row_indices_follow_file_order(self):
        csv_text = "Date,Amount,Description\n01/01/2026,-1,A\n01/02/2026,-2,B\n01/03/2026,-3,C\n"
        rows, _ = parse_csv(csv_text)

        assert [row.row_index for row in rows] == [0, 1, 2]
