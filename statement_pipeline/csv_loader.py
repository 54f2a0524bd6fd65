"""CSV loading and normalization with column-synonym detection.

Turns raw statement text into ParsedRow records. Malformed dates and amounts
become per-row errors; only a file the tokenizer cannot read at all raises.
"""

import csv
import io
import logging
import re
from datetime import datetime
from decimal import Decimal
from typing import Any

import pandas as pd
from dateutil import parser as date_parser

from statement_pipeline.models import ColumnMapping, ParsedRow, ParseStatus

logger = logging.getLogger(__name__)

# Candidate header names per logical field, in priority order.
DATE_COLUMNS = [
    "transaction date",
    "trans date",
    "date",
    "authorized date",
    "posting date",
    "posted date",
    "transaction_date",
    "trans_date",
]

AMOUNT_COLUMNS = ["amount", "transaction amount", "transaction_amount", "debit", "credit"]

DESCRIPTION_COLUMNS = [
    "description",
    "merchant",
    "name",
    "payee",
    "memo",
    "details",
    "merchant name",
    "merchant_name",
]

DATE_FORMATS = [
    "%m/%d/%Y",  # 01/21/2026, 1/21/2026
    "%m-%d-%Y",  # 01-21-2026
    "%Y-%m-%d",  # 2026-01-21
    "%Y/%m/%d",  # 2026/01/21
    "%d/%m/%Y",  # 21/01/2026
    "%b %d, %Y",  # Jan 21, 2026
    "%B %d, %Y",  # January 21, 2026
    "%m/%d/%y",  # 01/21/26
]

# Fills missing components in the dateutil fallback so results never depend on today.
_FALLBACK_DEFAULT = datetime(2000, 1, 1)

NOISE_TOKENS = [
    "POS",
    "DEBIT",
    "CREDIT",
    "PURCHASE",
    "ONLINE",
    "WEB",
    "SQ *",
    "SQ*",
    "TST*",
    "CHECKCARD",
    "VISA",
    "MASTERCARD",
    "AMEX",
    "#",
    "CARD",
]

_CURRENCY_CHARS = re.compile(r"[$£€¥,]")
_PLAIN_NUMBER = re.compile(r"\d{1,15}(\.\d*)?|\.\d+")
_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


class CSVStructureError(ValueError):
    """Raised when the input cannot be tokenized as CSV at all."""


def _token_pattern(token: str) -> re.Pattern[str]:
    # Word-like edges only match whole tokens, so POS does not eat POSTMATES.
    pattern = re.escape(token)
    if token[0].isalnum():
        pattern = r"\b" + pattern
    if token[-1].isalnum():
        pattern = pattern + r"\b"
    return re.compile(pattern)


_NOISE_PATTERNS = [_token_pattern(token) for token in NOISE_TOKENS]


def find_column(headers: list[str], candidates: list[str]) -> str | None:
    """Return the header matching the first candidate (case-insensitive exact match).

    Args:
        headers: Header names as they appear in the file
        candidates: Synonyms in priority order

    Returns:
        The original header name, or None if no candidate is present
    """
    normalized = [header.lower().strip() for header in headers]
    for candidate in candidates:
        candidate = candidate.lower()
        if candidate in normalized:
            return headers[normalized.index(candidate)]
    return None


def detect_column_mapping(headers: list[str]) -> ColumnMapping:
    """Detect which headers hold the date, amount and description.

    Args:
        headers: Trimmed header names

    Returns:
        ColumnMapping; format_type is "debit_credit" when a debit or credit column exists
    """
    debit_col = find_column(headers, ["debit"])
    credit_col = find_column(headers, ["credit"])

    return ColumnMapping(
        date=find_column(headers, DATE_COLUMNS),
        amount=find_column(headers, AMOUNT_COLUMNS),
        description=find_column(headers, DESCRIPTION_COLUMNS),
        debit=debit_col,
        credit=credit_col,
        format_type="debit_credit" if debit_col or credit_col else "signed",
    )


def standardize_date(date_val: Any) -> str | None:
    """Resolve a date cell to an ISO ``YYYY-MM-DD`` string.

    Tries DATE_FORMATS in order, then falls back to dateutil.

    Args:
        date_val: Raw date value from CSV

    Returns:
        ISO date string or None if parsing fails
    """
    if not isinstance(date_val, str):
        return None
    trimmed = date_val.strip()
    if not trimmed:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(trimmed, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue

    try:
        return date_parser.parse(trimmed, default=_FALLBACK_DEFAULT).strftime("%Y-%m-%d")
    except (ValueError, OverflowError):
        return None


def _negative(number: Decimal) -> Decimal:
    return -abs(number) if number else abs(number)


def parse_amount_value(value: Any) -> Decimal | None:
    """Parse one amount cell into a signed Decimal.

    Parentheses and a leading minus mean negative; a leading plus is
    allowed. Currency symbols and thousands separators are stripped first;
    only plain decimal notation of at most 15 integer digits is accepted.

    Args:
        value: Raw amount text

    Returns:
        Signed Decimal or None if the text is empty or not a number
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    parenthetical = text.startswith("(") and text.endswith(")")
    if parenthetical:
        text = text[1:-1]

    text = _CURRENCY_CHARS.sub("", text).strip()

    negative = text.startswith("-")
    if negative or text.startswith("+"):
        text = text[1:]

    if not _PLAIN_NUMBER.fullmatch(text):
        return None
    number = Decimal(text)

    if parenthetical or negative:
        return _negative(number)
    return number


def standardize_amount(
    amount_raw: str | None,
    debit_raw: str | None,
    credit_raw: str | None,
    mapping: ColumnMapping,
) -> Decimal | None:
    """Normalize amount to signed Decimal.

    With split columns a positive debit wins (money out), then a positive
    credit (money in), then whichever side parsed at all.

    Args:
        amount_raw: Value of the amount column
        debit_raw: Value of the debit column
        credit_raw: Value of the credit column
        mapping: Column mapping for the CSV format

    Returns:
        Signed Decimal (negative = expense, positive = income) or None if parsing fails
    """
    if mapping.format_type == "debit_credit":
        debit = parse_amount_value(debit_raw)
        credit = parse_amount_value(credit_raw)

        if debit is not None and debit > 0:
            return _negative(debit)
        if credit is not None and credit > 0:
            return abs(credit)
        if debit is not None:
            return _negative(debit)
        if credit is not None:
            return abs(credit)
        return None

    return parse_amount_value(amount_raw)


def normalize_merchant(value: Any) -> str | None:
    """Build the uppercase, noise-free merchant key used for matching.

    Args:
        value: Free-text description

    Returns:
        Normalized key, or None if nothing is left
    """
    if not isinstance(value, str):
        return None

    normalized = value.upper()
    for pattern in _NOISE_PATTERNS:
        normalized = pattern.sub("", normalized)

    normalized = _PUNCTUATION.sub(" ", normalized)
    normalized = _WHITESPACE.sub(" ", normalized).strip()

    return normalized or None


def _cell(record: dict[str, Any], column: str | None) -> str | None:
    if column is None:
        return None
    value = record.get(column)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _read_frame(csv_content: str, **options: Any) -> pd.DataFrame:
    read_options: dict[str, Any] = {
        "dtype": str,
        "keep_default_na": False,
        "skip_blank_lines": True,
        "skipinitialspace": True,
        "index_col": False,
        "engine": "python",
        **options,
    }
    header_frame = pd.read_csv(io.StringIO(csv_content), nrows=0, **read_options)
    width = len(header_frame.columns)
    return pd.read_csv(
        io.StringIO(csv_content),
        on_bad_lines=lambda line: line[:width],
        **read_options,
    )


def read_csv_frame(csv_content: str) -> pd.DataFrame:
    """Tokenize CSV text into a string-only DataFrame with trimmed headers.

    Rows with more fields than the header are truncated rather than dropped,
    so row positions stay aligned with the file. When quoting is broken
    (for example an unterminated quote), the text is re-read with quote
    characters treated as plain text and stray quotes trimmed from each cell.

    Raises:
        CSVStructureError: If the text is binary or cannot be tokenized either way
    """
    if "\x00" in csv_content:
        raise CSVStructureError("Unable to read CSV: input contains NUL bytes")

    quote_chars = ""
    try:
        df = _read_frame(csv_content)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, csv.Error) as exc:
        logger.warning("CSV quoting is malformed (%s); re-reading without quotes", exc)
        quote_chars = '"'
        try:
            df = _read_frame(csv_content, quoting=csv.QUOTE_NONE)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except (pd.errors.ParserError, csv.Error) as retry_exc:
            raise CSVStructureError(f"Unable to read CSV: {retry_exc}") from retry_exc
        if not df.empty:
            df = df.apply(lambda column: column.str.strip(quote_chars))

    df.columns = [str(col).strip().strip(quote_chars).strip() for col in df.columns]
    return df


def parse_row(row_index: int, record: dict[str, Any], mapping: ColumnMapping) -> ParsedRow:
    """Coerce one CSV record into a ParsedRow.

    Args:
        row_index: Zero-based position in the file
        record: Header -> cell mapping
        mapping: Detected column mapping

    Returns:
        ParsedRow with parse_status/parse_error describing any failures
    """
    raw = {str(key): (value if isinstance(value, str) else "") for key, value in record.items()}
    errors: list[str] = []

    date_raw = _cell(raw, mapping.date)
    date_chosen = standardize_date(date_raw)
    if date_raw is None:
        errors.append("Missing date")
    elif date_chosen is None:
        errors.append(f"Unable to parse date: {date_raw}")

    amount_raw = _cell(raw, mapping.amount)
    debit_raw = _cell(raw, mapping.debit)
    credit_raw = _cell(raw, mapping.credit)
    amount_signed = standardize_amount(amount_raw, debit_raw, credit_raw, mapping)
    if amount_signed is None:
        if amount_raw or debit_raw or credit_raw:
            detail = amount_raw or f"debit:{debit_raw} credit:{credit_raw}"
            errors.append(f"Unable to parse amount: {detail}")
        else:
            errors.append("Missing amount")

    description_raw = _cell(raw, mapping.description)

    return ParsedRow(
        row_index=row_index,
        raw=raw,
        parse_status=ParseStatus.ERROR if errors else ParseStatus.OK,
        parse_error="; ".join(errors) if errors else None,
        date_raw=date_raw,
        date_chosen=date_chosen,
        amount_raw=amount_raw or debit_raw or credit_raw,
        amount_signed=amount_signed,
        description_raw=description_raw,
        merchant_raw=description_raw,
        merchant_norm=normalize_merchant(description_raw),
    )


def parse_csv(csv_content: str) -> tuple[list[ParsedRow], list[str]]:
    """Parse statement CSV text into normalized rows.

    Args:
        csv_content: Full CSV text including the header row

    Returns:
        Tuple of (rows in file order, trimmed headers)

    Raises:
        CSVStructureError: If the text cannot be tokenized as CSV
    """
    df = read_csv_frame(csv_content)
    headers = df.columns.tolist()
    mapping = detect_column_mapping(headers)

    rows = [
        parse_row(row_index, record, mapping)
        for row_index, record in enumerate(df.to_dict(orient="records"))
    ]
    return rows, headers
