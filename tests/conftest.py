"""Pytest configuration and fixtures for Statement Pipeline tests."""

from decimal import Decimal
from pathlib import Path

import pytest

from statement_pipeline.models import ImportRow, TransactionKind
from tests.factories import TestDataFactory


@pytest.fixture
def sample_csv() -> str:
    """Three-row statement: a purchase, a refund and a repeat of the purchase."""
    return TestDataFactory.create_csv()


@pytest.fixture
def sample_csv_file(tmp_path: Path, sample_csv: str) -> Path:
    """Write the sample statement to a temporary file."""
    path = tmp_path / "statement.csv"
    path.write_text(sample_csv)
    return path


@pytest.fixture
def sample_import_rows() -> list[ImportRow]:
    """Provide a small classified batch with one row of each bucket."""
    return [
        TestDataFactory.create_import_row(
            row_index=0, amount=Decimal("-42.10"), date="2026-01-05"
        ),
        TestDataFactory.create_import_row(
            row_index=1,
            kind=TransactionKind.REFUND,
            included_in_spend=False,
            category=None,
            amount=Decimal("42.10"),
            date="2026-01-06",
            description="STARBUCKS REFUND",
        ),
        TestDataFactory.create_import_row(
            row_index=2,
            kind=TransactionKind.DUPLICATE,
            included_in_spend=False,
            is_duplicate=True,
            amount=Decimal("-42.10"),
            date="2026-01-05",
        ),
        TestDataFactory.create_import_row(
            row_index=3,
            kind=TransactionKind.UNKNOWN,
            included_in_spend=False,
            category=None,
            amount=Decimal("10.00"),
            date="2026-01-09",
            description="MYSTERY DEPOSIT",
        ),
    ]
