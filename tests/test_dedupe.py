"""Tests for fingerprint-based duplicate detection."""

import asyncio
from decimal import Decimal

from statement_pipeline.dedupe import (
    check_duplicates_against_existing,
    create_fingerprint,
    detect_duplicates_in_batch,
    match_against_existing,
)
from statement_pipeline.models import DedupeResult, ExistingTransaction
from tests.factories import TestDataFactory


class TestFingerprint:
    """Tests for the fingerprint key."""

    def test_format(self):
        fingerprint = create_fingerprint("u1", "2026-01-05", Decimal("-42.1"), "STARBUCKS 123")

        assert fingerprint == "u1|2026-01-05|-42.10|STARBUCKS 123"

    def test_nulls_are_literal_tokens(self):
        assert create_fingerprint("u1", None, None, None) == "u1|null|null|null"

    def test_amount_rounded_to_cents(self):
        assert create_fingerprint("u1", "2026-01-05", Decimal("10.005"), "X") == (
            "u1|2026-01-05|10.01|X"
        )
        assert create_fingerprint("u1", "2026-01-05", Decimal("10.004"), "X") == (
            "u1|2026-01-05|10.00|X"
        )


class TestBatchDuplicates:
    """Tests for the within-batch pass."""

    def test_repeat_flagged_first_kept(self):
        rows = [
            TestDataFactory.create_parsed_row(0),
            TestDataFactory.create_parsed_row(1),
            TestDataFactory.create_parsed_row(2),
        ]

        results = detect_duplicates_in_batch(rows, "u1")

        assert results[0] == DedupeResult(is_duplicate=False, duplicate_of=None)
        assert results[1] == DedupeResult(is_duplicate=True, duplicate_of=None)
        assert results[2].is_duplicate is True

    def test_one_character_merchant_change_is_not_duplicate(self):
        rows = [
            TestDataFactory.create_parsed_row(0, description="STARBUCKS #123"),
            TestDataFactory.create_parsed_row(1, description="STARBUCKS #124"),
        ]

        assert detect_duplicates_in_batch(rows, "u1")[1].is_duplicate is False

    def test_amounts_equal_at_cents_collide(self):
        rows = [
            TestDataFactory.create_parsed_row(0, amount=Decimal("-42.1")),
            TestDataFactory.create_parsed_row(1, amount=Decimal("-42.10")),
        ]

        assert detect_duplicates_in_batch(rows, "u1")[1].is_duplicate is True

    def test_all_null_rows_collide(self):
        """Test rows with no merchant or amount still participate."""
        rows = [
            TestDataFactory.create_parsed_row(0, amount=None, description=None),
            TestDataFactory.create_parsed_row(1, amount=None, description=None),
        ]

        assert detect_duplicates_in_batch(rows, "u1")[1].is_duplicate is True

    def test_keyed_by_row_index(self):
        rows = [TestDataFactory.create_parsed_row(7), TestDataFactory.create_parsed_row(9)]

        assert set(detect_duplicates_in_batch(rows, "u1")) == {7, 9}


class TestExistingDuplicates:
    """Tests for the against-storage pass."""

    def test_hit_resolves_stored_id(self):
        row = TestDataFactory.create_parsed_row(0, amount=Decimal("-42.10"))
        existing = [
            ExistingTransaction(
                id="tx-9", date="2026-01-05", amount=Decimal("-42.1"), merchant_norm="STARBUCKS 123"
            )
        ]

        results = match_against_existing([row], "u1", existing)

        assert results[0] == DedupeResult(is_duplicate=True, duplicate_of="tx-9")

    def test_miss(self):
        row = TestDataFactory.create_parsed_row(0)

        assert match_against_existing([row], "u1", []) == {0: DedupeResult()}

    def test_async_entry_point(self):
        row = TestDataFactory.create_parsed_row(0, amount=Decimal("-10.00"))
        existing = [
            ExistingTransaction.from_dict(
                {"id": 5, "date": "2026-01-05", "amount": "-10.00", "merchantNorm": "STARBUCKS 123"}
            )
        ]

        results = asyncio.run(check_duplicates_against_existing([row], "u1", existing))

        assert results[0].duplicate_of == "5"
