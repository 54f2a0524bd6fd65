"""Tests for transaction classification heuristics and category lookup."""

from decimal import Decimal

import pytest

from statement_pipeline.classifier import (
    classify_batch,
    classify_transaction,
    determine_category,
    normalize_merchant_name,
)
from statement_pipeline.models import ParseStatus, TransactionKind
from tests.factories import TestDataFactory


def classify(description: str, amount: str):
    row = TestDataFactory.create_parsed_row(amount=Decimal(amount), description=description)
    return classify_transaction(row)


class TestHeuristicKinds:
    """Tests for the fixed-order keyword heuristics."""

    @pytest.mark.parametrize(
        ("description", "amount", "kind"),
        [
            ("ONLINE TRANSFER TO SAVINGS", "-500.00", TransactionKind.TRANSFER),
            ("CHASE CREDIT CRD AUTOPAY", "-1200.00", TransactionKind.CC_PAYMENT),
            ("ONLINE PAYMENT 1234 CHASE CARD", "-300.00", TransactionKind.CC_PAYMENT),
            ("ATM WITHDRAWAL 0042", "-60.00", TransactionKind.CASH_WITHDRAWAL),
            ("AMAZON REFUND", "25.00", TransactionKind.REFUND),
            ("MONTHLY SERVICE FEE", "-12.00", TransactionKind.FEE_INTEREST),
            ("ACME CORP PAYROLL", "2500.00", TransactionKind.INCOME),
        ],
    )
    def test_kind_detection(self, description, amount, kind):
        """Test each heuristic fires and excludes the row from spend."""
        result = classify(description, amount)

        assert result.kind == kind
        assert result.included_in_spend is False
        assert result.category is None

    def test_refund_requires_positive_amount(self):
        """Test refund keywords on money out fall through to purchase."""
        result = classify("AMAZON RETURN", "-25.00")

        assert result.kind == TransactionKind.PURCHASE
        assert result.included_in_spend is True

    def test_income_requires_positive_amount(self):
        result = classify("GUSTO PAYROLL", "-100.00")

        assert result.kind == TransactionKind.PURCHASE

    def test_tax_refund_debit_is_purchase(self):
        """Test TAX REFUND with a negative amount is neither income nor refund."""
        result = classify("TAX REFUND", "-50.00")

        assert result.kind == TransactionKind.PURCHASE
        assert result.kind not in (TransactionKind.INCOME, TransactionKind.REFUND)

    def test_transfer_beats_refund(self):
        """Test earlier heuristics win over later ones."""
        result = classify("TRANSFER REVERSAL", "30.00")

        assert result.kind == TransactionKind.TRANSFER

    def test_unrecognized_inflow_is_unknown(self):
        result = classify("MYSTERY DEPOSIT", "10.00")

        assert result.kind == TransactionKind.UNKNOWN
        assert result.kind_reason == "Unable to classify"
        assert result.included_in_spend is False

    def test_missing_amount_is_unknown(self):
        row = TestDataFactory.create_parsed_row(
            amount=None, description="MYSTERY", parse_status=ParseStatus.OK
        )

        assert classify_transaction(row).kind == TransactionKind.UNKNOWN

    def test_parse_error_short_circuits(self):
        """Test error rows skip rules and heuristics entirely."""
        row = TestDataFactory.create_parsed_row(
            date=None, description="ONLINE TRANSFER", parse_error="Missing date"
        )
        rule = TestDataFactory.create_rule("TRANSFER", set_kind=TransactionKind.PURCHASE)

        result = classify_transaction(row, [rule])

        assert result.kind == TransactionKind.UNKNOWN
        assert result.kind_reason == "Parse error"
        assert result.included_in_spend is False


class TestPurchaseCategories:
    """Tests for category and subcategory resolution."""

    @pytest.mark.parametrize(
        ("description", "category", "subcategory"),
        [
            ("STARBUCKS #123", "Coffee & Drinks", "Coffee Shops"),
            ("SHELL OIL 57442", "Auto & Transport", "Gas & Fuel"),
            ("KROGER #412", "Groceries", "Supermarket"),
        ],
    )
    def test_known_merchants(self, description, category, subcategory):
        result = classify(description, "-20.00")

        assert result.kind == TransactionKind.PURCHASE
        assert result.included_in_spend is True
        assert result.category == category
        assert result.subcategory == subcategory

    def test_subscription(self):
        assert classify("NETFLIX.COM", "-15.49").category == "Subscriptions"

    def test_unmatched_purchase_is_uncategorized(self):
        result = classify("ZZQX HOLDINGS", "-9.99")

        assert result.category == "Uncategorized"
        assert result.subcategory is None

    def test_custom_default_category(self):
        row = TestDataFactory.create_parsed_row(amount=Decimal("-9.99"), description="ZZQX HOLDINGS")

        assert classify_transaction(row, default_category="Other").category == "Other"

    def test_determine_category_without_text(self):
        assert determine_category(None, None) == (None, None)


class TestMerchantNameNormalization:
    """Tests for store-number-insensitive merchant names."""

    def test_strips_store_numbers(self):
        assert normalize_merchant_name("LOWES #3228") == "LOWES"
        assert normalize_merchant_name("LOWES 3229") == "LOWES"

    def test_strips_state_suffix(self):
        assert normalize_merchant_name("JOES PIZZA AUSTIN TX") == "JOES PIZZA AUSTIN"

    def test_strips_corporate_suffix(self):
        assert normalize_merchant_name("ACME WIDGETS INC.") == "ACME WIDGETS"

    def test_empty(self):
        assert normalize_merchant_name("") is None
        assert normalize_merchant_name(None) is None


class TestClassifyBatch:
    """Tests for batch classification."""

    def test_preserves_order(self):
        rows = [
            TestDataFactory.create_parsed_row(0, amount=Decimal("-5.00"), description="STARBUCKS"),
            TestDataFactory.create_parsed_row(1, amount=Decimal("25.00"), description="AMAZON REFUND"),
            TestDataFactory.create_parsed_row(2, amount=Decimal("-60.00"), description="ATM"),
        ]

        kinds = [result.kind for result in classify_batch(rows)]

        assert kinds == [
            TransactionKind.PURCHASE,
            TransactionKind.REFUND,
            TransactionKind.CASH_WITHDRAWAL,
        ]

    def test_empty_batch(self):
        assert classify_batch([]) == []
