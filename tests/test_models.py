"""Tests for data models."""

from decimal import Decimal

import pytest

from statement_pipeline.models import (
    BatchSummary,
    ClassificationResult,
    ExistingTransaction,
    MatchField,
    MatchType,
    MerchantRule,
    OverridePatch,
    PipelineConfig,
    RuleSuggestion,
    TransactionKind,
)
from tests.factories import TestDataFactory


class TestEnums:
    """Tests for string enums."""

    def test_kind_values(self):
        assert TransactionKind.CC_PAYMENT.value == "cc_payment"
        assert TransactionKind("duplicate") is TransactionKind.DUPLICATE
        assert len(TransactionKind) == 9

    def test_enums_compare_as_strings(self):
        assert MatchType.REGEX == "regex"
        assert MatchField.MERCHANT_NORM == "merchant_norm"


class TestDefaults:
    """Tests for dataclass defaults."""

    def test_classification_defaults(self):
        result = ClassificationResult()

        assert result.kind == TransactionKind.UNKNOWN
        assert result.included_in_spend is False
        assert result.category is None

    def test_summary_defaults(self):
        summary = BatchSummary()

        assert summary.currency == "USD"
        assert summary.total_included_spend == Decimal("0.00")

    def test_config_defaults(self):
        config = PipelineConfig()

        assert config.refund_amount_tolerance == Decimal("0.01")
        assert config.default_category == "Uncategorized"
        assert config.suggestion_limit == 5

    def test_rule_is_immutable(self):
        rule = TestDataFactory.create_rule("X")

        with pytest.raises(AttributeError):
            rule.priority = 1


class TestImportRow:
    """Tests for ImportRow helpers."""

    def test_row_index_from_parsed(self):
        assert TestDataFactory.create_import_row(row_index=4).row_index == 4


class TestOverridePatch:
    """Tests for patch merging."""

    def test_later_patch_wins(self):
        merged = OverridePatch(category="A").merged_with(OverridePatch(category="B"))

        assert merged.category == "B"

    def test_false_is_a_value(self):
        """Test an explicit False is kept, unlike None."""
        merged = OverridePatch(included_in_spend=True).merged_with(
            OverridePatch(included_in_spend=False)
        )

        assert merged.included_in_spend is False


class TestExistingTransaction:
    """Tests for loading stored transactions."""

    def test_from_dict(self):
        transaction = ExistingTransaction.from_dict(
            {"id": "t1", "date": "2026-01-05", "amount": -4.5, "merchant_norm": "STARBUCKS 123"}
        )

        assert transaction.amount == Decimal("-4.5")
        assert transaction.merchant_norm == "STARBUCKS 123"

    def test_missing_amount(self):
        transaction = ExistingTransaction.from_dict({"id": "t1"})

        assert transaction.amount is None
        assert transaction.date is None


class TestRuleSuggestion:
    """Tests for converting suggestions to rules."""

    def test_to_rule(self):
        suggestion = RuleSuggestion(
            match_type=MatchType.CONTAINS,
            match_field=MatchField.MERCHANT_NORM,
            match_value="NETFLIX COM",
            suggested_category="Subscriptions",
            confidence=0.85,
            affected_count=2,
            affected_amount=Decimal("30.98"),
        )

        assert suggestion.to_rule(priority=10) == MerchantRule(
            match_field=MatchField.MERCHANT_NORM,
            match_type=MatchType.CONTAINS,
            match_value="NETFLIX COM",
            set_category="Subscriptions",
            priority=10,
        )
