"""Tests for merchant-rule suggestions."""

from decimal import Decimal

import pytest

from statement_pipeline.models import MatchField, MatchType, PipelineConfig, TransactionKind
from statement_pipeline.suggestions import category_history, suggest_rules
from tests.factories import TestDataFactory


@pytest.fixture
def batch_rows():
    coffee = [
        TestDataFactory.create_import_row(
            i, date=f"2026-01-0{i + 1}", amount=Decimal("-4.50"), category="Coffee & Drinks"
        )
        for i in range(3)
    ]
    groceries = [
        TestDataFactory.create_import_row(
            3, description="KROGER #412", amount=Decimal("-30.00"), category="Groceries"
        ),
        TestDataFactory.create_import_row(
            4, description="KROGER #412", amount=Decimal("-12.00"), category="Household"
        ),
    ]
    one_off = [TestDataFactory.create_import_row(5, description="APPLE STORE", category="Electronics")]
    return coffee + groceries + one_off


class TestSuggestRules:
    """Tests for grouping, confidence and ordering."""

    def test_unanimous_category(self, batch_rows):
        suggestions = suggest_rules(batch_rows)

        assert len(suggestions) == 1
        suggestion = suggestions[0]
        assert suggestion.match_value == "STARBUCKS 123"
        assert suggestion.match_type == MatchType.CONTAINS
        assert suggestion.match_field == MatchField.MERCHANT_NORM
        assert suggestion.suggested_category == "Coffee & Drinks"
        assert suggestion.confidence == pytest.approx(0.85)
        assert suggestion.affected_count == 3
        assert suggestion.affected_amount == Decimal("13.50")
        assert suggestion.sample_merchants == ["STARBUCKS #123"]

    def test_history_breaks_mixed_categories(self, batch_rows):
        history = {"KROGER 412": {"Groceries": 3, "Household": 1}}

        suggestions = suggest_rules(batch_rows, history=history)

        assert [s.match_value for s in suggestions] == ["STARBUCKS 123", "KROGER 412"]
        kroger = suggestions[1]
        assert kroger.suggested_category == "Groceries"
        assert kroger.confidence == pytest.approx(0.8625)

    def test_history_confidence_capped(self, batch_rows):
        history = {"KROGER 412": {"Groceries": 10}}

        kroger = suggest_rules(batch_rows, history=history)[-1]

        assert kroger.confidence == pytest.approx(0.95)

    def test_existing_contains_rule_suppresses(self, batch_rows):
        rule = TestDataFactory.create_rule("starbucks 123")

        assert suggest_rules(batch_rows, existing_rules=[rule]) == []

    def test_disabled_rule_does_not_suppress(self, batch_rows):
        rule = TestDataFactory.create_rule("STARBUCKS 123", enabled=False)

        assert len(suggest_rules(batch_rows, existing_rules=[rule])) == 1

    def test_duplicates_are_not_counted(self):
        rows = [
            TestDataFactory.create_import_row(0),
            TestDataFactory.create_import_row(
                1, kind=TransactionKind.DUPLICATE, included_in_spend=False, is_duplicate=True
            ),
        ]

        assert suggest_rules(rows) == []

    def test_limit(self, batch_rows):
        history = {"KROGER 412": {"Groceries": 3}}
        config = PipelineConfig(suggestion_limit=1)

        suggestions = suggest_rules(batch_rows, history=history, config=config)

        assert [s.match_value for s in suggestions] == ["STARBUCKS 123"]

    def test_accepted_suggestion_becomes_rule(self, batch_rows):
        rule = suggest_rules(batch_rows)[0].to_rule()

        assert rule.match_value == "STARBUCKS 123"
        assert rule.set_category == "Coffee & Drinks"
        assert rule.enabled is True
        assert rule.priority == 100


class TestCategoryHistory:
    """Tests for building history counts."""

    def test_counts_and_skips_blanks(self):
        history = category_history(
            [("KROGER 412", "Groceries"), ("KROGER 412", "Groceries"), (None, "X"), ("A", None)]
        )

        assert history == {"KROGER 412": {"Groceries": 2}}
