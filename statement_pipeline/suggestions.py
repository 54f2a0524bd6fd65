"""Merchant-rule suggestions mined from an imported batch."""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from statement_pipeline.models import (
    ImportRow,
    MatchField,
    MatchType,
    MerchantRule,
    PipelineConfig,
    RuleSuggestion,
)

logger = logging.getLogger(__name__)

UNANIMOUS_CONFIDENCE = 0.85
MAX_HISTORY_CONFIDENCE = 0.95
SAMPLE_SIZE = 3


def category_history(
    transactions: Iterable[tuple[str | None, str | None]],
) -> dict[str, Counter[str]]:
    """Count categories per merchant from (merchant_norm, category) pairs."""
    history: dict[str, Counter[str]] = {}
    for merchant_norm, category in transactions:
        if not merchant_norm or not category:
            continue
        history.setdefault(merchant_norm, Counter())[category] += 1
    return history


def _covered_merchants(rules: Iterable[MerchantRule]) -> set[str]:
    return {
        rule.match_value.lower()
        for rule in rules
        if rule.enabled and rule.match_type == MatchType.CONTAINS
    }


def suggest_rules(
    rows: Sequence[ImportRow],
    existing_rules: Iterable[MerchantRule] = (),
    history: Mapping[str, Mapping[str, int]] | None = None,
    config: PipelineConfig | None = None,
) -> list[RuleSuggestion]:
    """Propose ``contains`` rules for merchants that recur in a batch.

    A merchant qualifies with at least ``suggestion_min_occurrences`` rows
    and no enabled ``contains`` rule already targeting it. A single category
    across the batch gives confidence 0.85; otherwise the merchant's most
    frequent historical category is used, with confidence growing with its
    share. Merchants with neither are skipped.

    Args:
        rows: Imported rows; duplicates are ignored
        existing_rules: Rules the user already has
        history: merchant_norm -> category -> count from committed transactions
        config: Pipeline tunables

    Returns:
        Suggestions ordered by confidence * affected_count, highest first
    """
    config = config or PipelineConfig()
    history = history or {}
    covered = _covered_merchants(existing_rules)

    groups: dict[str, list[ImportRow]] = {}
    for row in rows:
        if row.is_duplicate or not row.parsed.merchant_norm:
            continue
        groups.setdefault(row.parsed.merchant_norm, []).append(row)

    suggestions: list[RuleSuggestion] = []
    for merchant_norm, group in groups.items():
        if len(group) < config.suggestion_min_occurrences:
            continue
        if merchant_norm.lower() in covered:
            continue

        categories = {row.category for row in group if row.category}
        if len(categories) == 1:
            suggested_category = categories.pop()
            confidence = UNANIMOUS_CONFIDENCE
        elif merchant_norm in history and history[merchant_norm]:
            counts = history[merchant_norm]
            suggested_category, top = max(counts.items(), key=lambda item: item[1])
            share = top / sum(counts.values())
            confidence = min(MAX_HISTORY_CONFIDENCE, 0.6 + share * 0.35)
        else:
            continue

        samples: list[str] = []
        for row in group:
            merchant_raw = row.parsed.merchant_raw
            if merchant_raw and merchant_raw not in samples:
                samples.append(merchant_raw)

        amount = sum(
            (abs(row.parsed.amount_signed) for row in group if row.parsed.amount_signed is not None),
            Decimal("0"),
        )

        suggestions.append(
            RuleSuggestion(
                match_type=MatchType.CONTAINS,
                match_field=MatchField.MERCHANT_NORM,
                match_value=merchant_norm,
                suggested_category=suggested_category,
                confidence=confidence,
                affected_count=len(group),
                affected_amount=amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
                sample_merchants=samples[:SAMPLE_SIZE],
            )
        )

    suggestions.sort(key=lambda s: s.confidence * s.affected_count, reverse=True)
    logger.debug("Generated %d rule suggestion(s) from %d merchant(s)", len(suggestions), len(groups))
    return suggestions[: config.suggestion_limit]
