"""Row classification: user merchant rules first, then built-in heuristics.

Both chains are first-match-wins scans in a fixed order. Bad rule patterns
never raise; they simply do not match.
"""

import re
from collections.abc import Iterable, Sequence
from decimal import Decimal

from statement_pipeline.models import (
    DEFAULT_CATEGORY,
    ClassificationResult,
    MatchField,
    MatchType,
    MerchantRule,
    ParsedRow,
    ParseStatus,
    RefundPair,
    TransactionKind,
)
from statement_pipeline.patterns import (
    CASH_WITHDRAWAL_PATTERNS,
    CATEGORY_PATTERNS,
    CC_PAYMENT_PATTERNS,
    FEE_INTEREST_PATTERNS,
    INCOME_PATTERNS,
    REFUND_PATTERNS,
    SUBCATEGORY_PATTERNS,
    TRANSFER_PATTERNS,
    matches_any_pattern,
    safe_search,
)

# (patterns, kind, reason, requires a positive amount), evaluated top to bottom.
HEURISTICS: list[tuple[list[str], TransactionKind, str, bool]] = [
    (TRANSFER_PATTERNS, TransactionKind.TRANSFER, "Transfer detected", False),
    (CC_PAYMENT_PATTERNS, TransactionKind.CC_PAYMENT, "Credit card payment", False),
    (CASH_WITHDRAWAL_PATTERNS, TransactionKind.CASH_WITHDRAWAL, "Cash withdrawal", False),
    (REFUND_PATTERNS, TransactionKind.REFUND, "Refund detected", True),
    (FEE_INTEREST_PATTERNS, TransactionKind.FEE_INTEREST, "Fee or interest charge", False),
    (INCOME_PATTERNS, TransactionKind.INCOME, "Income detected", True),
]

_STATE_CODES = (
    "AL|AK|AZ|AR|CA|CO|CT|DE|FL|GA|HI|ID|IL|IN|IA|KS|KY|LA|ME|MD|MA|MI|MN|MS|MO|MT|NE|NV|NH|"
    "NJ|NM|NY|NC|ND|OH|OK|OR|PA|RI|SC|SD|TN|TX|UT|VT|VA|WA|WV|WI|WY|DC"
)

_MERCHANT_CLEANUPS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\s*#\d+\s*"), " "),
    (re.compile(r"\s+\d{3,}\s*"), " "),
    (re.compile(r"\s+\d+$"), ""),
    (re.compile(r"\s*\d{8,}\s*"), " "),
    (re.compile(rf"\s+({_STATE_CODES})$"), ""),
    (re.compile(r"\s+(INC|LLC|CORP|CO|LTD|STORE|STORES)\.?$"), ""),
    (re.compile(r"\s+"), " "),
]


def normalize_merchant_name(merchant: str | None) -> str | None:
    """Strip store numbers, location codes and corporate suffixes.

    "LOWES #3228" and "LOWES #3229" both become "LOWES".
    """
    if not merchant:
        return None

    normalized = merchant.upper().strip()
    for pattern, replacement in _MERCHANT_CLEANUPS:
        normalized = pattern.sub(replacement, normalized)
    normalized = normalized.strip()

    return normalized or None


def _search_texts(merchant_norm: str | None, description_raw: str | None) -> list[str]:
    candidates = [
        normalize_merchant_name(merchant_norm),
        merchant_norm,
        normalize_merchant_name(description_raw),
        description_raw,
    ]
    return [text for text in candidates if text]


def determine_category(
    merchant_norm: str | None, description_raw: str | None
) -> tuple[str | None, str | None]:
    """Resolve (category, subcategory) from the static pattern tables.

    The first category in CATEGORY_PATTERNS matching any search text wins;
    the subcategory is the first matching refinement of that category.

    Returns:
        (category, subcategory), either of which may be None
    """
    texts = _search_texts(merchant_norm, description_raw)
    if not texts:
        return None, None

    category = None
    for name, patterns in CATEGORY_PATTERNS.items():
        if any(matches_any_pattern(text, patterns) for text in texts):
            category = name
            break
    if category is None:
        return None, None

    for parent, subcategory, patterns in SUBCATEGORY_PATTERNS:
        if parent != category:
            continue
        if any(matches_any_pattern(text, patterns) for text in texts):
            return category, subcategory

    return category, None


def rule_matches(rule: MerchantRule, row: ParsedRow) -> bool:
    """Test one rule against a row. Invalid regex patterns never match."""
    if rule.match_field == MatchField.MERCHANT_NORM:
        value = row.merchant_norm
    else:
        value = row.description_raw

    if not value:
        return False

    if rule.match_type == MatchType.CONTAINS:
        return rule.match_value.upper() in value.upper()
    if rule.match_type == MatchType.EQUALS:
        return value.upper() == rule.match_value.upper()
    if rule.match_type == MatchType.REGEX:
        return safe_search(rule.match_value, value)
    return False


def apply_merchant_rules(
    row: ParsedRow, rules: Iterable[MerchantRule]
) -> ClassificationResult | None:
    """Apply the first matching enabled rule, by ascending priority.

    Returns:
        Classification built from the rule's actions, or None if no rule matched
    """
    for rule in sorted(rules, key=lambda r: r.priority):
        if not rule.enabled:
            continue
        if not rule_matches(rule, row):
            continue

        result = ClassificationResult(kind_reason=f"Rule: {rule.match_value}")
        if rule.action_exclude:
            result.included_in_spend = False
        if rule.set_kind is not None:
            result.kind = rule.set_kind
        if rule.set_category:
            result.category = rule.set_category
        return result

    return None


def classify_transaction(
    row: ParsedRow,
    rules: Iterable[MerchantRule] = (),
    default_category: str = DEFAULT_CATEGORY,
) -> ClassificationResult:
    """Assign kind, spend inclusion and category to one row.

    Order: parse errors, user rules, keyword heuristics, then the sign of
    the amount. Never raises for bad rule patterns.

    Args:
        row: Parsed statement row
        rules: User merchant rules in any order
        default_category: Category for purchases no pattern recognizes

    Returns:
        ClassificationResult
    """
    if row.parse_status == ParseStatus.ERROR:
        return ClassificationResult(kind_reason="Parse error")

    rule_result = apply_merchant_rules(row, rules)
    if rule_result is not None:
        return rule_result

    merchant_norm = row.merchant_norm
    description_raw = row.description_raw
    amount = row.amount_signed
    positive = amount is not None and amount > 0

    for patterns, kind, reason, requires_positive in HEURISTICS:
        if requires_positive and not positive:
            continue
        if matches_any_pattern(merchant_norm, patterns) or matches_any_pattern(
            description_raw, patterns
        ):
            return ClassificationResult(kind=kind, kind_reason=reason, included_in_spend=False)

    if amount is not None and amount < 0:
        category, subcategory = determine_category(merchant_norm, description_raw)
        return ClassificationResult(
            kind=TransactionKind.PURCHASE,
            kind_reason="Purchase",
            included_in_spend=True,
            category=category or default_category,
            subcategory=subcategory,
        )

    return ClassificationResult(kind_reason="Unable to classify")


def classify_batch(
    rows: Sequence[ParsedRow],
    rules: Iterable[MerchantRule] = (),
    default_category: str = DEFAULT_CATEGORY,
) -> list[ClassificationResult]:
    """Classify every row, preserving order."""
    rules = list(rules)
    return [classify_transaction(row, rules, default_category) for row in rows]


def find_potential_refund_pairs(
    rows: Sequence[ParsedRow], tolerance: Decimal = Decimal("0.01")
) -> list[RefundPair]:
    """Find purchase/refund pairs with the same merchant and opposite amounts.

    First-fit scan: each unmatched row pairs with the first later unmatched
    row that qualifies, and no row appears in two pairs.

    Args:
        rows: Parsed rows in file order
        tolerance: Maximum difference between the two magnitudes

    Returns:
        Suggested pairs, keyed by row_index
    """
    pairs: list[RefundPair] = []
    matched: set[int] = set()

    for i, first in enumerate(rows):
        if i in matched:
            continue
        if not first.merchant_norm or first.amount_signed is None:
            continue

        for j in range(i + 1, len(rows)):
            if j in matched:
                continue
            second = rows[j]
            if not second.merchant_norm or second.amount_signed is None:
                continue

            same_merchant = first.merchant_norm == second.merchant_norm
            same_amount = abs(abs(first.amount_signed) - abs(second.amount_signed)) < tolerance
            opposite_sign = (first.amount_signed > 0 > second.amount_signed) or (
                first.amount_signed < 0 < second.amount_signed
            )

            if same_merchant and same_amount and opposite_sign:
                purchase, refund = (first, second) if first.amount_signed < 0 else (second, first)
                pairs.append(
                    RefundPair(
                        purchase_index=purchase.row_index,
                        refund_index=refund.row_index,
                        merchant=first.merchant_norm,
                        amount=abs(first.amount_signed),
                    )
                )
                matched.add(i)
                matched.add(j)
                break

    return pairs
