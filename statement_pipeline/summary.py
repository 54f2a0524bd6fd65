"""Batch aggregate computed from effective row state."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from statement_pipeline.models import (
    DEFAULT_CATEGORY,
    DEFAULT_CURRENCY,
    BatchSummary,
    EffectiveRow,
    ParseStatus,
    TransactionKind,
)

CENTS = Decimal("0.01")


def needs_review(row: EffectiveRow) -> bool:
    return row.parse_status == ParseStatus.ERROR or row.effective_kind == TransactionKind.UNKNOWN


def compute_batch_summary(
    rows: Iterable[EffectiveRow],
    currency: str = DEFAULT_CURRENCY,
    default_category: str = DEFAULT_CATEGORY,
) -> BatchSummary:
    """Reduce effective rows to counts, totals and the date range.

    Each row lands in exactly one bucket, checked in order: duplicate,
    needs-review, included, excluded. ``rows_excluded`` counts every row
    that is not included, so it covers duplicates and needs-review too.
    ``rows_uncategorized`` is counted apart from the buckets: every
    non-duplicate, included purchase without a real category.
    Totals are rounded to cents once, after summing.

    Args:
        rows: Override-applied rows
        currency: Currency label for the summary
        default_category: Category treated as "uncategorized"

    Returns:
        BatchSummary
    """
    summary = BatchSummary(currency=currency)
    included_spend = Decimal("0")
    excluded_amount = Decimal("0")

    for row in rows:
        summary.rows_total += 1
        magnitude = abs(row.amount_signed) if row.amount_signed is not None else Decimal("0")

        if row.date_chosen:
            if summary.date_min is None or row.date_chosen < summary.date_min:
                summary.date_min = row.date_chosen
            if summary.date_max is None or row.date_chosen > summary.date_max:
                summary.date_max = row.date_chosen

        if (
            not row.is_duplicate
            and row.effective_included_in_spend
            and row.effective_kind == TransactionKind.PURCHASE
            and (not row.effective_category or row.effective_category == default_category)
        ):
            summary.rows_uncategorized += 1

        if row.is_duplicate:
            summary.rows_duplicates += 1
            summary.rows_excluded += 1
            excluded_amount += magnitude
        elif needs_review(row):
            summary.rows_needs_review += 1
            summary.rows_excluded += 1
            excluded_amount += magnitude
        elif row.effective_included_in_spend:
            summary.rows_included += 1
            included_spend += magnitude
        else:
            summary.rows_excluded += 1
            excluded_amount += magnitude

    summary.total_included_spend = included_spend.quantize(CENTS, rounding=ROUND_HALF_UP)
    summary.total_excluded_amount = excluded_amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    return summary
