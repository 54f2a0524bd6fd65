"""User overrides, the effective row view, and re-application of rules."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace

from statement_pipeline.classifier import classify_transaction
from statement_pipeline.models import (
    DEFAULT_CATEGORY,
    EffectiveRow,
    ImportRow,
    MerchantRule,
    OverridePatch,
)

logger = logging.getLogger(__name__)


def build_effective_row(row: ImportRow, override: OverridePatch | None = None) -> EffectiveRow:
    """Join a row's system classification with its override, if any."""
    override = override or OverridePatch()

    return EffectiveRow(
        row_index=row.row_index,
        parse_status=row.parsed.parse_status,
        parse_error=row.parsed.parse_error,
        date_chosen=row.parsed.date_chosen,
        amount_signed=row.parsed.amount_signed,
        merchant_norm=row.parsed.merchant_norm,
        description_raw=row.parsed.description_raw,
        system_kind=row.kind,
        system_included_in_spend=row.included_in_spend,
        system_category=row.category,
        system_reason=row.kind_reason,
        effective_kind=override.kind if override.kind is not None else row.kind,
        effective_included_in_spend=(
            override.included_in_spend
            if override.included_in_spend is not None
            else row.included_in_spend
        ),
        effective_category=override.category if override.category is not None else row.category,
        effective_merchant=(
            override.merchant if override.merchant is not None else row.parsed.merchant_norm
        ),
        is_duplicate=row.is_duplicate,
        duplicate_of=row.duplicate_of,
    )


def build_effective_rows(
    rows: Iterable[ImportRow], overrides: Mapping[int, OverridePatch] | None = None
) -> list[EffectiveRow]:
    """Effective view of every row, keyed into ``overrides`` by row_index."""
    overrides = overrides or {}
    return [build_effective_row(row, overrides.get(row.row_index)) for row in rows]


def apply_override_patch(
    rows: Sequence[ImportRow],
    overrides: Mapping[int, OverridePatch],
    patch: OverridePatch,
    row_indices: Iterable[int] = (),
    merchant_norm: str | None = None,
) -> dict[int, OverridePatch]:
    """Merge ``patch`` into the overrides of the targeted rows.

    When ``merchant_norm`` is given and any row carries it, every such row is
    targeted; otherwise the explicit ``row_indices`` are.

    Args:
        rows: Rows of the batch
        overrides: Current overrides by row_index (not modified)
        patch: Fields to set; None fields leave existing values alone
        row_indices: Explicit targets
        merchant_norm: Target every row with this merchant key instead

    Returns:
        New overrides mapping

    Raises:
        ValueError: If nothing is targeted or an index is not in the batch
    """
    known = {row.row_index for row in rows}
    targets = list(row_indices)

    if merchant_norm:
        merchant_rows = [row.row_index for row in rows if row.parsed.merchant_norm == merchant_norm]
        if merchant_rows:
            targets = merchant_rows

    if not targets:
        raise ValueError("No rows selected for override")

    unknown = [index for index in targets if index not in known]
    if unknown:
        raise ValueError(f"Unknown row index: {unknown[0]}")

    updated = dict(overrides)
    for index in targets:
        existing = updated.get(index)
        updated[index] = existing.merged_with(patch) if existing else patch

    logger.debug("Applied override to %d row(s)", len(targets))
    return updated


def reapply_rules(
    rows: Sequence[ImportRow],
    rules: Iterable[MerchantRule],
    overrides: Mapping[int, OverridePatch] | None = None,
    default_category: str = DEFAULT_CATEGORY,
) -> tuple[list[ImportRow], dict[int, OverridePatch], int]:
    """Re-classify rows with the current rules.

    Rows whose kind, inclusion or category changes take the new values and
    drop their override. Duplicate rows are left alone.

    Returns:
        Tuple of (rows, remaining overrides, number of rows changed)
    """
    rules = list(rules)
    remaining = dict(overrides or {})
    updated_rows: list[ImportRow] = []
    changed = 0

    for row in rows:
        if row.is_duplicate:
            updated_rows.append(row)
            continue

        result = classify_transaction(row.parsed, rules, default_category)
        if (
            result.kind == row.kind
            and result.included_in_spend == row.included_in_spend
            and result.category == row.category
        ):
            updated_rows.append(row)
            continue

        updated_rows.append(
            replace(
                row,
                kind=result.kind,
                kind_reason=result.kind_reason,
                included_in_spend=result.included_in_spend,
                category=result.category,
                subcategory=result.subcategory,
            )
        )
        remaining.pop(row.row_index, None)
        changed += 1

    logger.debug("Rule re-application changed %d of %d row(s)", changed, len(updated_rows))
    return updated_rows, remaining, changed
