"""End-to-end import: parse, classify, deduplicate, summarize."""

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence

from statement_pipeline.classifier import classify_batch, find_potential_refund_pairs
from statement_pipeline.csv_loader import detect_column_mapping, parse_csv
from statement_pipeline.dedupe import (
    check_duplicates_against_existing,
    detect_duplicates_in_batch,
    match_against_existing,
)
from statement_pipeline.models import (
    BatchSummary,
    ClassificationResult,
    DedupeResult,
    ExistingTransaction,
    ImportBatch,
    ImportRow,
    MerchantRule,
    OverridePatch,
    ParsedRow,
    PipelineConfig,
    TransactionKind,
)
from statement_pipeline.overrides import build_effective_rows
from statement_pipeline.summary import compute_batch_summary

logger = logging.getLogger(__name__)

ExistingLoader = Callable[[str], Awaitable[Iterable[ExistingTransaction]]]


def _rank(result: DedupeResult) -> tuple[bool, bool]:
    return result.is_duplicate, result.duplicate_of is not None


def merge_dedupe_results(
    *passes: Mapping[int, DedupeResult],
) -> dict[int, DedupeResult]:
    """Combine dedupe passes; a hit that carries a stored ID wins over one that does not."""
    merged: dict[int, DedupeResult] = {}
    for results in passes:
        for row_index, result in results.items():
            current = merged.get(row_index)
            if current is None or _rank(result) > _rank(current):
                merged[row_index] = result
    return merged


def build_import_rows(
    rows: Sequence[ParsedRow],
    classifications: Sequence[ClassificationResult],
    duplicates: Mapping[int, DedupeResult],
) -> list[ImportRow]:
    """Join parsed rows with their classification and dedupe verdict.

    Duplicates become kind ``duplicate`` and are excluded from spend; their
    heuristic category is kept.
    """
    import_rows: list[ImportRow] = []
    for row, result in zip(rows, classifications):
        dedupe = duplicates.get(row.row_index, DedupeResult())
        if dedupe.is_duplicate:
            import_rows.append(
                ImportRow(
                    parsed=row,
                    kind=TransactionKind.DUPLICATE,
                    kind_reason="Duplicate detected",
                    included_in_spend=False,
                    category=result.category,
                    subcategory=result.subcategory,
                    is_duplicate=True,
                    duplicate_of=dedupe.duplicate_of,
                )
            )
        else:
            import_rows.append(
                ImportRow(
                    parsed=row,
                    kind=result.kind,
                    kind_reason=result.kind_reason,
                    included_in_spend=result.included_in_spend,
                    category=result.category,
                    subcategory=result.subcategory,
                )
            )
    return import_rows


def summarize(
    rows: Sequence[ImportRow],
    overrides: Mapping[int, OverridePatch] | None = None,
    config: PipelineConfig | None = None,
) -> BatchSummary:
    """Recompute the batch summary from rows and overrides."""
    config = config or PipelineConfig()
    return compute_batch_summary(
        build_effective_rows(rows, overrides),
        currency=config.currency,
        default_category=config.default_category,
    )


def _assemble(
    csv_text: str,
    user_id: str,
    rules: Iterable[MerchantRule],
    config: PipelineConfig,
) -> tuple[list[ParsedRow], list[str], list[ClassificationResult], dict[int, DedupeResult]]:
    rows, headers = parse_csv(csv_text)
    logger.debug("Parsed %d row(s) with headers %s", len(rows), headers)

    classifications = classify_batch(rows, rules, config.default_category)
    duplicates = detect_duplicates_in_batch(rows, user_id)
    return rows, headers, classifications, duplicates


def _finish(
    user_id: str,
    rows: list[ParsedRow],
    headers: list[str],
    classifications: list[ClassificationResult],
    duplicates: Mapping[int, DedupeResult],
    config: PipelineConfig,
) -> ImportBatch:
    import_rows = build_import_rows(rows, classifications, duplicates)
    summary = summarize(import_rows, config=config)
    refund_pairs = find_potential_refund_pairs(rows, config.refund_amount_tolerance)

    logger.debug(
        "Import for %s: %d included, %d excluded, %d duplicate(s), %d refund pair(s)",
        user_id,
        summary.rows_included,
        summary.rows_excluded,
        summary.rows_duplicates,
        len(refund_pairs),
    )
    return ImportBatch(
        user_id=user_id,
        headers=headers,
        mapping=detect_column_mapping(headers),
        rows=import_rows,
        summary=summary,
        refund_pairs=refund_pairs,
    )


def import_statement(
    csv_text: str,
    user_id: str,
    rules: Iterable[MerchantRule] = (),
    existing: Iterable[ExistingTransaction] = (),
    config: PipelineConfig | None = None,
) -> ImportBatch:
    """Run one CSV through the whole pipeline.

    Args:
        csv_text: Statement CSV including the header row
        user_id: Owner of the batch, part of every fingerprint
        rules: User merchant rules
        existing: Already-stored transactions for the against-storage pass
        config: Pipeline tunables

    Returns:
        ImportBatch with rows in file order

    Raises:
        CSVStructureError: If the text cannot be tokenized as CSV
    """
    config = config or PipelineConfig()
    rows, headers, classifications, duplicates = _assemble(csv_text, user_id, rules, config)

    existing = list(existing)
    if existing:
        duplicates = merge_dedupe_results(
            duplicates, match_against_existing(rows, user_id, existing)
        )

    return _finish(user_id, rows, headers, classifications, duplicates, config)


async def import_statement_async(
    csv_text: str,
    user_id: str,
    rules: Iterable[MerchantRule] = (),
    load_existing: ExistingLoader | None = None,
    config: PipelineConfig | None = None,
) -> ImportBatch:
    """Like import_statement, fetching stored transactions with one awaited call.

    Args:
        load_existing: Coroutine function taking the user ID and returning
            that user's stored transactions
    """
    config = config or PipelineConfig()
    rows, headers, classifications, duplicates = _assemble(csv_text, user_id, rules, config)

    if load_existing is not None and rows:
        existing = list(await load_existing(user_id))
        logger.debug("Loaded %d existing transaction(s)", len(existing))
        duplicates = merge_dedupe_results(
            duplicates, await check_duplicates_against_existing(rows, user_id, existing)
        )

    return _finish(user_id, rows, headers, classifications, duplicates, config)
