"""Exact-match duplicate detection by row fingerprint.

A fingerprint is ``user|date|amount|merchant`` with missing parts encoded as
the literal ``null``, so rows with missing fields still collide with each other.
"""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from statement_pipeline.models import DedupeResult, ExistingTransaction, ParsedRow

CENTS = Decimal("0.01")


def _amount_key(amount: Decimal | None) -> str:
    if amount is None:
        return "null"
    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


def create_fingerprint(
    user_id: str,
    date: str | None,
    amount: Decimal | None,
    merchant_norm: str | None,
) -> str:
    """Build the dedupe key for one transaction.

    Args:
        user_id: Owner of the transaction
        date: ISO date or None
        amount: Signed amount or None (rounded to cents)
        merchant_norm: Normalized merchant key or None

    Returns:
        Pipe-delimited fingerprint string
    """
    return "|".join([user_id, date or "null", _amount_key(amount), merchant_norm or "null"])


def row_fingerprint(row: ParsedRow, user_id: str) -> str:
    return create_fingerprint(user_id, row.date_chosen, row.amount_signed, row.merchant_norm)


def detect_duplicates_in_batch(
    rows: Sequence[ParsedRow], user_id: str
) -> dict[int, DedupeResult]:
    """Flag every repeat of an earlier fingerprint within the same batch.

    The first occurrence is kept; later ones are duplicates with
    ``duplicate_of=None`` because the anchor has no storage ID yet.

    Returns:
        row_index -> DedupeResult for every row
    """
    seen: set[str] = set()
    results: dict[int, DedupeResult] = {}

    for row in rows:
        fingerprint = row_fingerprint(row, user_id)
        if fingerprint in seen:
            results[row.row_index] = DedupeResult(is_duplicate=True)
        else:
            seen.add(fingerprint)
            results[row.row_index] = DedupeResult()

    return results


def match_against_existing(
    rows: Sequence[ParsedRow],
    user_id: str,
    existing: Iterable[ExistingTransaction],
) -> dict[int, DedupeResult]:
    """Look each row's fingerprint up among stored transactions.

    Returns:
        row_index -> DedupeResult; hits carry the stored transaction ID
    """
    by_fingerprint: dict[str, str] = {}
    for transaction in existing:
        fingerprint = create_fingerprint(
            user_id, transaction.date, transaction.amount, transaction.merchant_norm
        )
        by_fingerprint.setdefault(fingerprint, transaction.id)

    results: dict[int, DedupeResult] = {}
    for row in rows:
        existing_id = by_fingerprint.get(row_fingerprint(row, user_id))
        if existing_id is not None:
            results[row.row_index] = DedupeResult(is_duplicate=True, duplicate_of=existing_id)
        else:
            results[row.row_index] = DedupeResult()

    return results


async def check_duplicates_against_existing(
    rows: Sequence[ParsedRow],
    user_id: str,
    existing: Iterable[ExistingTransaction],
) -> dict[int, DedupeResult]:
    """Async entry point for the against-storage pass.

    The caller fetches ``existing`` once; comparison itself is synchronous.
    """
    return match_against_existing(rows, user_id, existing)
