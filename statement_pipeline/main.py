"""CLI entry point for Statement Pipeline.

Imports a bank statement CSV and prints the batch summary, refund-pair
suggestions and merchant-rule suggestions.
"""

import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

import typer

from statement_pipeline.csv_loader import CSVStructureError
from statement_pipeline.models import (
    DEFAULT_CURRENCY,
    ExistingTransaction,
    ImportBatch,
    MerchantRule,
    PipelineConfig,
)
from statement_pipeline.pipeline import import_statement
from statement_pipeline.suggestions import suggest_rules

app = typer.Typer(add_completion=False, help="Bank statement CSV ingestion.")

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_handler: logging.Handler | None = None


def configure_logging(verbose: bool) -> None:
    """Send package DEBUG records to the current stderr when verbose."""
    global _handler
    logger = logging.getLogger("statement_pipeline")
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    if not verbose:
        return

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG)


def _load_json_list(path: Path, label: str) -> list[dict[str, Any]]:
    if not path.exists():
        typer.echo(f"Error: {label} file not found: {path}", err=True)
        raise typer.Exit(1)

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        typer.echo(f"Error: {label} file is not valid JSON: {exc}", err=True)
        raise typer.Exit(1) from exc

    if not isinstance(data, list):
        typer.echo(f"Error: {label} file must contain a JSON list", err=True)
        raise typer.Exit(1)
    return data


def load_rules(path: Path) -> list[MerchantRule]:
    """Read merchant rules from a JSON list of rule objects."""
    records = _load_json_list(path, "Rules")
    try:
        return [MerchantRule.from_dict(record) for record in records]
    except (KeyError, ValueError, TypeError) as exc:
        typer.echo(f"Error: Invalid rule in {path.name}: {exc}", err=True)
        raise typer.Exit(1) from exc


def load_existing(path: Path) -> list[ExistingTransaction]:
    """Read stored transactions from a JSON list of {id, date, amount, merchant_norm}."""
    records = _load_json_list(path, "Existing transactions")
    try:
        return [ExistingTransaction.from_dict(record) for record in records]
    except (KeyError, ArithmeticError, TypeError) as exc:
        typer.echo(f"Error: Invalid transaction in {path.name}: {exc}", err=True)
        raise typer.Exit(1) from exc


def read_statement(path: Path) -> str:
    """Read statement text, falling back to Latin-1 for non-UTF-8 exports."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1")


def _money(amount: Decimal | None, currency: str) -> str:
    if amount is None:
        return "-"
    symbol = "$" if currency == "USD" else f"{currency} "
    return f"{symbol}{amount:,.2f}"


def print_summary(batch: ImportBatch) -> None:
    summary = batch.summary

    typer.echo("\n" + "=" * 50)
    typer.echo("IMPORT SUMMARY")
    typer.echo("=" * 50)
    typer.echo(f"  Rows total: {summary.rows_total}")
    typer.echo(f"  Included in spend: {summary.rows_included}")
    typer.echo(f"  Excluded: {summary.rows_excluded}")
    typer.echo(f"    Duplicates: {summary.rows_duplicates}")
    typer.echo(f"    Needs review: {summary.rows_needs_review}")
    typer.echo(f"  Uncategorized purchases: {summary.rows_uncategorized}")
    typer.echo(f"\n  Included spend: {_money(summary.total_included_spend, summary.currency)}")
    typer.echo(f"  Excluded amount: {_money(summary.total_excluded_amount, summary.currency)}")
    if summary.date_min and summary.date_max:
        typer.echo(f"  Date range: {summary.date_min} to {summary.date_max}")


def print_rows(batch: ImportBatch) -> None:
    typer.echo("\n" + "-" * 50)
    typer.echo("ROWS")
    typer.echo("-" * 50)
    for row in batch.rows:
        parsed = row.parsed
        status = "INCLUDED" if row.included_in_spend else "excluded"
        category = row.category or ""
        if row.subcategory:
            category = f"{category} / {row.subcategory}"
        typer.echo(
            f"  {parsed.row_index:>4} | {parsed.date_chosen or '?':<10} | "
            f"{_money(parsed.amount_signed, batch.summary.currency):>12} | "
            f"{row.kind.value:<15} | {status:<8} | {(parsed.merchant_norm or '')[:30]:<30} | {category}"
        )
        if parsed.parse_error:
            typer.echo(f"         ! {parsed.parse_error}")


@app.callback()
def main() -> None:
    """Bank statement CSV ingestion."""


@app.command()
def ingest(
    csv_file: Path = typer.Argument(..., help="Bank statement CSV file"),
    rules_file: Path | None = typer.Option(
        None, "--rules", "-r", help="JSON file with merchant rules"
    ),
    existing_file: Path | None = typer.Option(
        None, "--existing", "-e", help="JSON file with already-stored transactions"
    ),
    user_id: str = typer.Option("local", "--user-id", "-u", help="Owner of the batch"),
    currency: str = typer.Option(DEFAULT_CURRENCY, "--currency", help="Currency label"),
    show_rows: bool = typer.Option(False, "--show-rows", help="Print every classified row"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline details to stderr"),
) -> None:
    """Parse, classify and deduplicate a statement CSV, then print a summary."""
    configure_logging(verbose)

    if not csv_file.exists():
        typer.echo(f"Error: File not found: {csv_file}", err=True)
        raise typer.Exit(1)

    rules = load_rules(rules_file) if rules_file else []
    existing = load_existing(existing_file) if existing_file else []
    config = PipelineConfig(currency=currency)

    typer.echo(f"Loading statement: {csv_file.name}")
    try:
        batch = import_statement(
            read_statement(csv_file), user_id, rules=rules, existing=existing, config=config
        )
    except CSVStructureError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if not batch.rows:
        typer.echo("Error: CSV file is empty or could not be parsed", err=True)
        raise typer.Exit(1)

    mapping = batch.mapping
    typer.echo(f"Detected {mapping.format_type.upper()} format")
    columns = (
        ("date", mapping.date),
        ("amount", mapping.amount),
        ("description", mapping.description),
    )
    for label, column in columns:
        if column:
            typer.echo(f"  Using {label} column: {column}")
    if rules:
        typer.echo(f"Applied {len(rules)} merchant rule(s)")

    print_summary(batch)

    if show_rows:
        print_rows(batch)

    if batch.refund_pairs:
        typer.echo("\n" + "-" * 50)
        typer.echo(f"POSSIBLE REFUNDS ({len(batch.refund_pairs)} pairs)")
        typer.echo("-" * 50)
        for pair in batch.refund_pairs:
            typer.echo(
                f"  rows {pair.purchase_index} -> {pair.refund_index} | "
                f"{_money(pair.amount, currency)} | {pair.merchant}"
            )

    suggestions = suggest_rules(batch.rows, existing_rules=rules, config=config)
    if suggestions:
        typer.echo("\n" + "-" * 50)
        typer.echo(f"SUGGESTED RULES ({len(suggestions)})")
        typer.echo("-" * 50)
        for suggestion in suggestions:
            typer.echo(
                f"  {suggestion.match_value} -> {suggestion.suggested_category} "
                f"({suggestion.confidence:.2f}, {suggestion.affected_count} rows, "
                f"{_money(suggestion.affected_amount, currency)})"
            )


if __name__ == "__main__":
    app()
