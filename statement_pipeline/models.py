"""Data structures for the statement ingestion pipeline."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Literal

DEFAULT_CURRENCY = "USD"
DEFAULT_CATEGORY = "Uncategorized"

_TRUE_STRINGS = {"true", "yes", "1"}
_FALSE_STRINGS = {"false", "no", "0", ""}


def parse_flag(value: Any, name: str) -> bool:
    """Read a boolean stored as a bool, 0/1, or a "true"/"false" style string.

    Raises:
        ValueError: If the value is none of those
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


class TransactionKind(str, Enum):
    """Semantic kind assigned to a statement row."""

    PURCHASE = "purchase"
    INCOME = "income"
    TRANSFER = "transfer"
    CC_PAYMENT = "cc_payment"
    REFUND = "refund"
    CASH_WITHDRAWAL = "cash_withdrawal"
    FEE_INTEREST = "fee_interest"
    UNKNOWN = "unknown"
    DUPLICATE = "duplicate"


class ParseStatus(str, Enum):
    """Per-row outcome of CSV parsing."""

    OK = "ok"
    ERROR = "error"


class MatchField(str, Enum):
    """Row field a merchant rule reads."""

    MERCHANT_NORM = "merchant_norm"
    DESCRIPTION = "description"


class MatchType(str, Enum):
    """How a merchant rule compares its value."""

    CONTAINS = "contains"
    EQUALS = "equals"
    REGEX = "regex"


@dataclass
class ColumnMapping:
    """Detected column mappings for a CSV.

    Attributes:
        date: Name of the date column
        amount: Name of the amount column
        description: Name of the description column
        debit: Name of the debit column
        credit: Name of the credit column
        format_type: "debit_credit" when either split column exists, else "signed"
    """

    date: str | None
    amount: str | None
    description: str | None
    debit: str | None
    credit: str | None
    format_type: Literal["debit_credit", "signed"]


@dataclass
class ParsedRow:
    """One CSV line after column mapping and type coercion.

    Attributes:
        row_index: Zero-based position in the source file
        raw: Original column -> value mapping
        parse_status: ok/error
        parse_error: Diagnostic text, or None
        date_raw: Original date text
        date_chosen: Resolved ISO date (YYYY-MM-DD)
        amount_raw: Original amount text
        amount_signed: Signed amount (negative = money out)
        description_raw: Free-text description
        merchant_raw: Merchant text before normalization
        merchant_norm: Normalized merchant key
    """

    row_index: int
    raw: dict[str, Any]
    parse_status: ParseStatus
    parse_error: str | None
    date_raw: str | None
    date_chosen: str | None
    amount_raw: str | None
    amount_signed: Decimal | None
    description_raw: str | None
    merchant_raw: str | None
    merchant_norm: str | None


@dataclass(frozen=True)
class MerchantRule:
    """User-authored classification override.

    Attributes:
        match_field: Field the rule reads
        match_type: contains/equals/regex
        match_value: Pattern string
        action_exclude: Force included_in_spend to False
        set_kind: Kind to assign, if any
        set_category: Category to assign, if any
        priority: Lower value wins
        enabled: Disabled rules are skipped
        id: Storage identifier, if known
    """

    match_field: MatchField
    match_type: MatchType
    match_value: str
    action_exclude: bool = False
    set_kind: TransactionKind | None = None
    set_category: str | None = None
    priority: int = 100
    enabled: bool = True
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerchantRule":
        """Build a rule from a storage record (snake_case or camelCase keys).

        Raises:
            ValueError: If match_field, match_type or set_kind is not a known value,
                or a flag is not a boolean
        """

        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        set_kind = pick("set_kind", "setKind")
        return cls(
            match_field=MatchField(pick("match_field", "matchField", MatchField.MERCHANT_NORM.value)),
            match_type=MatchType(pick("match_type", "matchType", MatchType.CONTAINS.value)),
            match_value=str(pick("match_value", "matchValue", "")),
            action_exclude=parse_flag(
                pick("action_exclude", "actionExclude", False), "action_exclude"
            ),
            set_kind=TransactionKind(set_kind) if set_kind else None,
            set_category=pick("set_category", "setCategory"),
            priority=int(pick("priority", "priority", 100)),
            enabled=parse_flag(pick("enabled", "enabled", True), "enabled"),
            id=pick("id", "id"),
        )


@dataclass
class ClassificationResult:
    """Per-row classification judgment."""

    kind: TransactionKind = TransactionKind.UNKNOWN
    kind_reason: str | None = None
    included_in_spend: bool = False
    category: str | None = None
    subcategory: str | None = None


@dataclass(frozen=True)
class RefundPair:
    """Suggested purchase/refund pairing within a batch.

    Attributes:
        purchase_index: row_index of the negative row
        refund_index: row_index of the positive row
        merchant: Shared merchant_norm
        amount: Absolute amount of the earlier row
    """

    purchase_index: int
    refund_index: int
    merchant: str
    amount: Decimal


@dataclass(frozen=True)
class DedupeResult:
    """Duplicate verdict for one row."""

    is_duplicate: bool = False
    duplicate_of: str | None = None


@dataclass(frozen=True)
class ExistingTransaction:
    """Already-stored transaction used for the against-storage dedupe pass."""

    id: str
    date: str | None
    amount: Decimal | None
    merchant_norm: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExistingTransaction":
        amount = data.get("amount")
        return cls(
            id=str(data["id"]),
            date=data.get("date"),
            amount=Decimal(str(amount)) if amount is not None else None,
            merchant_norm=data.get("merchant_norm", data.get("merchantNorm")),
        )


@dataclass
class ImportRow:
    """Parsed row joined with its system classification and dedupe verdict."""

    parsed: ParsedRow
    kind: TransactionKind
    kind_reason: str | None
    included_in_spend: bool
    category: str | None
    subcategory: str | None = None
    is_duplicate: bool = False
    duplicate_of: str | None = None

    @property
    def row_index(self) -> int:
        return self.parsed.row_index


@dataclass
class OverridePatch:
    """User correction of a row; None means "leave unchanged"."""

    kind: TransactionKind | None = None
    included_in_spend: bool | None = None
    category: str | None = None
    merchant: str | None = None

    def merged_with(self, other: "OverridePatch") -> "OverridePatch":
        """Return a patch where every field set on ``other`` replaces this one."""
        return OverridePatch(
            kind=other.kind if other.kind is not None else self.kind,
            included_in_spend=(
                other.included_in_spend
                if other.included_in_spend is not None
                else self.included_in_spend
            ),
            category=other.category if other.category is not None else self.category,
            merchant=other.merchant if other.merchant is not None else self.merchant,
        )


@dataclass
class EffectiveRow:
    """Row view with system values and their override-applied counterparts."""

    row_index: int
    parse_status: ParseStatus
    parse_error: str | None
    date_chosen: str | None
    amount_signed: Decimal | None
    merchant_norm: str | None
    description_raw: str | None
    system_kind: TransactionKind
    system_included_in_spend: bool
    system_category: str | None
    system_reason: str | None
    effective_kind: TransactionKind
    effective_included_in_spend: bool
    effective_category: str | None
    effective_merchant: str | None
    is_duplicate: bool
    duplicate_of: str | None


@dataclass
class BatchSummary:
    """Aggregate counts and totals over one batch."""

    rows_total: int = 0
    rows_included: int = 0
    rows_excluded: int = 0
    rows_needs_review: int = 0
    rows_duplicates: int = 0
    rows_uncategorized: int = 0
    total_included_spend: Decimal = Decimal("0.00")
    total_excluded_amount: Decimal = Decimal("0.00")
    date_min: str | None = None
    date_max: str | None = None
    currency: str = DEFAULT_CURRENCY


@dataclass
class RuleSuggestion:
    """Merchant rule proposed from patterns in a batch."""

    match_type: MatchType
    match_field: MatchField
    match_value: str
    suggested_category: str
    confidence: float
    affected_count: int
    affected_amount: Decimal
    sample_merchants: list[str] = field(default_factory=list)
    suggested_kind: TransactionKind | None = None
    suggested_exclude: bool = False

    def to_rule(self, priority: int = 100) -> MerchantRule:
        """Turn an accepted suggestion into an enabled rule."""
        return MerchantRule(
            match_field=self.match_field,
            match_type=self.match_type,
            match_value=self.match_value,
            action_exclude=self.suggested_exclude,
            set_kind=self.suggested_kind,
            set_category=self.suggested_category,
            priority=priority,
        )


@dataclass
class PipelineConfig:
    """Tunables for an import run.

    Attributes:
        currency: Currency label written to summaries
        refund_amount_tolerance: Max magnitude difference for refund pairs
        default_category: Category given to purchases no pattern matches
        suggestion_min_occurrences: Rows a merchant needs before a rule is suggested
        suggestion_limit: Maximum number of rule suggestions returned
    """

    currency: str = DEFAULT_CURRENCY
    refund_amount_tolerance: Decimal = Decimal("0.01")
    default_category: str = DEFAULT_CATEGORY
    suggestion_min_occurrences: int = 2
    suggestion_limit: int = 5


@dataclass
class ImportBatch:
    """Result of running one CSV through the whole pipeline.

    Attributes:
        user_id: Owner of the batch
        headers: Trimmed CSV header names
        mapping: Detected column mapping
        rows: Classified and deduplicated rows, in file order
        summary: Aggregate over the rows
        refund_pairs: Purchase/refund pairing suggestions
    """

    user_id: str
    headers: list[str]
    mapping: ColumnMapping
    rows: list[ImportRow]
    summary: BatchSummary
    refund_pairs: list[RefundPair] = field(default_factory=list)
