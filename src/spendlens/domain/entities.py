"""Domain model entities for spendlens.

These are pure data classes representing business concepts, independent of
the storage schema. Aggregates are ephemeral view artifacts: they are always
recomputed from records and never persisted.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from spendlens.utils.amount_parser import round_money

UNCATEGORIZED = "Uncategorized"


class TransactionStatus(str, Enum):
    """Settlement state of a transaction."""

    COMPLETED = "completed"
    PENDING = "pending"
    SCHEDULED = "scheduled"


class SourceKind(str, Enum):
    """Origin convention of a raw transaction shape."""

    MOCK = "mock"
    STORE = "store"
    CSV_BANK = "csv-bank"
    CSV_CARD_ISSUER = "csv-card-issuer"
    STARLING = "starling"
    AMEX = "amex"


class PercentMarker(str, Enum):
    """Non-numeric percent change used when the baseline is zero."""

    NEW = "new"
    INFINITE = "infinite"


Percent = Union[Decimal, PercentMarker, None]


@dataclass(frozen=True)
class TransactionRecord:
    """Normalized transaction.

    ``month_key`` is derived from ``timestamp``; use
    ``normalizer.reassign_timestamp`` rather than ``replace`` to move a record
    in time.
    """

    id: str
    timestamp: datetime
    month_key: str
    amount: Decimal
    category: str = UNCATEGORIZED
    merchant: str = "Unknown"
    description: str = "Transaction"
    account: str = "Other"
    status: TransactionStatus = TransactionStatus.COMPLETED
    reference: Optional[str] = None
    notes: Optional[str] = None
    provider: Optional[str] = None

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def day(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True)
class CategoryTotal:
    """Expense magnitude summed for one category."""

    category: str
    total: Decimal

    def rounded(self) -> "CategoryTotal":
        return replace(self, total=round_money(self.total))


@dataclass(frozen=True)
class MonthlyAggregate:
    """Income/expense rollup for one reporting month."""

    month_key: str
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    category_totals: tuple[CategoryTotal, ...] = ()

    @property
    def net_amount(self) -> Decimal:
        return self.total_income - self.total_expenses

    def category_total(self, category: str) -> Decimal:
        """Return the expense total for a category, zero when absent."""
        for item in self.category_totals:
            if item.category == category:
                return item.total
        return Decimal("0")

    def rounded(self) -> "MonthlyAggregate":
        """Return a copy with every monetary value rounded for display."""
        return MonthlyAggregate(
            month_key=self.month_key,
            total_income=round_money(self.total_income),
            total_expenses=round_money(self.total_expenses),
            category_totals=tuple(item.rounded() for item in self.category_totals),
        )


@dataclass(frozen=True)
class DailyTotal:
    """Expense magnitude for one calendar day."""

    day: date
    amount: Decimal

    def rounded(self) -> "DailyTotal":
        return replace(self, amount=round_money(self.amount))


@dataclass(frozen=True)
class Delta:
    """Change in total expenses between two months."""

    absolute: Decimal
    percent: Percent


@dataclass(frozen=True)
class CategoryDelta:
    """Change in one category's expenses between two months."""

    category: str
    baseline: Decimal
    comparand: Decimal
    absolute: Decimal
    percent: Percent


@dataclass(frozen=True)
class ComparisonResult:
    """Expense comparison of a comparand month against a baseline month."""

    baseline: MonthlyAggregate
    comparand: MonthlyAggregate
    total_delta: Delta
    category_deltas: tuple[CategoryDelta, ...] = ()


@dataclass(frozen=True)
class RowError:
    """A row rejected during batch normalization."""

    row_number: int
    reason: str

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.reason}"


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a batch import: accepted records plus per-row failures."""

    records: tuple[TransactionRecord, ...] = ()
    errors: tuple[RowError, ...] = ()

    @property
    def imported(self) -> int:
        return len(self.records)


class DateWindow(str, Enum):
    """Named date windows, resolved relative to the current time."""

    ALL = "all"
    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "last-7-days"
    LAST_30_DAYS = "last-30-days"
    LAST_YEAR = "last-year"


@dataclass(frozen=True)
class DateRange:
    """Explicit date bounds; dates include the whole day."""

    start: Optional[Union[date, datetime]] = None
    end: Optional[Union[date, datetime]] = None


@dataclass(frozen=True)
class AmountRange:
    """Inclusive bounds on the absolute value of an amount."""

    minimum: Optional[Decimal] = None
    maximum: Optional[Decimal] = None


@dataclass(frozen=True)
class FilterSpec:
    """Compound record predicate. Every field is optional and AND-combined."""

    search_term: Optional[str] = None
    accounts: frozenset[str] = field(default_factory=frozenset)
    categories: frozenset[str] = field(default_factory=frozenset)
    date_range: Union[DateWindow, DateRange, None] = None
    amount_range: Optional[AmountRange] = None

    def is_empty(self) -> bool:
        return (
            not self.search_term
            and not self.accounts
            and not self.categories
            and (self.date_range is None or self.date_range == DateWindow.ALL)
            and self.amount_range is None
        )


@dataclass(frozen=True)
class ColumnMapping:
    """CSV column names for the fields an import reads."""

    date: str
    description: str
    amount: str
    category: Optional[str] = None


@dataclass(frozen=True)
class Account:
    """Account reported by a provider."""

    id: str
    name: str
    type: str
    provider: str
    balance: Decimal
    currency: str = "GBP"
    limit: Optional[Decimal] = None
    due_date: Optional[datetime] = None


@dataclass(frozen=True)
class AccountSummary:
    """Balance statistics across accounts."""

    total_balance: Decimal
    total_debt: Decimal
    available_credit: Decimal
