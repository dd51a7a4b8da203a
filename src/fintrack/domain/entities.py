"""Domain model entities for fintrack.

These are pure, immutable data classes. Engine operations never mutate them;
they build new instances with ``dataclasses.replace`` and return new tuples.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionPriority(str, Enum):
    """User-assigned priority of a transaction."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def weight(self) -> int:
        return {"LOW": 1, "MEDIUM": 2, "HIGH": 3}[self.value]


@dataclass(frozen=True)
class Category:
    """Named, icon-tagged label referenced by transactions through its name."""

    id: str
    name: str
    icon: str


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    A transaction is either top-level (``parent_id`` is None) or a sub-item
    of exactly one top-level transaction. Top-level transactions with a
    non-empty ``sub_items`` tuple are parents, and their ``amount`` is the
    sum of their sub-items.
    """

    id: str
    description: str
    amount: Decimal
    date: datetime
    type: TransactionType
    category: str
    parent_id: Optional[str] = None
    sub_items: tuple["Transaction", ...] = ()
    notes: Optional[str] = None
    priority: Optional[TransactionPriority] = None

    @property
    def month_key(self) -> str:
        """Month bucket (``YYYY-MM``) taken from the ISO form of the date."""
        return self.date.isoformat()[:7]

    @property
    def is_parent(self) -> bool:
        return len(self.sub_items) > 0

    @property
    def is_child(self) -> bool:
        return self.parent_id is not None

    @property
    def priority_weight(self) -> int:
        return (self.priority or TransactionPriority.MEDIUM).weight


@dataclass(frozen=True)
class TransactionDraft:
    """User-supplied fields for a new transaction (no id, no sub-items)."""

    description: str
    amount: Decimal
    date: datetime
    type: TransactionType
    category: str
    notes: Optional[str] = None
    priority: Optional[TransactionPriority] = None


@dataclass(frozen=True)
class Ledger:
    """Everything persisted for one owner."""

    transactions: tuple[Transaction, ...] = ()
    categories: tuple[Category, ...] = ()
    currency: str = "BRL"


@dataclass(frozen=True)
class IncomeExpenseRow:
    """One month of the income-vs-expense series."""

    month: str
    name: str
    income: Decimal
    expense: Decimal

    def as_chart_dict(self) -> dict[str, Any]:
        return {"name": self.name, "Receita": self.income, "Despesa": self.expense}


@dataclass(frozen=True)
class CategoryBreakdownRow:
    """Expense total for one category and its share of all expenses."""

    name: str
    value: Decimal
    share: Decimal

    def as_chart_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class BalanceRow:
    """Net balance (income minus expense) for one month."""

    month: str
    name: str
    balance: Decimal

    def as_chart_dict(self) -> dict[str, Any]:
        return {"name": self.name, "Saldo": self.balance}


@dataclass(frozen=True)
class Totals:
    """Dashboard totals over top-level transactions."""

    income: Decimal
    expense: Decimal

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class SummaryReport:
    """All derived views for one month window."""

    month: str
    totals: Totals
    income_vs_expense: tuple[IncomeExpenseRow, ...] = field(default_factory=tuple)
    expense_by_category: tuple[CategoryBreakdownRow, ...] = field(default_factory=tuple)
    monthly_balance: tuple[BalanceRow, ...] = field(default_factory=tuple)
