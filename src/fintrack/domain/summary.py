"""Aggregation of transaction snapshots into report series.

All functions consider top-level transactions only. A parent's amount
already folds in its sub-items, so counting sub-items as well would count
them twice. Sums are exact ``Decimal`` additions; rounding is left to
display formatting.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Callable, Sequence

from fintrack.domain.entities import (
    BalanceRow,
    CategoryBreakdownRow,
    IncomeExpenseRow,
    SummaryReport,
    Totals,
    Transaction,
    TransactionType,
)
from fintrack.domain.filtering import filter_by_month, top_level
from fintrack.utils.formatting import month_key_to_label

MonthLabeler = Callable[[str], str]

ZERO = Decimal("0")


def group_by_month(
    transactions: Sequence[Transaction],
) -> dict[str, dict[TransactionType, Decimal]]:
    """Sum top-level amounts per month bucket and type, in chronological order."""
    buckets: dict[str, dict[TransactionType, Decimal]] = defaultdict(
        lambda: {TransactionType.INCOME: ZERO, TransactionType.EXPENSE: ZERO}
    )
    for txn in top_level(transactions):
        buckets[txn.month_key][txn.type] += txn.amount
    return {key: buckets[key] for key in sorted(buckets)}


def income_vs_expense_series(
    transactions: Sequence[Transaction],
    month_label: MonthLabeler = month_key_to_label,
) -> tuple[IncomeExpenseRow, ...]:
    """One row per month present in the data with income and expense sums."""
    return tuple(
        IncomeExpenseRow(
            month=key,
            name=month_label(key),
            income=sums[TransactionType.INCOME],
            expense=sums[TransactionType.EXPENSE],
        )
        for key, sums in group_by_month(transactions).items()
    )


def monthly_balance_series(
    transactions: Sequence[Transaction],
    month_label: MonthLabeler = month_key_to_label,
) -> tuple[BalanceRow, ...]:
    """One row per month present in the data with income minus expense."""
    return tuple(
        BalanceRow(
            month=key,
            name=month_label(key),
            balance=sums[TransactionType.INCOME] - sums[TransactionType.EXPENSE],
        )
        for key, sums in group_by_month(transactions).items()
    )


def expense_by_category(
    transactions: Sequence[Transaction],
) -> tuple[CategoryBreakdownRow, ...]:
    """Expense totals per category name, in order of first appearance.

    Each row's share is its value over the sum of all category values.
    """
    totals: dict[str, Decimal] = {}
    for txn in top_level(transactions):
        if txn.type != TransactionType.EXPENSE:
            continue
        totals[txn.category] = totals.get(txn.category, ZERO) + txn.amount

    grand_total = sum(totals.values(), ZERO)
    return tuple(
        CategoryBreakdownRow(
            name=name,
            value=value,
            share=value / grand_total if grand_total else ZERO,
        )
        for name, value in totals.items()
    )


def compute_totals(transactions: Sequence[Transaction]) -> Totals:
    """Total income and expense over top-level transactions."""
    income = ZERO
    expense = ZERO
    for txn in top_level(transactions):
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return Totals(income=income, expense=expense)


def build_summary_report(
    transactions: Sequence[Transaction],
    month_key: str = "all",
    month_label: MonthLabeler = month_key_to_label,
) -> SummaryReport:
    """Filter a snapshot to a month window and derive every report view."""
    scoped = filter_by_month(transactions, month_key)
    return SummaryReport(
        month=month_key,
        totals=compute_totals(scoped),
        income_vs_expense=income_vs_expense_series(scoped, month_label),
        expense_by_category=expense_by_category(scoped),
        monthly_balance=monthly_balance_series(scoped, month_label),
    )
