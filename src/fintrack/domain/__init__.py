"""Domain layer for fintrack application."""

from fintrack.domain.hierarchy import enforce_hierarchy, validate_hierarchy
from fintrack.domain.transaction import create_transaction, update_transaction, delete_transaction
from fintrack.domain.filtering import filter_by_month, sort_top_level, SortKey
from fintrack.domain.summary import (
    income_vs_expense_series,
    expense_by_category,
    monthly_balance_series,
    build_summary_report,
)
from fintrack.domain.export import export_csv
from fintrack.domain.outcome import MutationOutcome, apply_mutation

__all__ = [
    "enforce_hierarchy",
    "validate_hierarchy",
    "create_transaction",
    "update_transaction",
    "delete_transaction",
    "filter_by_month",
    "sort_top_level",
    "SortKey",
    "income_vs_expense_series",
    "expense_by_category",
    "monthly_balance_series",
    "build_summary_report",
    "export_csv",
    "MutationOutcome",
    "apply_mutation",
]
