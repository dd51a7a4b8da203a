"""Tests for the aggregation engine."""

from decimal import Decimal

from conftest import make_txn
from fintrack.domain.entities import TransactionType
from fintrack.domain.hierarchy import enforce_hierarchy
from fintrack.domain.summary import (
    build_summary_report,
    compute_totals,
    expense_by_category,
    income_vs_expense_series,
    monthly_balance_series,
)

INCOME = TransactionType.INCOME


def _year_of_activity():
    trip = make_txn(
        "trip",
        "0",
        day="2024-02-10",
        sub_items=(
            make_txn("rice", "20.00", day="2024-02-10", parent_id="trip"),
            make_txn("coffee", "35.50", day="2024-02-10", parent_id="trip", category="Lazer"),
        ),
    )
    return enforce_hierarchy(
        (
            make_txn("rent-mar", "1500.00", day="2024-03-01", category="Aluguel"),
            trip,
            make_txn("salary-feb", "3000.00", day="2024-02-05", txn_type=INCOME, category="Salário"),
            make_txn("cinema", "45.10", day="2024-02-20", category="Lazer"),
            make_txn("salary-jan", "3000.00", day="2024-01-05", txn_type=INCOME, category="Salário"),
            make_txn("bonus", "0.10", day="2024-01-06", txn_type=INCOME, category="Salário"),
            make_txn("bonus-2", "0.20", day="2024-01-07", txn_type=INCOME, category="Salário"),
        )
    )


def test_january_scenario(january_transactions):
    """Income 1000.00 and expense 300.00 in January give a 700.00 balance."""
    series = income_vs_expense_series(january_transactions)
    balance = monthly_balance_series(january_transactions)

    assert len(series) == 1
    assert series[0].as_chart_dict() == {
        "name": "janeiro de 2024",
        "Receita": Decimal("1000.00"),
        "Despesa": Decimal("300.00"),
    }
    assert balance[0].as_chart_dict() == {"name": "janeiro de 2024", "Saldo": Decimal("700.00")}


def test_series_in_chronological_order():
    series = income_vs_expense_series(_year_of_activity())

    assert [row.month for row in series] == ["2024-01", "2024-02", "2024-03"]
    assert [row.name for row in series] == [
        "janeiro de 2024",
        "fevereiro de 2024",
        "março de 2024",
    ]


def test_months_without_activity_are_not_synthesized():
    transactions = (
        make_txn("a", "1", day="2024-01-10"),
        make_txn("b", "1", day="2024-04-10"),
    )

    assert [row.month for row in monthly_balance_series(transactions)] == ["2024-01", "2024-04"]


def test_series_conserves_income_and_expense():
    transactions = _year_of_activity()
    series = income_vs_expense_series(transactions)

    income = sum(t.amount for t in transactions if t.type == INCOME)
    expense = sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)
    assert sum(row.income for row in series) == income
    assert sum(row.expense for row in series) == expense


def test_decimal_sums_are_exact():
    series = income_vs_expense_series(_year_of_activity())

    assert series[0].income == Decimal("3000.30")


def test_sub_items_are_not_double_counted():
    series = income_vs_expense_series(_year_of_activity())
    february = series[1]

    assert february.expense == Decimal("55.50") + Decimal("45.10")
    assert february.income == Decimal("3000.00")


def test_category_breakdown_uses_top_level_only():
    """Sub-item categories are folded into the parent's category."""
    rows = {row.name: row for row in expense_by_category(_year_of_activity())}

    assert rows["Supermercado"].value == Decimal("55.50")
    assert rows["Lazer"].value == Decimal("45.10")
    assert rows["Aluguel"].value == Decimal("1500.00")
    assert "Salário" not in rows


def test_category_breakdown_is_complete_and_shares_sum_to_one():
    transactions = _year_of_activity()
    rows = expense_by_category(transactions)

    expense = sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)
    assert sum(row.value for row in rows) == expense
    assert abs(sum(row.share for row in rows) - 1) < Decimal("1e-20")


def test_category_breakdown_empty_without_expenses(january_transactions):
    assert expense_by_category(january_transactions[:1]) == ()


def test_balance_can_be_negative():
    balance = monthly_balance_series(_year_of_activity())

    assert balance[-1].balance == Decimal("-1500.00")


def test_custom_month_labeler(january_transactions):
    series = income_vs_expense_series(january_transactions, month_label=lambda key: f"<{key}>")

    assert series[0].name == "<2024-01>"


def test_totals(january_transactions):
    totals = compute_totals(january_transactions)

    assert totals.income == Decimal("1000.00")
    assert totals.expense == Decimal("300.00")
    assert totals.balance == Decimal("700.00")


def test_summary_report_for_one_month():
    report = build_summary_report(_year_of_activity(), "2024-02")

    assert report.month == "2024-02"
    assert report.totals.income == Decimal("3000.00")
    assert report.totals.expense == Decimal("100.60")
    assert [row.month for row in report.income_vs_expense] == ["2024-02"]
    assert [row.month for row in report.monthly_balance] == ["2024-02"]
    assert {row.name for row in report.expense_by_category} == {"Supermercado", "Lazer"}


def test_summary_report_for_all_months():
    report = build_summary_report(_year_of_activity())

    assert report.month == "all"
    assert len(report.income_vs_expense) == 3
