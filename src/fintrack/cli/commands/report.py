"""Report commands: totals, monthly series and category breakdown."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.entities import SummaryReport
from fintrack.domain.summary import build_summary_report
from fintrack.utils.date_parser import parse_month_key
from fintrack.utils.formatting import format_currency, month_key_to_label

month_option = click.option(
    "--month",
    default="all",
    show_default=True,
    help="Month window (YYYY-MM, 'this month', 'last month' or 'all')",
)


def _build_report(ctx, month: str) -> tuple[SummaryReport, str]:
    service = ctx.obj["ledger"]
    try:
        report = build_summary_report(service.ledger.transactions, parse_month_key(month))
    except ValueError as e:
        handle_domain_error(ctx, e)
    return report, service.ledger.currency


def _window_title(report: SummaryReport) -> str:
    if report.month == "all":
        return "All months"
    return month_key_to_label(report.month)


def _echo_totals(report: SummaryReport, currency: str) -> None:
    click.echo(f"{'Receita Total':<30} {format_currency(report.totals.income, currency):>20}")
    click.echo(f"{'Despesa Total':<30} {format_currency(report.totals.expense, currency):>20}")
    click.echo(f"{'Saldo Líquido':<30} {format_currency(report.totals.balance, currency):>20}")


def _echo_series(report: SummaryReport, currency: str) -> None:
    if not report.income_vs_expense:
        click.echo("No income or expense data to show.")
        return
    click.echo(f"{'Month':<30} {'Receita':>20} {'Despesa':>20}")
    for row in report.income_vs_expense:
        click.echo(
            f"{row.name:<30} {format_currency(row.income, currency):>20} "
            f"{format_currency(row.expense, currency):>20}"
        )


def _echo_categories(report: SummaryReport, currency: str) -> None:
    if not report.expense_by_category:
        click.echo("No expense data to show.")
        return
    rows = sorted(report.expense_by_category, key=lambda r: r.value, reverse=True)
    click.echo(f"{'Category':<30} {'Value':>20} {'Share':>8}")
    for row in rows:
        click.echo(
            f"{row.name:<30} {format_currency(row.value, currency):>20} {row.share:>8.1%}"
        )


def _echo_balance(report: SummaryReport, currency: str) -> None:
    if not report.monthly_balance:
        click.echo("No balance data to show.")
        return
    click.echo(f"{'Month':<30} {'Saldo':>20}")
    for row in report.monthly_balance:
        click.echo(f"{row.name:<30} {format_currency(row.balance, currency):>20}")


@click.group()
def report_group():
    """Show aggregated reports."""
    pass


@report_group.command("summary")
@month_option
@click.pass_context
def summary(ctx, month: str):
    """Show totals and every report for a month window."""
    report, currency = _build_report(ctx, month)
    click.echo(f"\n{_window_title(report)}")
    click.echo("=" * 72)
    _echo_totals(report, currency)
    click.echo("\nReceitas vs Despesas Mensais")
    click.echo("-" * 72)
    _echo_series(report, currency)
    click.echo("\nDespesas por Categoria")
    click.echo("-" * 72)
    _echo_categories(report, currency)
    click.echo("\nEvolução do Saldo Mensal")
    click.echo("-" * 72)
    _echo_balance(report, currency)


@report_group.command("series")
@month_option
@click.pass_context
def series(ctx, month: str):
    """Income vs expense per month."""
    report, currency = _build_report(ctx, month)
    _echo_series(report, currency)


@report_group.command("categories")
@month_option
@click.pass_context
def categories(ctx, month: str):
    """Expenses per category with their share."""
    report, currency = _build_report(ctx, month)
    _echo_categories(report, currency)


@report_group.command("balance")
@month_option
@click.pass_context
def balance(ctx, month: str):
    """Net balance per month."""
    report, currency = _build_report(ctx, month)
    _echo_balance(report, currency)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
