"""CSV export command."""

from pathlib import Path

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.export import export_csv
from fintrack.domain.filtering import filter_by_month
from fintrack.utils.date_parser import parse_month_key


@click.command("export")
@click.option(
    "--month",
    default="all",
    show_default=True,
    help="Month to export (YYYY-MM, 'this month', 'last month' or 'all')",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File to write (default: standard output)",
)
@click.option("--delimiter", default=",", show_default=True, help="Field delimiter")
@click.pass_context
def export_transactions(ctx, month: str, output: Path | None, delimiter: str):
    """Export transactions, sub-items included, as CSV.

    Examples:
        fintrack export --month 2024-01 -o janeiro.csv
        fintrack export --delimiter ";"
    """
    service = ctx.obj["ledger"]
    ledger = service.ledger

    if len(delimiter) != 1:
        click.echo("Error: Delimiter must be a single character", err=True)
        ctx.exit(1)

    try:
        scoped = filter_by_month(ledger.transactions, parse_month_key(month))
    except ValueError as e:
        handle_domain_error(ctx, e)

    document = export_csv(scoped, ledger.currency, delimiter=delimiter)

    if output is None:
        click.echo(document, nl=False)
        return

    output.write_text(document, encoding="utf-8")
    rows = sum(1 + len(txn.sub_items) for txn in scoped)
    click.echo(f"Exported {rows} row(s) to {output}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_transactions)
