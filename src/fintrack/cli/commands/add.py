"""Add transaction command."""

import click
from fintrack.cli.display import echo_transaction_details
from fintrack.cli.error_handling import check_outcome
from fintrack.domain.category import get_category_by_name
from fintrack.domain.entities import TransactionDraft, TransactionPriority, TransactionType
from fintrack.utils.date_parser import parse_date
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.formatting import format_currency


@click.command("add")
@click.option("--description", required=True, help="Transaction description")
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45 or 123,45)")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD, DD/MM/YYYY or relative like 'today', 'yesterday')",
)
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    show_default=True,
    help="Transaction type",
)
@click.option("--category", required=True, help="Category name (e.g., 'Supermercado')")
@click.option("--notes", help="Notes")
@click.option(
    "--priority",
    type=click.Choice(["low", "medium", "high"], case_sensitive=False),
    help="Priority (default: medium)",
)
@click.option("--parent", "parent_id", help="ID of the transaction this is a sub-item of")
@click.option("--id", "transaction_id", help="Transaction ID (auto-generated if not provided)")
@click.pass_context
def add_transaction(
    ctx,
    description: str,
    amount: str,
    date: str,
    txn_type: str,
    category: str,
    notes: str | None,
    priority: str | None,
    parent_id: str | None,
    transaction_id: str | None,
):
    """Add a transaction, optionally as a sub-item of another one.

    Examples:
        fintrack add --description "Salário" --amount 1000 --type income --category Salário
        fintrack add --description "Arroz" --amount 20,00 --category Supermercado --parent tx_123
    """
    service = ctx.obj["ledger"]

    # Parse date
    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if get_category_by_name(service.ledger.categories, category) is None:
        click.echo(f"Error: Category '{category}' not found", err=True)
        ctx.exit(1)

    draft = TransactionDraft(
        description=description,
        amount=txn_amount,
        date=txn_date,
        type=TransactionType(txn_type.upper()),
        category=category,
        notes=notes,
        priority=TransactionPriority(priority.upper()) if priority else None,
    )

    outcome, new_id = service.add_transaction(
        draft, parent_id=parent_id, transaction_id=transaction_id
    )
    check_outcome(ctx, service, outcome)

    click.echo(f"Created transaction {new_id}")
    echo_transaction_details(service.require_transaction(new_id), service.ledger.currency)
    if parent_id:
        parent = service.require_transaction(parent_id)
        click.echo(f"  Parent total: {format_currency(parent.amount, service.ledger.currency)}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
