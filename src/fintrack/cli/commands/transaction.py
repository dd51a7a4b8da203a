"""Transaction management commands."""

import click
from fintrack.cli.display import echo_transaction_details, echo_transaction_row
from fintrack.cli.error_handling import check_outcome, handle_domain_error
from fintrack.domain.category import get_category_by_name
from fintrack.domain.entities import TransactionPriority, TransactionType
from fintrack.domain.errors import DomainError
from fintrack.domain.filtering import SortKey, available_months, filter_by_month, sort_top_level
from fintrack.domain.summary import compute_totals
from fintrack.utils.date_parser import parse_date, parse_month_key
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.formatting import format_currency, month_key_to_label


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--description", help="Transaction description")
@click.option("--amount", help="Transaction amount (ignored for parents with sub-items)")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    help="Transaction type",
)
@click.option("--category", help="Category name")
@click.option("--notes", help="Notes (empty string to clear)")
@click.option(
    "--priority",
    type=click.Choice(["low", "medium", "high"], case_sensitive=False),
    help="Priority",
)
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    description: str | None,
    amount: str | None,
    date: str | None,
    txn_type: str | None,
    category: str | None,
    notes: str | None,
    priority: str | None,
) -> None:
    """Update a transaction or sub-item.

    Updates only the fields that are provided.

    Examples:
        fintrack transaction update tx_123 --amount 75.00
        fintrack transaction update tx_123 --category Lazer --priority high
    """
    service = ctx.obj["ledger"]
    changes = {}

    if description is not None:
        changes["description"] = description

    # Parse amount if provided
    if amount is not None:
        try:
            changes["amount"] = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    # Parse date if provided
    if date is not None:
        try:
            changes["date"] = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    if txn_type is not None:
        changes["type"] = TransactionType(txn_type.upper())

    if category is not None:
        if get_category_by_name(service.ledger.categories, category) is None:
            click.echo(f"Error: Category '{category}' not found", err=True)
            ctx.exit(1)
        changes["category"] = category

    if notes is not None:
        # Empty string means clear notes
        changes["notes"] = notes or None

    if priority is not None:
        changes["priority"] = TransactionPriority(priority.upper())

    if not changes:
        click.echo("Nothing to update.")
        return

    outcome = service.update_transaction(transaction_id, **changes)
    check_outcome(ctx, service, outcome)

    click.echo(f"Updated transaction {transaction_id}")
    echo_transaction_details(service.require_transaction(transaction_id), service.ledger.currency)


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction.

    Deleting a transaction with sub-items deletes the sub-items too.

    Examples:
        fintrack transaction delete tx_123
    """
    service = ctx.obj["ledger"]

    # Get transaction info for display
    try:
        txn = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    # Confirm deletion
    prompt = f"Are you sure you want to delete transaction {transaction_id}?"
    if txn.sub_items:
        prompt = (
            f"Transaction {transaction_id} has {len(txn.sub_items)} sub-item(s) that will "
            "also be deleted. Continue?"
        )
    if not yes and not click.confirm(prompt):
        click.echo("Deletion cancelled.")
        return

    outcome = service.delete_transaction(transaction_id)
    check_outcome(ctx, service, outcome)
    click.echo(f"Deleted transaction {transaction_id}")
    if txn.parent_id:
        parent = service.require_transaction(txn.parent_id)
        click.echo(
            f"  Parent total: {format_currency(parent.amount, service.ledger.currency)}"
        )


@transaction_group.command("list")
@click.option(
    "--month",
    default="all",
    show_default=True,
    help="Month to show (YYYY-MM, 'this month', 'last month' or 'all')",
)
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice([k.value for k in SortKey]),
    default=SortKey.DATE_DESC.value,
    show_default=True,
    help="Ordering of top-level transactions",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all fields, including notes and priority")
@click.pass_context
def list_transactions(ctx, month: str, sort_key: str, verbose: bool):
    """View transactions with their sub-items.

    Use --month to restrict the list to one calendar month.
    """
    service = ctx.obj["ledger"]
    ledger = service.ledger

    try:
        month_key = parse_month_key(month)
        scoped = filter_by_month(ledger.transactions, month_key)
    except ValueError as e:
        handle_domain_error(ctx, e)
    transactions = sort_top_level(scoped, sort_key)

    if not transactions:
        click.echo("No transactions found for this period.")
        return

    count = sum(1 + len(txn.sub_items) for txn in transactions)

    if verbose:
        # Verbose mode: show all fields in a detailed format
        click.echo(f"\nFound {count} transaction(s):")
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            echo_transaction_details(txn, ledger.currency)
            for sub_item in txn.sub_items:
                click.echo(f"\n  Sub-item ID: {sub_item.id}")
                echo_transaction_details(sub_item, ledger.currency)
            click.echo("-" * 100)
    else:
        # Compact mode: show key columns in a table
        click.echo(f"\nFound {count} transaction(s):")
        click.echo("-" * 126)
        click.echo(
            f"{'ID':<38} {'Date':<12} {'Amount':>18} {'Category':<20} {'Description':<34}"
        )
        click.echo("-" * 126)
        for txn in transactions:
            echo_transaction_row(txn, ledger.currency)
            for sub_item in txn.sub_items:
                echo_transaction_row(sub_item, ledger.currency, is_sub_item=True)

    # Show totals
    totals = compute_totals(transactions)
    click.echo("-" * 126)
    click.echo(
        f"TOTAL  Income: {format_currency(totals.income, ledger.currency)} | "
        f"Expenses: {format_currency(totals.expense, ledger.currency)} | "
        f"Balance: {format_currency(totals.balance, ledger.currency)}"
    )


@transaction_group.command("months")
@click.pass_context
def list_months(ctx):
    """List the months that have transactions, newest first."""
    service = ctx.obj["ledger"]
    months = available_months(service.ledger.transactions)
    if not months:
        click.echo("No transactions yet.")
        return
    for month_key in months:
        click.echo(f"{month_key}  {month_key_to_label(month_key)}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
