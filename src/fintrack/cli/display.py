"""Shared CLI rendering helpers."""

import click

from fintrack.domain.entities import Transaction, TransactionType
from fintrack.utils.formatting import format_currency


def signed_amount(txn: Transaction, currency: str) -> str:
    """Amount with a leading + for income and - for expense."""
    sign = "+" if txn.type == TransactionType.INCOME else "-"
    return f"{sign} {format_currency(txn.amount, currency)}"


def echo_transaction_details(txn: Transaction, currency: str) -> None:
    """Print every field of a transaction, one per line."""
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Date: {txn.date.strftime('%d/%m/%Y')}")
    click.echo(f"  Amount: {signed_amount(txn, currency)}")
    click.echo(f"  Category: {txn.category}")
    if txn.priority:
        click.echo(f"  Priority: {txn.priority.value}")
    if txn.parent_id:
        click.echo(f"  Sub-item of: {txn.parent_id}")
    if txn.notes:
        click.echo(f"  Notes: {txn.notes}")


def echo_transaction_row(txn: Transaction, currency: str, is_sub_item: bool = False) -> None:
    """Print a transaction as a single table row."""
    marker = "  └ " if is_sub_item else ""
    description = f"{marker}{txn.description}"[:34]
    click.echo(
        f"{txn.id:<38} {txn.date.strftime('%d/%m/%Y'):<12} "
        f"{signed_amount(txn, currency):>18} {txn.category:<20} {description:<34}"
    )
