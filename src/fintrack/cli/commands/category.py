"""Category management commands."""

import click
from fintrack.cli.error_handling import check_outcome
from fintrack.domain.category import count_category_references


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories with how many transactions use them."""
    service = ctx.obj["ledger"]
    ledger = service.ledger

    if not ledger.categories:
        click.echo("No categories found. Create one with 'category create'.")
        return

    click.echo("\nCategories:")
    for cat in ledger.categories:
        uses = count_category_references(ledger.transactions, cat.name)
        click.echo(f"  {cat.name} [{cat.icon}] (ID: {cat.id}, used by {uses})")


@category_group.command("create")
@click.argument("name")
@click.option("--icon", default="tag", show_default=True, help="Icon name")
@click.pass_context
def create_category(ctx, name: str, icon: str):
    """Create a new category."""
    service = ctx.obj["ledger"]
    outcome = service.create_category(name, icon)
    check_outcome(ctx, service, outcome)
    created = outcome.snapshot.categories[-1]
    click.echo(f"Created category '{name}' (ID: {created.id})")


@category_group.command("update")
@click.argument("category_id")
@click.option("--name", help="New name")
@click.option("--icon", help="New icon name")
@click.pass_context
def update_category(ctx, category_id: str, name: str | None, icon: str | None):
    """Rename a category or change its icon.

    Transactions keep the name they were saved with.
    """
    if name is None and icon is None:
        click.echo("Nothing to update.")
        return

    service = ctx.obj["ledger"]
    outcome = service.update_category(category_id, name=name, icon=icon)
    check_outcome(ctx, service, outcome)
    click.echo(f"Updated category {category_id}")


@category_group.command("delete")
@click.argument("category_id")
@click.pass_context
def delete_category(ctx, category_id: str):
    """Delete a category that no transaction uses."""
    service = ctx.obj["ledger"]
    outcome = service.delete_category(category_id)
    check_outcome(ctx, service, outcome)
    click.echo(f"Deleted category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
