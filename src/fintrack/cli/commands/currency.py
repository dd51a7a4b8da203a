"""Currency setting command."""

import click
from fintrack.cli.error_handling import check_outcome


@click.command("currency")
@click.argument("code", required=False)
@click.pass_context
def currency(ctx, code: str | None):
    """Show or set the ledger currency (e.g., BRL, USD, EUR)."""
    service = ctx.obj["ledger"]
    if code is None:
        click.echo(service.ledger.currency)
        return

    outcome = service.set_currency(code)
    check_outcome(ctx, service, outcome)
    click.echo(f"Currency set to {service.ledger.currency}")


def register_commands(cli):
    """Register currency command with main CLI."""
    cli.add_command(currency)
