"""CLI error handling helpers."""

import click

from fintrack.domain.errors import DomainError
from fintrack.domain.ledger import LedgerService
from fintrack.domain.outcome import MutationOutcome


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def check_outcome(ctx: click.Context, service: LedgerService, outcome: MutationOutcome) -> None:
    """Exit on a refused mutation; warn if the applied one was not saved."""
    if not outcome.ok:
        handle_domain_error(ctx, outcome.error)
    if not service.last_save_ok:
        click.echo("Warning: change applied but could not be saved.", err=True)
