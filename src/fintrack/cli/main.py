"""Main CLI entry point."""

import click
from fintrack.cli.logging_setup import setup_logging
from fintrack.database.factories import create_sqlite_storage
from fintrack.domain.ledger import LedgerService

# Import and register all commands at module level
from fintrack.cli.commands import (
    add,
    transaction,
    category,
    report,
    export,
    currency,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--owner",
    default="default",
    show_default=True,
    envvar="FINTRACK_OWNER",
    help="Whose ledger to use",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="FINTRACK_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, owner: str, log_level: str):
    """Fintrack - Personal finance tracker.

    Record income and expenses, split purchases into itemized sub-items, and
    report totals, category breakdowns and monthly trends.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Open storage only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        storage = create_sqlite_storage(database_path=db_path)
        storage.connect()
        ctx.call_on_close(storage.disconnect)
        ctx.obj["storage"] = storage
        ctx.obj["ledger"] = LedgerService(storage, owner)


# Register all commands
add.register_commands(cli)
transaction.register_commands(cli)
category.register_commands(cli)
report.register_commands(cli)
export.register_commands(cli)
currency.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
