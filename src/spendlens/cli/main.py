"""Main CLI entry point."""

import click

from spendlens.config import load_settings
from spendlens.database.factories import create_sqlite_store
from spendlens.logging_setup import configure_logging
from spendlens.utils.date_parser import get_timezone

# Import and register all commands at module level
from spendlens.cli.commands import (
    import_cmd,
    view,
    export,
    summary,
    compare,
    trend,
    sync,
    account,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDLENS_DB_PATH environment variable)",
    envvar="SPENDLENS_DB_PATH",
)
@click.option(
    "--timezone",
    "timezone_name",
    help="Reporting time zone for month and day bucketing (default: UTC)",
    envvar="SPENDLENS_TIMEZONE",
)
@click.option(
    "--log-level",
    help="Logging level (DEBUG, INFO, WARNING, ...)",
    envvar="SPENDLENS_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, timezone_name: str | None, log_level: str | None):
    """Spendlens - personal finance analytics.

    Import transactions from bank and card CSV exports or mock providers,
    then review monthly rollups, category breakdowns and spending trends.
    """
    ctx.ensure_object(dict)
    try:
        settings = load_settings()
        zone = get_timezone(timezone_name or settings.timezone)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    configure_logging(log_level or settings.log_level)

    ctx.obj["settings"] = settings
    ctx.obj["zone"] = zone

    # Open the store only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(
            database_path=db_path or settings.database_path, zone=zone
        )
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
import_cmd.register_commands(cli)
view.register_commands(cli)
export.register_commands(cli)
summary.register_commands(cli)
compare.register_commands(cli)
trend.register_commands(cli)
sync.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
