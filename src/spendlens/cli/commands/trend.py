"""Daily spending trend command."""

from datetime import date

import click

from spendlens.cli.formatting import format_money
from spendlens.domain.aggregation import aggregate_by_day, trailing_days
from spendlens.domain.transaction import TransactionService
from spendlens.utils.date_parser import parse_date


@click.command("trend")
@click.option(
    "--days",
    type=click.IntRange(min=1),
    default=30,
    show_default=True,
    help="Number of days ending today",
)
@click.option("--start-date", help="Window start (overrides --days)")
@click.option("--end-date", help="Window end (default: today)")
@click.pass_context
def trend(ctx, days: int, start_date: str | None, end_date: str | None):
    """Show daily spending, one line per day including days without spending."""
    try:
        end = parse_date(end_date) if end_date else date.today()
        start = parse_date(start_date) if start_date else trailing_days(days, end)[0]
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    if start > end:
        click.echo("Error: Start date must be on or before end date.", err=True)
        ctx.exit(1)

    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    series = aggregate_by_day(service.list_transactions(), start, end)

    click.echo(f"\nDaily Spending {start.isoformat()} to {end.isoformat()}:")
    click.echo("-" * 28)
    for point in series:
        click.echo(f"{point.day.isoformat():<12} {format_money(point.amount):>14}")


def register_commands(cli):
    """Register trend command with main CLI."""
    cli.add_command(trend)
