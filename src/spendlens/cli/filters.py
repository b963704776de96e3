"""CLI helpers for building record filters from command options."""

from decimal import Decimal

import click

from spendlens.domain.entities import AmountRange, DateRange, DateWindow, FilterSpec
from spendlens.utils.amount_parser import parse_amount
from spendlens.utils.date_parser import parse_date

WINDOW_CHOICES = [window.value for window in DateWindow]


def filter_options(command):
    """Attach the shared record filter options to a command."""
    options = [
        click.option("--search", help="Case-insensitive text matched against merchant and category"),
        click.option("--account", "accounts", multiple=True, help="Account label (repeatable)"),
        click.option("--category", "categories", multiple=True, help="Category (repeatable)"),
        click.option(
            "--range",
            "window",
            type=click.Choice(WINDOW_CHOICES),
            help="Named date window relative to now",
        ),
        click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')"),
        click.option("--min-amount", help="Minimum absolute amount"),
        click.option("--max-amount", help="Maximum absolute amount"),
    ]

    for option in reversed(options):
        command = option(command)
    return command


def build_filter_spec(
    ctx,
    *,
    search: str | None,
    accounts: tuple[str, ...],
    categories: tuple[str, ...],
    window: str | None,
    start_date: str | None,
    end_date: str | None,
    min_amount: str | None,
    max_amount: str | None,
) -> FilterSpec:
    """Resolve filter options into a FilterSpec, exiting on invalid input."""
    if window and (start_date or end_date):
        click.echo(
            "Error: --range cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    date_range = None
    if window:
        date_range = DateWindow(window)
    elif start_date or end_date:
        start = end = None
        try:
            if start_date:
                start = parse_date(start_date)
            if end_date:
                end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)
        date_range = DateRange(start=start, end=end)

    amount_range = None
    if min_amount is not None or max_amount is not None:
        try:
            amount_range = AmountRange(
                minimum=_magnitude(min_amount),
                maximum=_magnitude(max_amount),
            )
        except ValueError as e:
            click.echo(f"Error: Invalid amount: {e}", err=True)
            ctx.exit(1)

    return FilterSpec(
        search_term=search or None,
        accounts=frozenset(accounts),
        categories=frozenset(categories),
        date_range=date_range,
        amount_range=amount_range,
    )


def _magnitude(value: str | None) -> Decimal | None:
    if value is None:
        return None
    return abs(parse_amount(value))
