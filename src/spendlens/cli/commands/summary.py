"""Summary commands."""

from datetime import date

import click

from spendlens.cli.filters import build_filter_spec, filter_options
from spendlens.cli.formatting import format_money
from spendlens.domain.aggregation import (
    aggregate_by_category,
    aggregate_by_month,
    rolling_monthly_totals,
)
from spendlens.domain.entities import MonthlyAggregate
from spendlens.domain.transaction import TransactionService
from spendlens.utils.date_parser import parse_month_key


def _display_month(aggregate: MonthlyAggregate, show_categories: bool) -> None:
    month = aggregate.rounded()
    click.echo(
        f"{month.month_key:<10} {format_money(month.total_income):>14} "
        f"{format_money(month.total_expenses):>14} {format_money(month.net_amount):>14}"
    )
    if show_categories:
        for item in month.category_totals:
            click.echo(f"    {item.category:<36} {format_money(item.total):>14}")


@click.command("summary")
@click.option("--month", help="Show a single month (YYYY-MM) with its category breakdown")
@click.option(
    "--months",
    type=click.IntRange(min=1),
    default=12,
    show_default=True,
    help="Number of recent months to show",
)
@click.option("--expand", is_flag=True, help="Show category totals under each month")
@click.pass_context
def summary(ctx, month: str | None, months: int, expand: bool):
    """Show monthly income, expenses and net totals."""
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    records = service.list_transactions()

    if month is not None:
        try:
            month_key = parse_month_key(month).strftime("%Y-%m")
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        aggregates = [
            aggregate_by_month(records).get(month_key, MonthlyAggregate(month_key=month_key))
        ]
        expand = True
    else:
        aggregates = rolling_monthly_totals(records, months=months, today=date.today())

    click.echo("\nMonthly Summary:")
    click.echo("-" * 56)
    click.echo(f"{'Month':<10} {'Income':>14} {'Expenses':>14} {'Net':>14}")
    click.echo("-" * 56)
    for aggregate in aggregates:
        _display_month(aggregate, show_categories=expand)


@click.command("categories")
@filter_options
@click.pass_context
def categories(ctx, **filters):
    """Show spending by category, largest first."""
    spec = build_filter_spec(ctx, **filters)
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    totals = aggregate_by_category(service.list_transactions(spec))

    if not totals:
        click.echo("No expenses found.")
        return

    click.echo("\nSpending by Category:")
    click.echo("-" * 52)
    for item in totals:
        click.echo(f"{item.category:<36} {format_money(item.rounded().total):>14}")
    click.echo("-" * 52)
    click.echo(f"{'Total':<36} {format_money(sum(t.total for t in totals)):>14}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(categories)
