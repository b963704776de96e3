"""Month comparison command."""

import click

from spendlens.cli.formatting import format_money, format_percent
from spendlens.domain.aggregation import aggregate_by_month
from spendlens.domain.comparison import compare, latest_pair
from spendlens.domain.entities import MonthlyAggregate
from spendlens.domain.transaction import TransactionService
from spendlens.utils.date_parser import parse_month_key


@click.command("compare")
@click.argument("baseline", required=False)
@click.argument("comparand", required=False)
@click.pass_context
def compare_months(ctx, baseline: str | None, comparand: str | None):
    """Compare spending between two months (YYYY-MM).

    BASELINE is the older month and COMPARAND the newer one. Without
    arguments, the two most recent months with spending are compared.
    """
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    records = service.list_transactions()

    if (baseline is None) != (comparand is None):
        click.echo("Error: Provide both BASELINE and COMPARAND, or neither.", err=True)
        ctx.exit(1)

    monthly = aggregate_by_month(records)
    if baseline is None:
        pair = latest_pair(monthly.values())
        if pair is None:
            click.echo("Need at least two months with spending to compare.")
            return
        older, newer = pair
    else:
        try:
            keys = [parse_month_key(m).strftime("%Y-%m") for m in (baseline, comparand)]
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        older, newer = (monthly.get(k, MonthlyAggregate(month_key=k)) for k in keys)

    result = compare(older, newer)

    click.echo(f"\nSpending: {older.month_key} vs {newer.month_key}")
    click.echo("-" * 76)
    click.echo(
        f"{'Total':<24} {format_money(older.total_expenses):>12} "
        f"{format_money(newer.total_expenses):>12} "
        f"{format_money(result.total_delta.absolute):>12} "
        f"{format_percent(result.total_delta.percent):>12}"
    )
    click.echo("-" * 76)
    for delta in result.category_deltas:
        click.echo(
            f"{delta.category[:24]:<24} {format_money(delta.baseline):>12} "
            f"{format_money(delta.comparand):>12} {format_money(delta.absolute):>12} "
            f"{format_percent(delta.percent):>12}"
        )


def register_commands(cli):
    """Register compare command with main CLI."""
    cli.add_command(compare_months)
