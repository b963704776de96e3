"""Transaction viewing commands."""

import click

from spendlens.cli.filters import build_filter_spec, filter_options
from spendlens.cli.formatting import format_money
from spendlens.domain.transaction import TransactionService


@click.command("view")
@filter_options
@click.option("--verbose", "-v", is_flag=True, help="Show every field including notes and reference")
@click.pass_context
def view_transactions(ctx, verbose: bool, **filters):
    """View transactions with optional filters.

    Filters combine: every option given must match.
    """
    spec = build_filter_spec(ctx, **filters)
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    transactions = service.list_transactions(spec)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.timestamp.isoformat()}")
            click.echo(f"  Amount: {format_money(txn.amount)}")
            click.echo(f"  Account: {txn.account}")
            click.echo(f"  Category: {txn.category}")
            click.echo(f"  Merchant: {txn.merchant}")
            click.echo(f"  Description: {txn.description}")
            click.echo(f"  Status: {txn.status.value}")
            if txn.reference:
                click.echo(f"  Reference: {txn.reference}")
            if txn.notes:
                click.echo(f"  Notes: {txn.notes}")
            click.echo("-" * 100)
        return

    click.echo("-" * 100)
    click.echo(
        f"{'ID':<22} {'Date':<12} {'Amount':>12} {'Account':<12} {'Category':<16} {'Merchant':<20}"
    )
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(
            f"{txn.id[:22]:<22} {txn.timestamp.date().isoformat():<12} "
            f"{format_money(txn.amount):>12} {txn.account[:12]:<12} "
            f"{txn.category[:16]:<16} {txn.merchant[:20]:<20}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
