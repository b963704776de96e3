"""Provider sync command."""

from datetime import datetime, timedelta

import click
from dateutil import tz as dateutil_tz

from spendlens.cli.error_handling import handle_domain_error
from spendlens.domain.errors import DomainError
from spendlens.domain.providers import PROVIDERS, ProviderSync, create_provider_clients


@click.command("sync")
@click.option(
    "--provider",
    "providers",
    multiple=True,
    help=f"Provider to sync (repeatable; available: {', '.join(sorted(PROVIDERS))})",
)
@click.option("--seed", type=int, help="Seed for reproducible mock data")
@click.option(
    "--days",
    type=click.IntRange(min=1),
    help="Only sync transactions from the last N days",
)
@click.pass_context
def sync(ctx, providers: tuple[str, ...], seed: int | None, days: int | None):
    """Pull transactions from bank and card providers into the store.

    Transactions already in the store are replaced, so syncing twice with the
    same seed leaves one copy of each.

    Examples:
        spendlens sync
        spendlens sync --provider amex --seed 42
    """
    settings = ctx.obj["settings"]
    names = [p.lower() for p in providers] or list(settings.providers)
    if seed is None:
        seed = settings.mock_seed

    start = None
    if days is not None:
        start = datetime.now(dateutil_tz.UTC) - timedelta(days=days)

    try:
        clients = create_provider_clients(names, seed=seed)
        result = ProviderSync(clients, ctx.obj["store"], zone=ctx.obj["zone"]).sync(start=start)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("Sync complete:")
    click.echo(f"  Providers: {', '.join(names)}")
    click.echo(f"  Synced: {result.imported} transactions")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}", err=True)
        for error in result.errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register sync command with main CLI."""
    cli.add_command(sync)
