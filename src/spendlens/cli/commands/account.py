"""Account overview command."""

import click

from spendlens.cli.error_handling import handle_domain_error
from spendlens.cli.formatting import format_money
from spendlens.domain.account import AccountService
from spendlens.domain.errors import DomainError
from spendlens.domain.providers import create_provider_clients


@click.command("accounts")
@click.option(
    "--provider",
    "providers",
    multiple=True,
    help="Provider to include (repeatable; default: all configured)",
)
@click.pass_context
def list_accounts(ctx, providers: tuple[str, ...]):
    """List provider accounts with balances and a combined summary."""
    settings = ctx.obj["settings"]
    names = [p.lower() for p in providers] or list(settings.providers)
    try:
        service = AccountService(create_provider_clients(names, seed=settings.mock_seed))
    except DomainError as e:
        handle_domain_error(ctx, e)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo(f"\n{'ID':<8} {'Name':<28} {'Type':<8} {'Balance':>14} {'Limit':>14}")
    click.echo("-" * 76)
    for acc in accounts:
        limit = format_money(acc.limit) if acc.limit is not None else ""
        click.echo(
            f"{acc.id:<8} {acc.name[:28]:<28} {acc.type:<8} "
            f"{format_money(acc.balance):>14} {limit:>14}"
        )
        if acc.due_date is not None:
            click.echo(f"{'':<8} Payment due {acc.due_date.date().isoformat()}")

    summary = service.get_summary()
    click.echo("-" * 76)
    click.echo(f"Total balance:    {format_money(summary.total_balance)}")
    click.echo(f"Total debt:       {format_money(summary.total_debt)}")
    click.echo(f"Available credit: {format_money(summary.available_credit)}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(list_accounts)
