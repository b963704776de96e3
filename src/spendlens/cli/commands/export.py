"""CSV export command."""

from pathlib import Path

import click

from spendlens.cli.filters import build_filter_spec, filter_options
from spendlens.domain.csv_export import export_csv
from spendlens.domain.transaction import TransactionService


@click.command("export")
@filter_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to a file instead of stdout")
@click.pass_context
def export_transactions(ctx, output: str | None, **filters):
    """Export transactions as CSV (date, description, merchant, amount, category, account)."""
    spec = build_filter_spec(ctx, **filters)
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    csv_text = export_csv(service.list_transactions(spec))

    if not csv_text:
        click.echo("No transactions to export.", err=True)
        return

    if output:
        Path(output).write_text(csv_text, encoding="utf-8", newline="")
        click.echo(f"Exported to {output}")
    else:
        click.echo(csv_text, nl=False)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_transactions)
