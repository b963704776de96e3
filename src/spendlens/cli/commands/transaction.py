"""Transaction management commands."""

import click

from spendlens.cli.error_handling import handle_domain_error
from spendlens.domain.errors import DomainError
from spendlens.domain.transaction import TransactionService
from spendlens.utils.date_parser import parse_timestamp


@click.group("transaction")
def transaction_group():
    """Manage stored transactions."""
    pass


@transaction_group.command("set-category")
@click.argument("transaction_id")
@click.argument("category")
@click.pass_context
def set_category(ctx, transaction_id: str, category: str):
    """Recategorize a transaction. An empty CATEGORY means Uncategorized."""
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    try:
        txn = service.update_category(transaction_id, category)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transaction {txn.id} category set to {txn.category}")


@transaction_group.command("set-notes")
@click.argument("transaction_id")
@click.argument("notes")
@click.pass_context
def set_notes(ctx, transaction_id: str, notes: str):
    """Attach notes to a transaction. Empty NOTES clears them."""
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    try:
        txn = service.update_notes(transaction_id, notes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if txn.notes:
        click.echo(f"Transaction {txn.id} notes updated")
    else:
        click.echo(f"Transaction {txn.id} notes cleared")


@transaction_group.command("set-date")
@click.argument("transaction_id")
@click.argument("when")
@click.pass_context
def set_date(ctx, transaction_id: str, when: str):
    """Move a transaction to a new date or timestamp (ISO format)."""
    zone = ctx.obj["zone"]
    service = TransactionService(ctx.obj["store"], zone=zone)
    try:
        timestamp = parse_timestamp(when, zone)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)
    try:
        txn = service.update_timestamp(transaction_id, timestamp)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transaction {txn.id} moved to {txn.timestamp.isoformat()} ({txn.month_key})")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str):
    """Delete a transaction."""
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("clear")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def clear_transactions(ctx, yes: bool):
    """Delete every stored transaction."""
    if not yes:
        click.confirm("Delete all stored transactions?", abort=True)
    service = TransactionService(ctx.obj["store"], zone=ctx.obj["zone"])
    removed = service.clear_transactions()
    click.echo(f"Deleted {removed} transaction(s)")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
