"""CSV import command."""

import click

from spendlens.cli.error_handling import handle_domain_error
from spendlens.domain.csv_import import CSVImportService, default_mapping
from spendlens.domain.entities import ColumnMapping, SourceKind
from spendlens.domain.errors import DomainError

CSV_KINDS = [SourceKind.CSV_CARD_ISSUER.value, SourceKind.CSV_BANK.value]


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option(
    "--source-kind",
    type=click.Choice(CSV_KINDS),
    default=SourceKind.CSV_CARD_ISSUER.value,
    show_default=True,
    help="CSV convention: card issuer (expenses positive, MM/DD/YYYY) or bank (DD/MM/YYYY)",
)
@click.option("--account", help="Account label for imported transactions")
@click.option("--date-column", help="CSV column holding the date")
@click.option("--description-column", help="CSV column holding the description")
@click.option("--amount-column", help="CSV column holding the amount")
@click.option("--category-column", help="CSV column holding the category")
@click.pass_context
def import_csv(
    ctx,
    csv_file: str,
    source_kind: str,
    account: str | None,
    date_column: str | None,
    description_column: str | None,
    amount_column: str | None,
    category_column: str | None,
):
    """Import transactions from a CSV file.

    Card issuer files use the columns Date, Description, Amount and Category
    unless overridden. Bank files need every column named explicitly.
    """
    store = ctx.obj["store"]
    service = CSVImportService(store, zone=ctx.obj["zone"])
    kind = SourceKind(source_kind)

    mapping = default_mapping(kind)
    if any([date_column, description_column, amount_column, category_column]):
        mapping = ColumnMapping(
            date=date_column or (mapping.date if mapping else ""),
            description=description_column or (mapping.description if mapping else ""),
            amount=amount_column or (mapping.amount if mapping else ""),
            category=category_column or (mapping.category if mapping else None),
        )

    try:
        result = service.import_csv(
            csv_file_path=csv_file, source_kind=kind, mapping=mapping, account=account
        )
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
