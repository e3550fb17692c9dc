"""Bulk upload command."""

import json

import click
from pocketbook.cli.error_handling import echo_row_errors, handle_domain_error
from pocketbook.cli.session import require_session
from pocketbook.domain.bulk_upload import BulkUploadOptions, BulkUploadService
from pocketbook.domain.errors import UploadFormatError
from pocketbook.domain.upload_document import load_upload_file


@click.command("upload")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--preview", is_flag=True, help="Only show what the file contains")
@click.option(
    "--auto-create",
    is_flag=True,
    help="Create categories, bank accounts and tags named by transactions if missing",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def upload(ctx, json_file: str, preview: bool, auto_create: bool, as_json: bool):
    """Bulk upload reference data and transactions from a JSON file.

    The file holds either an array of transactions or an object with
    optional 'categories', 'bank_accounts', 'tags' and 'transactions'
    arrays. Max file size: 1MB. Rows that already exist are skipped; rows
    that fail are reported and don't stop the others.
    """
    try:
        document = load_upload_file(json_file)
    except UploadFormatError as e:
        handle_domain_error(ctx, e)

    if preview:
        click.echo(f"File contains {document.describe()}.")
        return

    session = require_session(ctx)
    service = BulkUploadService(ctx.obj["db"])
    result = service.upload(session, document, BulkUploadOptions(auto_create_references=auto_create))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.success:
            ctx.exit(1)
        return

    if not result.success:
        click.echo(f"Error: {result.error}", err=True)
        ctx.exit(1)

    click.echo("\nUpload complete:")
    click.echo(f"  Categories inserted:    {result.categories_inserted}")
    click.echo(f"  Bank accounts inserted: {result.bank_accounts_inserted}")
    click.echo(f"  Tags inserted:          {result.tags_inserted}")
    click.echo(f"  Transactions inserted:  {result.transactions_inserted}")
    if result.details:
        click.echo(f"  Errors: {result.error_count}")
        for section, errors in result.details.items():
            echo_row_errors(section, errors)


def register_commands(cli):
    """Register upload command with main CLI."""
    cli.add_command(upload)
