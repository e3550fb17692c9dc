"""Data reset command."""

import json

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.session import require_session
from pocketbook.domain.data_reset import DataResetService
from pocketbook.domain.errors import DomainError

CONFIRMATION_WORD = "DELETE"


@click.command("reset")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def reset(ctx, yes: bool, as_json: bool):
    """Delete all of your transactions, categories, tags and bank accounts.

    Your user account is kept and other users' data is not touched. This
    cannot be undone.
    """
    session = require_session(ctx)

    if not yes:
        click.echo(f"This permanently deletes all data of '{session.email}'.")
        answer = click.prompt(f"Type {CONFIRMATION_WORD} to confirm", default="", show_default=False)
        if answer != CONFIRMATION_WORD:
            click.echo("Reset cancelled.")
            return

    try:
        result = DataResetService(ctx.obj["db"]).reset(session)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo("Reset complete:")
    click.echo(f"  Transactions deleted:  {result.transactions_deleted}")
    click.echo(f"  Categories deleted:    {result.categories_deleted}")
    click.echo(f"  Tags deleted:          {result.tags_deleted}")
    click.echo(f"  Bank accounts deleted: {result.bank_accounts_deleted}")


def register_commands(cli):
    """Register reset command with main CLI."""
    cli.add_command(reset)
