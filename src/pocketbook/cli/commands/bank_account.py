"""Bank account management commands."""

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.reference_resolution import resolve_bank_account_or_exit
from pocketbook.cli.session import require_session
from pocketbook.domain.bank_account import BankAccountService
from pocketbook.domain.errors import DomainError


@click.group()
def bank_account_group():
    """Manage bank accounts."""
    pass


@bank_account_group.command("list")
@click.pass_context
def list_bank_accounts(ctx):
    """List all bank accounts."""
    session = require_session(ctx)
    service = BankAccountService(ctx.obj["db"])

    accounts = service.list_bank_accounts(session)
    if not accounts:
        click.echo("No bank accounts found.")
        return

    click.echo("\nBank accounts:")
    click.echo("-" * 60)
    for acc in accounts:
        description = f" | {acc.description}" if acc.description else ""
        click.echo(f"ID: {acc.id:3d} | {acc.name:25s} | Used: {acc.in_use_count}{description}")


@bank_account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--description", help="Optional description")
@click.pass_context
def create_bank_account(ctx, name: str, description: str | None):
    """Create a new bank account.

    Examples:
        pocketbook bank-account create "Main Account"
        pocketbook bank-account create "Savings" --description "Rainy day fund"
    """
    session = require_session(ctx)
    service = BankAccountService(ctx.obj["db"])

    try:
        account_id = service.create_bank_account(session, name=name, description=description)
        click.echo(f"Created bank account '{name.strip()}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New name")
@click.option("--description", help="New description")
@click.option("--clear-description", is_flag=True, help="Remove the description")
@click.pass_context
def update_bank_account(
    ctx, account: str, name: str | None, description: str | None, clear_description: bool
) -> None:
    """Rename a bank account or change its description.

    ACCOUNT can be an account name or ID.
    """
    session = require_session(ctx)
    service = BankAccountService(ctx.obj["db"])
    account_obj = resolve_bank_account_or_exit(ctx, session, service, account)

    try:
        service.update_bank_account(
            session,
            account_obj.id,
            name=name,
            description=description,
            clear_description=clear_description,
        )
        click.echo(f"Updated bank account {account_obj.id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_bank_account(ctx, account: str, yes: bool) -> None:
    """Delete a bank account.

    ACCOUNT can be an account name or ID. The account can only be deleted
    while no transaction uses it.
    """
    session = require_session(ctx)
    service = BankAccountService(ctx.obj["db"])
    account_obj = resolve_bank_account_or_exit(ctx, session, service, account)

    if not yes and not click.confirm(
        f"Are you sure you want to delete bank account '{account_obj.name}' (ID: {account_obj.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_bank_account(session, account_obj.id)
        click.echo(f"Deleted bank account '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register bank account commands with main CLI."""
    cli.add_command(bank_account_group, name="bank-account")
