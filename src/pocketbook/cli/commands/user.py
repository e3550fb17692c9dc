"""User account commands."""

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.session import require_session
from pocketbook.domain.auth import AuthService
from pocketbook.domain.errors import DomainError


@click.group()
def user_group():
    """Register and manage users."""
    pass


@user_group.command("register")
@click.argument("email")
@click.password_option(help="Password (at least 8 characters)")
@click.pass_context
def register(ctx, email: str, password: str) -> None:
    """Register a new user.

    Examples:
        pocketbook user register alice@example.com
    """
    service = AuthService(ctx.obj["db"])

    try:
        session = service.sign_up(email, password)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Registered user '{session.email}' (ID: {session.user_id})")
    click.echo(f"Use --user {session.email} or set POCKETBOOK_USER to act as this user.")


@user_group.command("login")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, help="Password")
@click.pass_context
def login(ctx, email: str, password: str) -> None:
    """Check the credentials of a registered user."""
    service = AuthService(ctx.obj["db"])

    try:
        session = service.sign_in(email, password)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Logged in as '{session.email}'")


@user_group.command("passwd")
@click.option("--current-password", prompt=True, hide_input=True, help="Current password")
@click.option(
    "--new-password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="New password (at least 8 characters)",
)
@click.pass_context
def change_password(ctx, current_password: str, new_password: str) -> None:
    """Change the password of the acting user."""
    session = require_session(ctx)
    service = AuthService(ctx.obj["db"])

    try:
        service.change_password(session, current_password, new_password)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Password changed for '{session.email}'")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
