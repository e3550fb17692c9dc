"""Resolve the acting user for CLI commands."""

import click

from pocketbook.domain.auth import AuthService
from pocketbook.domain.context import RequestContext
from pocketbook.domain.errors import AuthenticationError


def require_session(ctx: click.Context) -> RequestContext:
    """Return the session of the user given by --user / POCKETBOOK_USER.

    Exits with an error when no registered user is selected.
    """
    db = ctx.obj["db"]
    try:
        return AuthService(db).session_for(ctx.obj.get("user"))
    except AuthenticationError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo("Pass --user EMAIL or set POCKETBOOK_USER to a registered user.", err=True)
        ctx.exit(1)
