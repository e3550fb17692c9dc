"""Main CLI entry point."""

import logging

import click
from pocketbook.database.factories import create_sqlite_database

# Import and register all commands at module level
from pocketbook.cli.commands import (
    user,
    category,
    bank_account,
    tag,
    transaction,
    totals,
    upload,
    reset,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETBOOK_DB_PATH environment variable)",
    envvar="POCKETBOOK_DB_PATH",
)
@click.option(
    "--user",
    "user_email",
    help="E-mail of the acting user (or set POCKETBOOK_USER)",
    envvar="POCKETBOOK_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity (or set POCKETBOOK_LOG_LEVEL)",
    envvar="POCKETBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_email: str | None, log_level: str):
    """Pocketbook - Personal finance tracking.

    Record spend, earn and save transactions, organize them with categories,
    bank accounts and tags, bulk upload JSON files and view totals.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["user"] = user_email

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
category.register_commands(cli)
bank_account.register_commands(cli)
tag.register_commands(cli)
transaction.register_commands(cli)
totals.register_commands(cli)
upload.register_commands(cli)
reset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
