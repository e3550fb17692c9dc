"""CLI error handling helpers."""

from typing import Iterable

import click

from pocketbook.domain.entities import RowError
from pocketbook.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def echo_row_errors(section: str, errors: Iterable[RowError]) -> None:
    """Print per-row upload failures of one section."""
    click.echo(f"\n{section.replace('_', ' ').capitalize()} errors:", err=True)
    for error in errors:
        click.echo(f"  Row {error.index}: {error.error}", err=True)
