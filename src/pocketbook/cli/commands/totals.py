"""Totals commands."""

import click
from datetime import date
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.session import require_session
from pocketbook.domain.errors import DomainError
from pocketbook.domain.totals import TotalsService
from pocketbook.utils.date_parser import parse_date


def _format_period(period: date | None, monthly: bool) -> str:
    if period is None:
        return "all time"
    return period.strftime("%Y-%m") if monthly else str(period.year)


def _show_totals(ctx, monthly: bool, by: str | None, period: str | None, tags: tuple[str, ...]) -> None:
    session = require_session(ctx)
    service = TotalsService(ctx.obj["db"])

    anchor = None
    if period is not None:
        try:
            anchor = parse_date(period)
        except ValueError as e:
            click.echo(f"Error: Invalid period: {e}", err=True)
            ctx.exit(1)

    if tags and by != "tags":
        click.echo("Error: --tag can only be used with --by tags", err=True)
        ctx.exit(1)

    try:
        if by == "category":
            rows = (service.monthly_category_totals if monthly else service.yearly_category_totals)(session, anchor)
        elif by == "tags":
            rows = (service.monthly_tagged_type_totals if monthly else service.yearly_tagged_type_totals)(
                session, anchor, tags
            )
        else:
            rows = (service.monthly_totals if monthly else service.yearly_totals)(session, anchor)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo("No transactions found.")
        return

    for row in rows:
        label = _format_period(row.period, monthly)
        if by == "category":
            name = row.category or "(uncategorized)"
            click.echo(f"{label:8}  {row.kind.value:5}  {name:30}  {row.total:>14,.2f}")
        elif by == "tags":
            name = ", ".join(row.tags) or "(untagged)"
            click.echo(f"{label:8}  {row.kind.value:5}  {name:30}  {row.total:>14,.2f}")
        else:
            click.echo(f"{label:8}  {row.kind.value:5}  {row.total:>14,.2f}")


@click.group()
def totals_group():
    """Show aggregate totals."""
    pass


@totals_group.command("monthly")
@click.option("--by", type=click.Choice(["category", "tags"]), help="Break totals down by category or tag set")
@click.option("--period", help="Only the month containing this date (e.g. 2024-03-01, 'last month')")
@click.option("--tag", "tags", multiple=True, help="With --by tags: only transactions carrying any of these tags")
@click.pass_context
def monthly(ctx, by: str | None, period: str | None, tags: tuple[str, ...]):
    """Totals per month and kind.

    Examples:
        pocketbook totals monthly
        pocketbook totals monthly --by category --period "this month"
        pocketbook totals monthly --by tags --tag essentials
    """
    _show_totals(ctx, True, by, period, tags)


@totals_group.command("yearly")
@click.option("--by", type=click.Choice(["category", "tags"]), help="Break totals down by category or tag set")
@click.option("--period", help="Only the year containing this date")
@click.option("--tag", "tags", multiple=True, help="With --by tags: only transactions carrying any of these tags")
@click.pass_context
def yearly(ctx, by: str | None, period: str | None, tags: tuple[str, ...]):
    """Totals per year and kind."""
    _show_totals(ctx, False, by, period, tags)


@totals_group.command("tags")
@click.option("--tag", "tags", multiple=True, help="Only transactions carrying any of these tags")
@click.pass_context
def tag_totals(ctx, tags: tuple[str, ...]):
    """All-time totals per kind and tag set."""
    session = require_session(ctx)
    try:
        rows = TotalsService(ctx.obj["db"]).tagged_type_totals(session, tags)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo("No transactions found.")
        return

    for row in rows:
        name = ", ".join(row.tags) or "(untagged)"
        click.echo(f"{row.kind.value:5}  {name:30}  {row.total:>14,.2f}")


def register_commands(cli):
    """Register totals commands with main CLI."""
    cli.add_command(totals_group, name="totals")
