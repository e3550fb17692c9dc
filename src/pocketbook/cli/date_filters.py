"""CLI options and helpers for filtering by date."""

from datetime import date

import click

from pocketbook.utils.date_parser import PERIODS, get_date_range, parse_date


def _flag_name(period: str) -> str:
    return period.replace("-", "_")


def date_range_options(func):
    """Attach --start-date, --end-date and one flag per named period."""
    options = [
        click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')"),
        *[
            click.option(f"--{period}", _flag_name(period), is_flag=True, help=f"Only {period.replace('-', ' ')}")
            for period in PERIODS
        ],
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _parse_or_exit(ctx: click.Context, value: str, label: str) -> date:
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(ctx: click.Context, params: dict) -> tuple[date | None, date | None]:
    """Turn the options of date_range_options into an inclusive (start, end).

    Exits when more than one period flag is set, or a period flag is
    combined with explicit dates.
    """
    chosen = [period for period in PERIODS if params.get(_flag_name(period))]
    start_date = params.get("start_date")
    end_date = params.get("end_date")

    if len(chosen) > 1:
        flags = ", ".join(f"--{period}" for period in PERIODS)
        click.echo(f"Error: Only one period option ({flags}) can be specified at a time.", err=True)
        ctx.exit(1)

    if chosen:
        if start_date or end_date:
            click.echo(
                "Error: Period options (--this-month, --last-year, etc.) cannot be combined with --start-date or --end-date.",
                err=True,
            )
            ctx.exit(1)
        return get_date_range(chosen[0])

    start = _parse_or_exit(ctx, start_date, "start") if start_date else None
    end = _parse_or_exit(ctx, end_date, "end") if end_date else None
    if start is not None and end is not None and start > end:
        click.echo(f"Error: Start date {start} is after end date {end}", err=True)
        ctx.exit(1)
    return start, end
