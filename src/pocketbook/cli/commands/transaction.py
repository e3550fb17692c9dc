"""Transaction management commands."""

import click
from datetime import date
from pocketbook.cli.date_filters import date_range_options, resolve_cli_date_range
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.reference_resolution import (
    resolve_bank_account_or_exit,
    resolve_category_or_exit,
    resolve_tag_or_exit,
)
from pocketbook.cli.session import require_session
from pocketbook.database.sqlalchemy_db import ORDERABLE_COLUMNS
from pocketbook.domain.bank_account import BankAccountService
from pocketbook.domain.category import CategoryService
from pocketbook.domain.entities import TransactionFilter, TransactionKind
from pocketbook.domain.errors import DomainError
from pocketbook.domain.tag import TagService
from pocketbook.domain.transaction import TransactionService
from pocketbook.utils.amount_parser import parse_amount
from pocketbook.utils.date_parser import parse_date

KIND_CHOICE = click.Choice([kind.value for kind in TransactionKind], case_sensitive=False)


def filter_options(func):
    """Attach the filter options shared by 'list' and 'sum'."""
    func = date_range_options(func)
    options = [
        click.option("--kind", type=KIND_CHOICE, help="Only transactions of this kind"),
        click.option("--category", help="Category name or ID (names need --kind)"),
        click.option("--bank-account", help="Bank account name or ID"),
        click.option("--tag", "tags", multiple=True, help="Tag name; repeat to match any of several tags"),
        click.option("--all-tags", is_flag=True, help="Require every --tag instead of any"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_filter(ctx, session, params: dict, **ordering) -> TransactionFilter:
    """Turn parsed filter options into a TransactionFilter, or exit."""
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(ctx, params)

    kind = TransactionKind.parse(params["kind"]) if params["kind"] else None

    category_id = None
    if params["category"]:
        if kind is None and not params["category"].isdigit():
            click.echo("Error: --category by name requires --kind", err=True)
            ctx.exit(1)
        if kind is None:
            category = CategoryService(db).get_category(session, int(params["category"]))
            if category is None:
                click.echo(f"Error: Category ID {params['category']} not found", err=True)
                ctx.exit(1)
        else:
            category = resolve_category_or_exit(ctx, session, CategoryService(db), params["category"], kind)
        category_id = category.id

    bank_account_id = None
    if params["bank_account"]:
        bank_account_id = resolve_bank_account_or_exit(
            ctx, session, BankAccountService(db), params["bank_account"]
        ).id

    tags = tuple(params["tags"])
    return TransactionFilter(
        start_date=start,
        end_date=end,
        kind=kind,
        category_id=category_id,
        bank_account_id=bank_account_id,
        tags_any=() if params["all_tags"] else tags,
        tags_all=tags if params["all_tags"] else (),
        **ordering,
    )


def _parse_date_or_exit(ctx, value: str) -> date:
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--kind", type=KIND_CHOICE, required=True, help="spend, earn or save")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--amount", required=True, help="Non-negative amount (e.g., 123.45)")
@click.option("--category", help="Category name or ID (must match --kind)")
@click.option("--bank-account", help="Bank account name or ID")
@click.option("--tag", "tags", multiple=True, help="Tag name or ID (repeatable)")
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    kind: str,
    txn_date: str,
    amount: str,
    category: str | None,
    bank_account: str | None,
    tags: tuple[str, ...],
    notes: str | None,
) -> None:
    """Add a transaction.

    Examples:
        pocketbook transaction add --kind spend --amount 42.50 --category Groceries
        pocketbook transaction add --kind earn --date 2024-01-31 --amount 3000 --bank-account "Main Account"
        pocketbook transaction add --kind spend --amount 9.99 --tag essentials --tag monthly
    """
    session = require_session(ctx)
    db = ctx.obj["db"]
    txn_kind = TransactionKind.parse(kind)

    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, session, CategoryService(db), category, txn_kind).id

    bank_account_id = None
    if bank_account is not None:
        bank_account_id = resolve_bank_account_or_exit(ctx, session, BankAccountService(db), bank_account).id

    tag_service = TagService(db)
    tag_ids = [resolve_tag_or_exit(ctx, session, tag_service, tag).id for tag in tags]

    try:
        transaction_id = TransactionService(db).create_transaction(
            session,
            kind=txn_kind,
            date=_parse_date_or_exit(ctx, txn_date),
            amount=_parse_amount_or_exit(ctx, amount),
            category_id=category_id,
            bank_account_id=bank_account_id,
            tag_ids=tag_ids,
            notes=notes,
        )
        click.echo(f"Added transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@filter_options
@click.option(
    "--order-by",
    type=click.Choice(list(ORDERABLE_COLUMNS)),
    default="date",
    show_default=True,
    help="Column to order by",
)
@click.option("--asc", is_flag=True, help="Oldest/smallest first")
@click.option("--limit", type=click.IntRange(min=1), help="Show at most this many transactions")
@click.option("--offset", type=click.IntRange(min=0), help="Skip this many transactions")
@click.option("--verbose", "-v", is_flag=True, help="Show notes")
@click.pass_context
def list_transactions(ctx, order_by: str, asc: bool, limit: int | None, offset: int | None, verbose: bool, **params):
    """View transactions with optional filters.

    Category and bank account can be given by name or ID. Repeat --tag to
    match any of several tags, or add --all-tags to require all of them.
    """
    session = require_session(ctx)
    filters = build_filter(ctx, session, params, order_by=order_by, descending=not asc, limit=limit, offset=offset)

    try:
        transactions = TransactionService(ctx.obj["db"]).list_transactions(session, filters)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'ID':>4}  {'Date':10}  {'Kind':5}  {'Amount':>12}  {'Category':20}  {'Bank account':20}  Tags")
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(
            f"{txn.id:>4}  {txn.date.isoformat():10}  {txn.kind.value:5}  {txn.amount:>12,.2f}  "
            f"{(txn.category_name or '-'):20.20}  {(txn.bank_account_name or '-'):20.20}  {', '.join(txn.tags)}"
        )
        if verbose and txn.notes:
            click.echo(f"      Notes: {txn.notes}")


@transaction_group.command("sum")
@filter_options
@click.pass_context
def sum_transactions(ctx, **params):
    """Sum the amounts of transactions matching the filters."""
    session = require_session(ctx)
    filters = build_filter(ctx, session, params)

    try:
        total = TransactionService(ctx.obj["db"]).sum_amount(session, filters)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Total: {total:,.2f}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--kind", type=KIND_CHOICE, help="New kind")
@click.option("--date", "txn_date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount (e.g., 123.45)")
@click.option("--category", help="Category name or ID, or empty string to clear")
@click.option("--bank-account", help="Bank account name or ID, or empty string to clear")
@click.option("--tag", "tags", multiple=True, help="Replace tags (repeatable)")
@click.option("--clear-tags", is_flag=True, help="Remove all tags")
@click.option("--notes", help="Notes")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    kind: str | None,
    txn_date: str | None,
    amount: str | None,
    category: str | None,
    bank_account: str | None,
    tags: tuple[str, ...],
    clear_tags: bool,
    notes: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Use --category "" to clear the category.

    Examples:
        pocketbook transaction update 1 --amount 75.00
        pocketbook transaction update 1 --kind earn --category Salary
        pocketbook transaction update 1 --category ""  # Clear category
    """
    session = require_session(ctx)
    db = ctx.obj["db"]
    service = TransactionService(db)

    existing = service.get_transaction(session, transaction_id)
    if existing is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)
    effective_kind = TransactionKind.parse(kind) if kind else existing.kind

    # Get category ID if provided
    category_id = None
    clear_category = False
    if category is not None:
        if category == "":
            clear_category = True
        else:
            category_id = resolve_category_or_exit(ctx, session, CategoryService(db), category, effective_kind).id

    bank_account_id = None
    clear_bank_account = False
    if bank_account is not None:
        if bank_account == "":
            clear_bank_account = True
        else:
            bank_account_id = resolve_bank_account_or_exit(ctx, session, BankAccountService(db), bank_account).id

    tag_ids = None
    if clear_tags:
        tag_ids = []
    elif tags:
        tag_service = TagService(db)
        tag_ids = [resolve_tag_or_exit(ctx, session, tag_service, tag).id for tag in tags]

    try:
        service.update_transaction(
            session,
            transaction_id,
            kind=kind,
            date=_parse_date_or_exit(ctx, txn_date) if txn_date is not None else None,
            amount=_parse_amount_or_exit(ctx, amount) if amount is not None else None,
            category_id=category_id,
            bank_account_id=bank_account_id,
            tag_ids=tag_ids,
            notes=notes,
            clear_category=clear_category,
            clear_bank_account=clear_bank_account,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("delete")
@click.argument("transaction_ids", nargs=-1, type=int, required=True)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_transactions(ctx, transaction_ids: tuple[int, ...], yes: bool) -> None:
    """Delete one or more transactions.

    Nothing is deleted if any of the IDs doesn't exist.
    """
    session = require_session(ctx)
    service = TransactionService(ctx.obj["db"])

    ids = ", ".join(str(i) for i in transaction_ids)
    if not yes and not click.confirm(f"Are you sure you want to delete transaction(s) {ids}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        deleted = service.delete_transactions(session, transaction_ids)
        click.echo(f"Deleted {deleted} transaction(s)")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
