"""CLI helpers for resolving reference data given by name or ID."""

from __future__ import annotations

import click
from pocketbook.domain.bank_account import BankAccountService
from pocketbook.domain.category import CategoryService
from pocketbook.domain.context import RequestContext
from pocketbook.domain.entities import BankAccount, Category, Tag, TransactionKind
from pocketbook.domain.errors import category_kind_mismatch
from pocketbook.domain.tag import TagService
from pocketbook.utils.reference_resolver import resolve_reference


def resolve_bank_account_or_exit(
    ctx: click.Context, session: RequestContext, service: BankAccountService, account: str | int
) -> BankAccount:
    """Resolve bank account name or ID, or exit with a CLI error."""
    try:
        return resolve_reference(
            account,
            lambda account_id: service.get_bank_account(session, account_id),
            lambda name: service.get_bank_account_by_name(session, name),
            "Bank account",
        )
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_tag_or_exit(
    ctx: click.Context, session: RequestContext, service: TagService, tag: str | int
) -> Tag:
    """Resolve tag name or ID, or exit with a CLI error."""
    try:
        return resolve_reference(
            tag,
            lambda tag_id: service.get_tag(session, tag_id),
            lambda name: service.get_tag_by_name(session, name),
            "Tag",
        )
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_category_or_exit(
    ctx: click.Context,
    session: RequestContext,
    service: CategoryService,
    category: str | int,
    kind: TransactionKind,
) -> Category:
    """Resolve a category of the given kind by name or ID, or exit.

    Names are looked up within the kind; an ID of another kind is rejected.
    """
    try:
        found = resolve_reference(
            category,
            lambda category_id: service.get_category(session, category_id),
            lambda name: service.get_category_by_name(session, kind, name),
            "Category",
        )
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)

    if found.kind != kind:
        click.echo(f"Error: {category_kind_mismatch(found.name, [found.kind.value], kind.value)}", err=True)
        ctx.exit(1)
    return found
