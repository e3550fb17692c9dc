"""Category management commands."""

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.session import require_session
from pocketbook.domain.category import CategoryService
from pocketbook.domain.entities import TransactionKind
from pocketbook.domain.errors import DomainError, NotFoundError, entity_not_found

KIND_CHOICE = click.Choice([kind.value for kind in TransactionKind], case_sensitive=False)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--kind", type=KIND_CHOICE, help="Only show categories of this kind")
@click.pass_context
def list_categories(ctx, kind: str | None):
    """List categories with the number of transactions using them."""
    session = require_session(ctx)
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories(session, kind=kind)
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    click.echo("-" * 70)
    for cat in categories:
        description = f" | {cat.description}" if cat.description else ""
        click.echo(
            f"ID: {cat.id:3d} | {cat.kind.value:5s} | {cat.name:25s} | Used: {cat.in_use_count}{description}"
        )


@category_group.command("create")
@click.argument("name")
@click.option("--kind", type=KIND_CHOICE, required=True, help="Category kind")
@click.option("--description", help="Optional description")
@click.pass_context
def create_category(ctx, name: str, kind: str, description: str | None):
    """Create a new category.

    Examples:
        pocketbook category create Groceries --kind spend
        pocketbook category create Salary --kind earn --description "Monthly pay"
    """
    session = require_session(ctx)
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(session, kind=kind, name=name, description=description)
        click.echo(f"Created {kind.lower()} category '{name.strip()}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("update")
@click.argument("category_id", type=int)
@click.option("--name", help="New name")
@click.option("--description", help="New description")
@click.option("--clear-description", is_flag=True, help="Remove the description")
@click.pass_context
def update_category(
    ctx, category_id: int, name: str | None, description: str | None, clear_description: bool
) -> None:
    """Rename a category or change its description."""
    session = require_session(ctx)
    service = CategoryService(ctx.obj["db"])

    if name is None and description is None and not clear_description:
        click.echo("Error: Nothing to update. Use --name, --description or --clear-description.", err=True)
        ctx.exit(1)

    try:
        service.update_category(
            session,
            category_id,
            name=name,
            description=description,
            clear_description=clear_description,
        )
        click.echo(f"Updated category {category_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_category(ctx, category_id: int, yes: bool) -> None:
    """Delete a category.

    A category can only be deleted while no transaction uses it.
    """
    session = require_session(ctx)
    service = CategoryService(ctx.obj["db"])

    category = service.get_category(session, category_id)
    if category is None:
        handle_domain_error(ctx, NotFoundError(entity_not_found("Category", category_id)))

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete category '{category.name}' (ID: {category_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_category(session, category_id)
        click.echo(f"Deleted category '{category.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
