"""Tag management commands."""

import click
from pocketbook.cli.error_handling import handle_domain_error
from pocketbook.cli.reference_resolution import resolve_tag_or_exit
from pocketbook.cli.session import require_session
from pocketbook.domain.errors import DomainError
from pocketbook.domain.tag import TagService


@click.group()
def tag_group():
    """Manage tags."""
    pass


@tag_group.command("list")
@click.pass_context
def list_tags(ctx):
    """List all tags."""
    session = require_session(ctx)
    tags = TagService(ctx.obj["db"]).list_tags(session)
    if not tags:
        click.echo("No tags found.")
        return

    click.echo("\nTags:")
    click.echo("-" * 60)
    for tag in tags:
        description = f" | {tag.description}" if tag.description else ""
        click.echo(f"ID: {tag.id:3d} | {tag.name:25s} | Used: {tag.in_use_count}{description}")


@tag_group.command("create")
@click.argument("name")
@click.option("--description", help="Optional description")
@click.pass_context
def create_tag(ctx, name: str, description: str | None):
    """Create a new tag."""
    session = require_session(ctx)
    try:
        tag_id = TagService(ctx.obj["db"]).create_tag(session, name=name, description=description)
        click.echo(f"Created tag '{name.strip()}' (ID: {tag_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@tag_group.command("update")
@click.argument("tag", metavar="TAG")
@click.option("--name", help="New name")
@click.option("--description", help="New description")
@click.option("--clear-description", is_flag=True, help="Remove the description")
@click.pass_context
def update_tag(ctx, tag: str, name: str | None, description: str | None, clear_description: bool) -> None:
    """Rename a tag or change its description. TAG can be a name or ID."""
    session = require_session(ctx)
    service = TagService(ctx.obj["db"])
    tag_obj = resolve_tag_or_exit(ctx, session, service, tag)

    try:
        service.update_tag(
            session, tag_obj.id, name=name, description=description, clear_description=clear_description
        )
        click.echo(f"Updated tag {tag_obj.id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@tag_group.command("delete")
@click.argument("tag", metavar="TAG")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_tag(ctx, tag: str, yes: bool) -> None:
    """Delete a tag no transaction carries. TAG can be a name or ID."""
    session = require_session(ctx)
    service = TagService(ctx.obj["db"])
    tag_obj = resolve_tag_or_exit(ctx, session, service, tag)

    if not yes and not click.confirm(f"Are you sure you want to delete tag '{tag_obj.name}' (ID: {tag_obj.id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_tag(session, tag_obj.id)
        click.echo(f"Deleted tag '{tag_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register tag commands with main CLI."""
    cli.add_command(tag_group, name="tag")
