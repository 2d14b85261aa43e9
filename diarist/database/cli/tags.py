"""
Tag Commands
-------------

Commands:
    - list: Pre-built and custom tags with usage counts
    - create: Add a custom tag
    - delete: Remove a custom tag (pre-built tags are protected)
"""
import click

from diarist.core.exceptions import DatabaseError, ValidationError
from diarist.core.logging_manager import handle_cli_error
from diarist.database.models import DEFAULT_TAG_COLOR
from . import get_db


@click.group()
@click.pass_context
def tag(ctx: click.Context) -> None:
    """Manage tags."""
    pass


@tag.command("list")
@click.pass_context
def list_tags(ctx):
    """List all tags with their usage counts."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            prebuilt = db.tags.get_prebuilt()
            custom = db.tags.get_custom()

            click.echo(f"\n📌 Pre-built tags ({len(prebuilt)}):")
            for item in prebuilt:
                click.echo(f"  • {item.name:<20} {item.color}  {item.usage_count:4d} entries")

            click.echo(f"\n🏷️  Custom tags ({len(custom)}):")
            if not custom:
                click.echo("  (none)")
            for item in custom:
                click.echo(
                    f"  • [{item.id}] {item.name:<16} {item.color}  {item.usage_count:4d} entries"
                )

    except DatabaseError as e:
        handle_cli_error(ctx, e, "list_tags")


@tag.command("create")
@click.argument("name")
@click.option("--color", default=DEFAULT_TAG_COLOR, show_default=True, help="Hex color")
@click.pass_context
def create(ctx, name, color):
    """Create a custom tag."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            created = db.tags.create({"name": name, "color": color})
            click.echo(f"✅ Created tag '{created.name}' ({created.color})")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "create_tag", additional_context={"name": name})


@tag.command("delete")
@click.argument("name")
@click.pass_context
def delete(ctx, name):
    """Delete a custom tag by name or id."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            found = db.tags.get(tag_id=int(name)) if name.isdigit() else db.tags.get(name=name)
            if found is None:
                click.echo(f"⚠️  No tag named '{name}', nothing deleted")
                return
            label = found.name
            db.tags.delete(found)
            click.echo(f"🗑️  Deleted tag '{label}'")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "delete_tag", additional_context={"name": name})
