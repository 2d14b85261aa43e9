"""
Setup & Initialization Commands
--------------------------------

Commands:
    - init: Create or migrate the database and seed first-run data
"""
import click

from diarist.core.exceptions import DatabaseError
from diarist.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the journal database (safe to re-run)."""
    try:
        click.echo("🚀 Initializing Diarist database...")
        db = get_db(ctx)

        click.echo("🗄️  Checking schema and seeding defaults...")
        db.initialize_schema()

        history = db.get_migration_history()
        click.echo(f"✅ Database ready: {db.db_path}")
        if history.get("current_revision"):
            click.echo(f"   Schema revision: {history['current_revision']}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
