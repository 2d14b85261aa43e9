"""
Settings Commands
------------------

Commands:
    - show: Current preferences
    - theme: Show or change the theme
    - set-pin: Enable the PIN lock
    - remove-pin: Disable the PIN lock (requires the current PIN)
"""
import click

from diarist.core.exceptions import DatabaseError, ValidationError
from diarist.core.logging_manager import handle_cli_error
from . import get_db


@click.group()
@click.pass_context
def settings(ctx: click.Context) -> None:
    """Theme, PIN lock and preferences."""
    pass


@settings.command("show")
@click.pass_context
def show(ctx):
    """Display the current settings."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            current = db.settings.get()
            click.echo("\n⚙️  Settings\n")
            click.echo(f"  Theme:               {current.theme}")
            click.echo(f"  PIN lock:            {'on' if current.is_pin_enabled else 'off'}")
            click.echo(f"  Default mood:        {current.default_mood.display_name}")
            click.echo(f"  Entries per page:    {current.entries_per_page}")
            click.echo(
                f"  Streak reminders:    {'on' if current.show_streak_notifications else 'off'}"
            )
            click.echo(
                f"  Auto-save:           {'on' if current.auto_save else 'off'}"
                f" (every {current.auto_save_interval}s)"
            )

    except DatabaseError as e:
        handle_cli_error(ctx, e, "settings_show")


@settings.command("theme")
@click.argument("name", required=False)
@click.pass_context
def theme(ctx, name):
    """Show the theme, or set it when NAME is given."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            if name is None:
                click.echo(f"🎨 Theme: {db.settings.get_theme()}")
                return
            click.echo(f"🎨 Theme set to {db.settings.set_theme(name)}")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "set_theme", additional_context={"theme": name})


@settings.command("set-pin")
@click.option("--pin", prompt=True, hide_input=True, confirmation_prompt=True, help="New PIN")
@click.pass_context
def set_pin(ctx, pin):
    """Protect the journal with a 4-12 digit PIN."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.settings.set_pin(pin)
        click.echo("🔒 PIN lock enabled")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "set_pin")


@settings.command("remove-pin")
@click.option("--pin", prompt="Current PIN", hide_input=True, help="Current PIN")
@click.pass_context
def remove_pin(ctx, pin):
    """Disable the PIN lock."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            if not db.settings.is_pin_enabled():
                click.echo("⚠️  No PIN is set")
                return
            if not db.settings.validate_pin(pin):
                raise ValidationError("Incorrect PIN")
            db.settings.remove_pin()
        click.echo("🔓 PIN lock removed")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "remove_pin")
