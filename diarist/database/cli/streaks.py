"""
Streak Commands
----------------

Commands:
    - streak: Current and longest streak, totals and missed days
    - missed: Dates without entries in the last N days
"""
import click

from diarist.core.exceptions import DatabaseError, ValidationError
from diarist.core.logging_manager import handle_cli_error
from . import get_config, get_db


@click.command()
@click.option("--refresh", is_flag=True, help="Recompute before displaying")
@click.pass_context
def streak(ctx, refresh):
    """Show the journaling streak."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            info = db.streaks.recompute() if refresh else db.streaks.get_info()

            click.echo(f"\n🔥 Current streak: {info.current_streak} days")
            if info.streak_start_date:
                click.echo(f"   since {info.streak_start_date.isoformat()}")
            click.echo(f"🏆 Longest streak: {info.longest_streak} days")
            click.echo(
                f"📚 {info.total_entries} entries on {info.total_days_with_entries} days"
            )
            if info.last_entry_date:
                click.echo(f"🗓️  Last entry: {info.last_entry_date.isoformat()}")
            window = get_config(ctx).get_int("streak.missed_window_days", 30)
            click.echo(f"⏸️  Missed days (last {window}): {info.missed_days}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "streak")


@click.command()
@click.option("--days", type=int, default=None, help="Window size (default from config)")
@click.pass_context
def missed(ctx, days):
    """List dates without an entry, most recent first."""
    try:
        days = days or get_config(ctx).get_int("streak.missed_window_days", 30)
        db = get_db(ctx)
        with db.session_scope():
            gaps = db.streaks.get_missed_days(days)

        if not gaps:
            click.echo(f"✅ No missed days in the last {days} days")
            return

        click.echo(f"\n⏸️  {len(gaps)} missed days in the last {days}:\n")
        for day in gaps:
            click.echo(f"  • {day.isoformat()} ({day.strftime('%A')})")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "missed", additional_context={"days": days})
