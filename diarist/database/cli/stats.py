"""
Analytics Commands
-------------------

Commands:
    - moods: Mood distribution (all mood slots counted)
    - tags: Most used tags
    - words: Words written per day over a trailing window
    - monthly: Entry and word totals per month
    - summary: Dashboard overview
"""
import click

from diarist.core.exceptions import DatabaseError, ValidationError
from diarist.core.logging_manager import handle_cli_error
from diarist.core.validators import DataValidator
from . import get_config, get_db

BAR_WIDTH = 30


def _bar(percentage: float) -> str:
    return "█" * int(round(percentage / 100 * BAR_WIDTH))


@click.group()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Journal analytics."""
    pass


@stats.command("moods")
@click.option("--from", "start_date", help="Start date (inclusive)")
@click.option("--to", "end_date", help="End date (inclusive)")
@click.pass_context
def moods(ctx, start_date, end_date):
    """Show how often each mood appears."""
    try:
        db = get_db(ctx)
        with db.session_scope() as session:
            distribution = db.query_analytics.get_mood_distribution(
                session,
                DataValidator.normalize_date(start_date),
                DataValidator.normalize_date(end_date),
            )

        if not distribution:
            click.echo("⚠️  No entries in range")
            return

        click.echo("\n😶 Mood distribution:\n")
        for item in distribution:
            click.echo(
                f"  {item.mood.emoji} {item.mood.display_name:<10} {item.count:4d} "
                f"{item.percentage:5.1f}%  {_bar(item.percentage)}"
            )

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "stats_moods")


@stats.command("tags")
@click.option("--top", type=int, default=None, help="Number of tags (default from config)")
@click.pass_context
def tags(ctx, top):
    """Show the most used tags."""
    try:
        top = top or get_config(ctx).get_int("analytics.top_tags", 10)
        db = get_db(ctx)
        with db.session_scope() as session:
            usage = db.query_analytics.get_tag_usage(session, top)

        if not usage:
            click.echo("⚠️  No tagged entries yet")
            return

        click.echo(f"\n🏷️  Top {len(usage)} tags:\n")
        for item in usage:
            click.echo(
                f"  {item.tag.name:<16} {item.count:4d} {item.percentage:5.1f}%  "
                f"{_bar(item.percentage)}"
            )

    except DatabaseError as e:
        handle_cli_error(ctx, e, "stats_tags")


@stats.command("words")
@click.option("--days", type=int, default=None, help="Trailing days (default from config)")
@click.pass_context
def words(ctx, days):
    """Show words written per day."""
    try:
        days = days or get_config(ctx).get_int("analytics.trend_days", 30)
        db = get_db(ctx)
        with db.session_scope() as session:
            trend = db.query_analytics.get_word_count_trend(session, days)
            total = db.query_analytics.get_total_word_count(session)
            average = db.query_analytics.get_average_word_count(session)

        click.echo(f"\n✍️  Words per day (last {days} days):\n")
        if not trend:
            click.echo("  (no entries)")
        for point in trend:
            click.echo(f"  {point.date.isoformat()}  {point.word_count:6d}")
        click.echo(f"\nTotal words: {total}  Average per entry: {average}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "stats_words")


@stats.command("monthly")
@click.option("--months", type=int, default=None, help="Trailing months (default from config)")
@click.pass_context
def monthly(ctx, months):
    """Show entry and word totals per month."""
    try:
        months = months or get_config(ctx).get_int("analytics.monthly_months", 6)
        db = get_db(ctx)
        with db.session_scope() as session:
            rollup = db.query_analytics.get_monthly_stats(session, months)

        click.echo(f"\n📆 Monthly stats (last {months} months):\n")
        if not rollup:
            click.echo("  (no entries)")
        for item in rollup:
            click.echo(
                f"  {item.label:<9} {item.entry_count:3d} entries  "
                f"{item.total_words:7d} words  avg {item.average_words}"
            )

    except DatabaseError as e:
        handle_cli_error(ctx, e, "stats_monthly")


@stats.command("summary")
@click.pass_context
def summary(ctx):
    """Show the dashboard overview."""
    try:
        db = get_db(ctx)
        with db.session_scope() as session:
            data = db.query_analytics.get_dashboard_summary(session)

        click.echo("\n📊 Journal summary\n")
        click.echo(f"  Entries:          {data['total_entries']}")
        click.echo(f"  Current streak:   {data['current_streak']} days")
        click.echo(f"  Longest streak:   {data['longest_streak']} days")
        click.echo(f"  Missed days:      {data['missed_days']}")
        click.echo(f"  Total words:      {data['total_words']}")
        click.echo(f"  Average words:    {data['average_words']}")
        click.echo(f"  Top mood:         {data['most_frequent_mood'] or '-'}")
        written = "yes" if data["has_entry_today"] else "not yet"
        click.echo(f"  Written today:    {written}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "stats_summary")
