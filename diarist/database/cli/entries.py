"""
Entry Commands
---------------

Write, browse and remove journal entries.

Commands:
    - write: Create or update the entry for a date
    - show: Display one entry
    - list: Paginated list, or filtered by mood/tag/date range
    - search: Case-insensitive text search
    - delete: Remove an entry
    - calendar: Month view marking days with entries
    - favorite: Toggle the favorite flag
"""
import calendar as calendar_module
import sys
from datetime import date
from pathlib import Path

import click

from diarist.core.exceptions import DatabaseError, ValidationError
from diarist.core.logging_manager import handle_cli_error
from diarist.core.validators import DataValidator
from diarist.database.models import Entry, Mood
from . import get_config, get_db

MOOD_CHOICE = click.Choice(Mood.choices(), case_sensitive=False)


def _resolve_date(value):
    """Parse a CLI date argument, defaulting to today."""
    if value is None:
        return date.today()
    return DataValidator.normalize_date(value)


def _echo_entry_line(entry: Entry) -> None:
    star = "⭐ " if entry.is_favorite else ""
    title = entry.title or "(untitled)"
    click.echo(
        f"  {entry.date_formatted}  {entry.primary_mood.emoji}  {star}{title}"
        f"  [{entry.word_count} words]"
    )
    preview = entry.preview(80)
    if preview:
        click.echo(f"      {preview}")


def _echo_entry(entry: Entry) -> None:
    click.echo(f"\n📅 {entry.date_formatted}  {entry.title or '(untitled)'}")
    moods = ", ".join(f"{m.emoji} {m.display_name}" for m in entry.moods)
    click.echo(f"😶 Moods: {moods}")
    if entry.tags:
        click.echo(f"🏷️  Tags: {', '.join(sorted(t.name for t in entry.tags))}")
    click.echo(f"📊 {entry.word_count} words{'  ⭐ favorite' if entry.is_favorite else ''}")
    if entry.content:
        click.echo(f"\n{entry.content}\n")


def _resolve_tag_ids(db, names):
    """Tag names or ids from the command line to tag ids."""
    tag_ids = []
    for name in names:
        tag = db.tags.get(tag_id=int(name)) if name.isdigit() else db.tags.get(name=name)
        if tag is None:
            raise ValidationError(f"Unknown tag: {name}")
        tag_ids.append(tag.id)
    return tag_ids


@click.group()
@click.pass_context
def entry(ctx: click.Context) -> None:
    """Write and browse journal entries."""
    pass


@entry.command("write")
@click.option("--date", "entry_date", help="Entry date (YYYY-MM-DD, default: today)")
@click.option("--title", help="Entry title (max 200 characters)")
@click.option("--content", help="Entry text (Markdown)")
@click.option(
    "--file",
    "content_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read entry text from a file",
)
@click.option("--mood", type=MOOD_CHOICE, help="Primary mood")
@click.option("--mood2", type=MOOD_CHOICE, help="First secondary mood")
@click.option("--mood3", type=MOOD_CHOICE, help="Second secondary mood")
@click.option("--tag", "tags", multiple=True, help="Tag name or id (repeatable)")
@click.option("--favorite/--no-favorite", default=None, help="Mark as favorite")
@click.pass_context
def write(ctx, entry_date, title, content, content_file, mood, mood2, mood3, tags, favorite):
    """Create the entry for a date, or update it if one exists."""
    try:
        if content_file is not None:
            content = content_file.read_text(encoding="utf-8")

        db = get_db(ctx)
        with db.session_scope():
            target = _resolve_date(entry_date)
            metadata = {"entry_date": target}
            if title is not None:
                metadata["title"] = title
            if content is not None:
                metadata["content"] = content
            if mood:
                metadata["primary_mood"] = mood
            if mood2:
                metadata["secondary_mood_1"] = mood2
            if mood3:
                metadata["secondary_mood_2"] = mood3
            if favorite is not None:
                metadata["is_favorite"] = favorite
            if tags:
                metadata["tags"] = _resolve_tag_ids(db, tags)

            existed = db.entries.exists(entry_date=target)
            saved = db.entries.save(metadata)

            verb = "Updated" if existed else "Created"
            click.echo(f"✅ {verb} entry for {saved.date_formatted} ({saved.word_count} words)")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "write", additional_context={"entry_date": entry_date})


@entry.command("show")
@click.argument("entry_date", required=False)
@click.pass_context
def show(ctx, entry_date):
    """Display the entry for a date (default: today)."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            found = db.entries.get(entry_date=_resolve_date(entry_date))
            if not found:
                click.echo(f"❌ No entry found for {entry_date or 'today'}", err=True)
                sys.exit(1)
            _echo_entry(found)

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "show", additional_context={"entry_date": entry_date})


@entry.command("list")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option("--page-size", type=int, default=None, help="Entries per page")
@click.option("--search", "search_term", help="Only entries containing this text")
@click.option("--mood", type=MOOD_CHOICE, help="Filter by mood (any slot)")
@click.option("--tag", "tag_name", help="Filter by tag name or id")
@click.option("--from", "start_date", help="Filter from date (inclusive)")
@click.option("--to", "end_date", help="Filter up to date (inclusive)")
@click.pass_context
def list_entries(ctx, page, page_size, search_term, mood, tag_name, start_date, end_date):
    """List entries, most recent first."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            if mood or tag_name or start_date or end_date:
                tag_id = _resolve_tag_ids(db, [tag_name])[0] if tag_name else None
                entries = db.entries.filter(
                    mood=mood, tag_id=tag_id, start_date=start_date, end_date=end_date
                )
                click.echo(f"\n📚 {len(entries)} matching entries\n")
                for item in entries:
                    _echo_entry_line(item)
                return

            size = page_size or get_config(ctx).get_int("journal.page_size", 10)
            entries, total = db.entries.get_paginated(page, size, search_term)
            pages = max(1, -(-total // size))
            click.echo(f"\n📚 Entries (page {page}/{pages}, {total} total)\n")
            for item in entries:
                _echo_entry_line(item)

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "list")


@entry.command("search")
@click.argument("term")
@click.pass_context
def search(ctx, term):
    """Search titles and content (case-insensitive)."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            results = db.entries.search(term)
            if not results:
                click.echo(f"⚠️  No entries match '{term}'")
                return
            click.echo(f"\n🔎 {len(results)} entries match '{term}'\n")
            for item in results:
                _echo_entry_line(item)

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "search", additional_context={"term": term})


@entry.command("delete")
@click.argument("entry_date")
@click.confirmation_option(prompt="⚠️  Delete this entry?")
@click.pass_context
def delete(ctx, entry_date):
    """Delete the entry for a date."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            found = db.entries.get(entry_date=_resolve_date(entry_date))
            if not found:
                click.echo(f"⚠️  No entry for {entry_date}, nothing deleted")
                return
            db.entries.delete(found.id)
            click.echo(f"🗑️  Deleted entry for {found.date_formatted}")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "delete", additional_context={"entry_date": entry_date})


@entry.command("calendar")
@click.argument("year", type=int, required=False)
@click.argument("month", type=int, required=False)
@click.pass_context
def calendar_view(ctx, year, month):
    """Month view; days with entries are marked with '*'."""
    try:
        today = date.today()
        year = year or today.year
        month = month or today.month

        db = get_db(ctx)
        with db.session_scope():
            days = {d.day for d in db.entries.get_dates_with_entries(year, month)}

        click.echo(f"\n📅 {calendar_module.month_name[month]} {year}\n")
        click.echo(" Mo  Tu  We  Th  Fr  Sa  Su")
        for week in calendar_module.monthcalendar(year, month):
            cells = []
            for day in week:
                if day == 0:
                    cells.append("    ")
                else:
                    cells.append(f"{day:>3}{'*' if day in days else ' '}")
            click.echo("".join(cells).rstrip())
        click.echo(f"\n{len(days)} days with entries")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "calendar", additional_context={"year": year, "month": month})


@entry.command("favorite")
@click.argument("entry_date", required=False)
@click.pass_context
def favorite(ctx, entry_date):
    """Toggle the favorite flag of an entry."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            found = db.entries.get(entry_date=_resolve_date(entry_date))
            if not found:
                click.echo(f"❌ No entry found for {entry_date or 'today'}", err=True)
                sys.exit(1)
            updated = db.entries.toggle_favorite(found.id)
            state = "⭐ Marked as favorite" if updated.is_favorite else "☆ Removed from favorites"
            click.echo(f"{state}: {updated.date_formatted}")

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "favorite", additional_context={"entry_date": entry_date})
