#!/usr/bin/env python3
"""
Integration tests for the diarist CLI.

Every command runs against a temporary database, log directory and
(missing) config file, through Click's CliRunner.
"""
from datetime import date, timedelta

import pytest
from click.testing import CliRunner

from diarist.database.cli import cli

TODAY = date.today()


class TestDiaristCLI:
    """Test CLI commands with a temporary database."""

    @pytest.fixture
    def runner(self):
        """Create Click test runner."""
        return CliRunner()

    @pytest.fixture
    def test_dirs(self, tmp_path):
        """Temporary paths for the database, logs and config."""
        return {
            "db_path": tmp_path / "journal.db",
            "log_dir": tmp_path / "logs",
            "config": tmp_path / "config.yaml",
        }

    def invoke_cli(self, runner, test_dirs, args, **kwargs):
        """Helper to invoke CLI with test configuration."""
        base_args = [
            "--db-path", str(test_dirs["db_path"]),
            "--log-dir", str(test_dirs["log_dir"]),
            "--config", str(test_dirs["config"]),
        ]
        return runner.invoke(cli, base_args + args, **kwargs)

    def write(self, runner, test_dirs, *args):
        result = self.invoke_cli(runner, test_dirs, ["entry", "write", *args])
        assert result.exit_code == 0, result.output
        return result

    # ---- Setup ----

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "journal" in result.output.lower()

    def test_init_command(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["init"])

        assert result.exit_code == 0, result.output
        assert "Database ready" in result.output
        assert "Schema revision: 3f2a9c1d7b10" in result.output
        assert test_dirs["db_path"].exists()
        assert (test_dirs["log_dir"] / "diarist.log").exists()

    def test_init_twice(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["init"])
        result = self.invoke_cli(runner, test_dirs, ["init"])
        assert result.exit_code == 0, result.output

    # ---- Entries ----

    def test_write_and_show(self, runner, test_dirs):
        result = self.write(
            runner, test_dirs,
            "--date", "2024-03-01",
            "--title", "First",
            "--content", "Hello there journal",
            "--mood", "happy",
            "--mood2", "grateful",
            "--tag", "Work",
        )
        assert "Created entry for 2024-03-01 (3 words)" in result.output

        shown = self.invoke_cli(runner, test_dirs, ["entry", "show", "2024-03-01"])
        assert shown.exit_code == 0
        assert "First" in shown.output
        assert "Happy" in shown.output and "Grateful" in shown.output
        assert "Tags: Work" in shown.output

    def test_write_same_date_updates(self, runner, test_dirs):
        self.write(runner, test_dirs, "--date", "2024-03-01", "--content", "one")
        result = self.write(runner, test_dirs, "--date", "2024-03-01", "--content", "one two")

        assert "Updated entry for 2024-03-01 (2 words)" in result.output
        listing = self.invoke_cli(runner, test_dirs, ["entry", "list"])
        assert "1 total" in listing.output

    def test_write_from_file(self, runner, test_dirs, tmp_path):
        source = tmp_path / "draft.md"
        source.write_text("# Heading\n\nfour words right here", encoding="utf-8")

        result = self.write(runner, test_dirs, "--date", "2024-03-01", "--file", str(source))
        assert "(6 words)" in result.output

    def test_write_unknown_tag_fails(self, runner, test_dirs):
        result = self.invoke_cli(
            runner, test_dirs, ["entry", "write", "--date", "2024-03-01", "--tag", "Nope"]
        )
        assert result.exit_code == 1
        assert "Unknown tag" in result.output

        shown = self.invoke_cli(runner, test_dirs, ["entry", "show", "2024-03-01"])
        assert shown.exit_code == 1

    def test_write_long_title_fails(self, runner, test_dirs):
        result = self.invoke_cli(
            runner, test_dirs, ["entry", "write", "--date", "2024-03-01", "--title", "x" * 201]
        )
        assert result.exit_code == 1
        assert "ValidationError" in result.output

    def test_show_missing(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["entry", "show", "2020-01-01"])
        assert result.exit_code == 1
        assert "No entry found" in result.output

    def test_list_pagination(self, runner, test_dirs):
        for day in range(1, 13):
            self.write(runner, test_dirs, "--date", f"2024-03-{day:02d}", "--title", f"Day {day}")

        result = self.invoke_cli(
            runner, test_dirs, ["entry", "list", "--page", "2", "--page-size", "5"]
        )

        assert result.exit_code == 0
        assert "page 2/3, 12 total" in result.output
        assert "Day 7" in result.output
        assert "Day 12" not in result.output

    def test_list_filters(self, runner, test_dirs):
        self.write(runner, test_dirs, "--date", "2024-03-01", "--title", "Calm day", "--mood", "calm")
        self.write(runner, test_dirs, "--date", "2024-03-02", "--title", "Sad day", "--mood", "sad")

        result = self.invoke_cli(runner, test_dirs, ["entry", "list", "--mood", "calm"])

        assert "1 matching entries" in result.output
        assert "Calm day" in result.output
        assert "Sad day" not in result.output

    def test_search(self, runner, test_dirs):
        self.write(runner, test_dirs, "--date", "2024-03-01", "--content", "Walked the Dog")

        found = self.invoke_cli(runner, test_dirs, ["entry", "search", "dog"])
        assert "1 entries match" in found.output

        missing = self.invoke_cli(runner, test_dirs, ["entry", "search", "cat"])
        assert "No entries match" in missing.output

    def test_delete(self, runner, test_dirs):
        self.write(runner, test_dirs, "--date", "2024-03-01")

        result = self.invoke_cli(runner, test_dirs, ["entry", "delete", "2024-03-01", "--yes"])
        assert result.exit_code == 0
        assert "Deleted entry for 2024-03-01" in result.output

        again = self.invoke_cli(runner, test_dirs, ["entry", "delete", "2024-03-01", "--yes"])
        assert "nothing deleted" in again.output

    def test_calendar(self, runner, test_dirs):
        self.write(runner, test_dirs, "--date", "2024-03-05")
        self.write(runner, test_dirs, "--date", "2024-03-06")

        result = self.invoke_cli(runner, test_dirs, ["entry", "calendar", "2024", "3"])

        assert result.exit_code == 0
        assert "March 2024" in result.output
        assert "  5*" in result.output
        assert "2 days with entries" in result.output

    def test_calendar_bad_month(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["entry", "calendar", "2024", "13"])
        assert result.exit_code == 1

    def test_favorite_toggle(self, runner, test_dirs):
        self.write(runner, test_dirs, "--date", "2024-03-01")

        first = self.invoke_cli(runner, test_dirs, ["entry", "favorite", "2024-03-01"])
        second = self.invoke_cli(runner, test_dirs, ["entry", "favorite", "2024-03-01"])

        assert "Marked as favorite" in first.output
        assert "Removed from favorites" in second.output

    # ---- Tags ----

    def test_tag_lifecycle(self, runner, test_dirs):
        created = self.invoke_cli(
            runner, test_dirs, ["tag", "create", "Books", "--color", "#12ab9f"]
        )
        assert created.exit_code == 0
        assert "Created tag 'Books' (#12AB9F)" in created.output

        listing = self.invoke_cli(runner, test_dirs, ["tag", "list"])
        assert "Pre-built tags (10)" in listing.output
        assert "Books" in listing.output

        deleted = self.invoke_cli(runner, test_dirs, ["tag", "delete", "books"])
        assert "Deleted tag 'Books'" in deleted.output

    def test_tag_duplicate_rejected(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["tag", "create", "Books"])
        result = self.invoke_cli(runner, test_dirs, ["tag", "create", "BOOKS"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_prebuilt_tag_delete_rejected(self, runner, test_dirs):
        self.write(runner, test_dirs, "--date", "2024-03-01", "--tag", "Work")

        result = self.invoke_cli(runner, test_dirs, ["tag", "delete", "Work"])
        assert result.exit_code == 1
        assert "cannot be deleted" in result.output

        shown = self.invoke_cli(runner, test_dirs, ["entry", "show", "2024-03-01"])
        assert "Tags: Work" in shown.output

    # ---- Streaks ----

    def test_streak(self, runner, test_dirs):
        for offset in (2, 1):
            day = (TODAY - timedelta(days=offset)).isoformat()
            self.write(runner, test_dirs, "--date", day)

        result = self.invoke_cli(runner, test_dirs, ["streak", "--refresh"])

        assert result.exit_code == 0
        assert "Current streak: 2 days" in result.output
        assert f"since {(TODAY - timedelta(days=2)).isoformat()}" in result.output

    def test_missed(self, runner, test_dirs):
        self.write(runner, test_dirs, "--date", TODAY.isoformat())

        result = self.invoke_cli(runner, test_dirs, ["missed", "--days", "3"])

        assert "2 missed days in the last 3" in result.output
        assert (TODAY - timedelta(days=1)).isoformat() in result.output

    # ---- Stats ----

    def test_stats_commands(self, runner, test_dirs):
        self.write(
            runner, test_dirs,
            "--date", TODAY.isoformat(), "--content", "a b c", "--mood", "happy", "--tag", "Work",
        )

        moods = self.invoke_cli(runner, test_dirs, ["stats", "moods"])
        assert "Happy" in moods.output and "100.0%" in moods.output

        tags = self.invoke_cli(runner, test_dirs, ["stats", "tags"])
        assert "Work" in tags.output

        words = self.invoke_cli(runner, test_dirs, ["stats", "words", "--days", "7"])
        assert "Total words: 3" in words.output

        monthly = self.invoke_cli(runner, test_dirs, ["stats", "monthly", "--months", "1"])
        assert "1 entries" in monthly.output

        summary = self.invoke_cli(runner, test_dirs, ["stats", "summary"])
        assert summary.exit_code == 0
        assert "Top mood:         happy" in summary.output
        assert "Written today:    yes" in summary.output

    def test_stats_empty(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["stats", "moods"])
        assert "No entries in range" in result.output

    # ---- Settings ----

    def test_settings_theme(self, runner, test_dirs):
        shown = self.invoke_cli(runner, test_dirs, ["settings", "theme"])
        assert "Theme: dark" in shown.output

        changed = self.invoke_cli(runner, test_dirs, ["settings", "theme", "light"])
        assert "Theme set to light" in changed.output

        summary = self.invoke_cli(runner, test_dirs, ["settings", "show"])
        assert "light" in summary.output

    def test_pin_lifecycle(self, runner, test_dirs):
        none_set = self.invoke_cli(runner, test_dirs, ["settings", "remove-pin", "--pin", "1234"])
        assert "No PIN is set" in none_set.output

        enabled = self.invoke_cli(runner, test_dirs, ["settings", "set-pin", "--pin", "1234"])
        assert "PIN lock enabled" in enabled.output

        wrong = self.invoke_cli(runner, test_dirs, ["settings", "remove-pin", "--pin", "9999"])
        assert wrong.exit_code == 1
        assert "Incorrect PIN" in wrong.output

        removed = self.invoke_cli(runner, test_dirs, ["settings", "remove-pin", "--pin", "1234"])
        assert "PIN lock removed" in removed.output

    def test_invalid_pin_rejected(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["settings", "set-pin", "--pin", "12"])
        assert result.exit_code == 1
        assert "4 to 12 digits" in result.output
