"""Tests for versecue.cli module.

Tests cover:
- CLI argument parsing
- init, translations, books, passage and search commands
- listen command with tab-prefixed confidences
- profile list/show/save/delete commands
- run_cli exit codes
"""

from __future__ import annotations

import argparse
import io
from pathlib import Path

import pytest
from rich.console import Console

from versecue import cli
from versecue.cli import (
    create_parser,
    init_database,
    list_books,
    list_translations,
    listen,
    parse_fragment,
    profile_delete,
    profile_list,
    profile_save,
    profile_show,
    run_cli,
    search,
    show_passage,
)
from versecue.config import AppConfig
from versecue.core import PastorProfile, ProfileManager, ProfileNotFoundError

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("DATA_PATH", "DATABASE_PATH", "ACTIVE_PROFILE", "LOG_LEVEL"):
        monkeypatch.delenv(f"VERSECUE_{name}", raising=False)


@pytest.fixture
def output(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """Capture rich console output on a wide, colorless console."""
    buffer = io.StringIO()
    monkeypatch.setattr(cli, "console", Console(file=buffer, width=200, color_system=None))
    return buffer


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    """A data directory with an initialized database."""
    assert init_database(argparse.Namespace(data_path=str(tmp_path))) == 0
    return tmp_path


def save_args(data_path: Path, profile_id: str, **overrides) -> argparse.Namespace:
    values = {
        "data_path": str(data_path),
        "profile_id": profile_id,
        "name": None,
        "wake": None,
        "ignore": None,
        "aggressiveness": None,
        "context_timeout": None,
        "verse_style": None,
        "activate": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


# =============================================================================
# Parser Tests
# =============================================================================


class TestParser:
    """Tests for argument parsing."""

    def test_create_parser(self):
        parser = create_parser()
        assert parser.prog == "versecue"

    def test_global_options(self):
        parsed = create_parser().parse_args(["--data", "/tmp/vc", "-v", "translations"])
        assert parsed.data_path == "/tmp/vc"
        assert parsed.verbose is True
        assert parsed.func is list_translations

    def test_parser_passage(self):
        parsed = create_parser().parse_args(["passage", "John 3:16-17", "-t", "web"])
        assert parsed.reference == "John 3:16-17"
        assert parsed.translation == "web"
        assert parsed.func is show_passage

    def test_parser_books_default_translation(self):
        parsed = create_parser().parse_args(["books"])
        assert parsed.translation == "KJV"

    def test_parser_search(self):
        parsed = create_parser().parse_args(["search", "loved the world", "-n", "5"])
        assert parsed.query == "loved the world"
        assert parsed.limit == 5

    def test_parser_listen(self):
        parsed = create_parser().parse_args(["listen", "sermon.txt", "--profile", "smith", "-c", "0.8"])
        assert parsed.file == "sermon.txt"
        assert parsed.profile == "smith"
        assert parsed.confidence == 0.8
        assert parsed.func is listen

    def test_parser_listen_defaults(self):
        parsed = create_parser().parse_args(["listen"])
        assert parsed.file is None
        assert parsed.profile is None
        assert parsed.confidence == 1.0

    def test_parser_profile_save(self):
        parsed = create_parser().parse_args(
            [
                "profile",
                "save",
                "smith",
                "--name",
                "Pastor Smith",
                "--wake",
                "show us",
                "--wake",
                "bring up",
                "--aggressiveness",
                "responsive",
                "--context-timeout",
                "45",
                "--activate",
            ]
        )
        assert parsed.profile_id == "smith"
        assert parsed.wake == ["show us", "bring up"]
        assert parsed.context_timeout == 45.0
        assert parsed.activate is True
        assert parsed.func is profile_save

    def test_parser_rejects_bad_aggressiveness(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["profile", "save", "smith", "--aggressiveness", "reckless"])


class TestParseFragment:
    """Tests for transcript line parsing."""

    def test_plain_line(self):
        assert parse_fragment("turn to john 3:16\n", 0.9) == ("turn to john 3:16", 0.9)

    def test_confidence_prefix(self):
        assert parse_fragment("0.85\tturn to john 3:16\n") == ("turn to john 3:16", 0.85)

    def test_non_numeric_prefix(self):
        assert parse_fragment("note\tturn to john 3:16") == ("note\tturn to john 3:16", 1.0)


# =============================================================================
# Database Command Tests
# =============================================================================


class TestDatabaseCommands:
    """Tests for init, translations, books, passage and search."""

    def test_init_creates_database(self, tmp_path: Path, output: io.StringIO):
        assert init_database(argparse.Namespace(data_path=str(tmp_path))) == 0
        assert (tmp_path / "scripture.db").exists()
        assert "KJV" in output.getvalue()

    def test_init_is_idempotent(self, data_path: Path):
        assert init_database(argparse.Namespace(data_path=str(data_path))) == 0

    def test_list_translations(self, data_path: Path, output: io.StringIO):
        assert list_translations(argparse.Namespace(data_path=str(data_path))) == 0
        assert "King James Version" in output.getvalue()

    def test_list_books(self, data_path: Path, output: io.StringIO):
        assert list_books(argparse.Namespace(data_path=str(data_path), translation="kjv")) == 0
        text = output.getvalue()
        assert "Genesis" in text
        assert "Revelation" in text

    def test_list_books_unknown_translation(self, data_path: Path):
        assert list_books(argparse.Namespace(data_path=str(data_path), translation="XYZ")) == 1

    def test_show_passage(self, data_path: Path, output: io.StringIO):
        args = argparse.Namespace(data_path=str(data_path), reference="John 3:16", translation=None)
        assert show_passage(args) == 0
        text = output.getvalue()
        assert "John 3:16" in text
        assert "For God so loved the world" in text

    def test_show_passage_not_a_reference(self, data_path: Path):
        args = argparse.Namespace(data_path=str(data_path), reference="good morning", translation=None)
        assert show_passage(args) == 1

    def test_show_passage_not_found(self, data_path: Path):
        args = argparse.Namespace(data_path=str(data_path), reference="John 99:1", translation=None)
        assert show_passage(args) == 1

    def test_search_phrase(self, data_path: Path, output: io.StringIO):
        args = argparse.Namespace(data_path=str(data_path), query="loved the world", limit=20)
        assert search(args) == 0
        assert "John 3:16" in output.getvalue()

    def test_search_no_results(self, data_path: Path, output: io.StringIO):
        args = argparse.Namespace(data_path=str(data_path), query="zzzzqqq", limit=20)
        assert search(args) == 0
        assert "No results" in output.getvalue()


# =============================================================================
# Listen Command Tests
# =============================================================================


class TestListen:
    """Tests for feeding transcripts through the engine."""

    def listen_args(self, data_path: Path, profile: str | None = None) -> argparse.Namespace:
        return argparse.Namespace(data_path=str(data_path), file=None, profile=profile, confidence=1.0)

    def test_listen_stream(self, data_path: Path, output: io.StringIO):
        stream = io.StringIO(
            "turn with me to john 3:16\n"
            "\n"
            "he basically said it's like being lost, similar to the prodigal son\n"
            "0.4\tlet's read romans 8:28\n"
        )
        assert listen(self.listen_args(data_path), stream=stream) == 0

        text = output.getvalue()
        assert "QUEUE John 3:16" in text
        assert "IGNORE Romans 8:28" in text
        assert "2 of 3 fragments queued." in text

    def test_listen_file(self, data_path: Path, tmp_path: Path, output: io.StringIO):
        transcript = tmp_path / "sermon.txt"
        transcript.write_text("let's read psalm 23\nnow let's read verse 1\n")
        args = argparse.Namespace(data_path=str(data_path), file=str(transcript), profile=None, confidence=1.0)

        assert listen(args) == 0
        text = output.getvalue()
        assert "Psalms 23:1" in text
        assert "2 of 2 fragments queued." in text

    def test_listen_with_profile(self, data_path: Path, output: io.StringIO):
        ProfileManager(data_path).save(PastorProfile(id="smith", name="Pastor Smith", wake_phrases=["show us"]))
        stream = io.StringIO("show us romans 8:28\n")

        assert listen(self.listen_args(data_path, profile="smith"), stream=stream) == 0
        assert "Romans 8:28" in output.getvalue()

    def test_listen_active_profile_from_config(self, data_path: Path, output: io.StringIO):
        ProfileManager(data_path).save(PastorProfile(id="smith", name="Pastor Smith", wake_phrases=["show us"]))
        config = AppConfig(data_path=data_path)
        config.active_profile = "smith"
        config.save()

        assert listen(self.listen_args(data_path), stream=io.StringIO("show us romans 8:28\n")) == 0
        assert "1 of 1 fragments queued." in output.getvalue()

    def test_listen_unknown_profile(self, data_path: Path):
        with pytest.raises(ProfileNotFoundError):
            listen(self.listen_args(data_path, profile="nobody"), stream=io.StringIO(""))


# =============================================================================
# Profile Command Tests
# =============================================================================


class TestProfileCommands:
    """Tests for profile management commands."""

    def test_save_new(self, tmp_path: Path, output: io.StringIO):
        args = save_args(tmp_path, "smith", name="Pastor Smith", wake=["Show Us"], aggressiveness="responsive")
        assert profile_save(args) == 0

        profile = ProfileManager(tmp_path).get("smith")
        assert profile.name == "Pastor Smith"
        assert profile.wake_phrases == ["show us"]
        assert profile.aggressiveness.value == "responsive"
        assert AppConfig.load(tmp_path).active_profile is None

    def test_save_defaults_name_to_id(self, tmp_path: Path):
        assert profile_save(save_args(tmp_path, "guest")) == 0
        assert ProfileManager(tmp_path).get("guest").name == "guest"

    def test_save_updates_existing(self, tmp_path: Path):
        profile_save(save_args(tmp_path, "smith", name="Pastor Smith", wake=["show us"]))
        profile_save(save_args(tmp_path, "smith", context_timeout=45.0, verse_style="numeric"))

        profile = ProfileManager(tmp_path).get("smith")
        assert profile.name == "Pastor Smith"
        assert profile.wake_phrases == ["show us"]
        assert profile.context_timeout_seconds == 45
        assert profile.verse_style == "numeric"

    def test_save_activate(self, tmp_path: Path):
        assert profile_save(save_args(tmp_path, "smith", activate=True)) == 0
        assert AppConfig.load(tmp_path).active_profile == "smith"

    def test_list(self, tmp_path: Path, output: io.StringIO):
        profile_save(save_args(tmp_path, "smith", name="Pastor Smith", activate=True))
        profile_save(save_args(tmp_path, "jones", name="Pastor Jones"))
        output.truncate(0)
        output.seek(0)

        assert profile_list(argparse.Namespace(data_path=str(tmp_path))) == 0
        text = output.getvalue()
        assert "Pastor Smith" in text
        assert "Pastor Jones" in text
        assert "✓" in text

    def test_list_empty(self, tmp_path: Path, output: io.StringIO):
        assert profile_list(argparse.Namespace(data_path=str(tmp_path))) == 0
        assert "No profiles saved." in output.getvalue()

    def test_show(self, tmp_path: Path, output: io.StringIO):
        profile_save(save_args(tmp_path, "smith", name="Pastor Smith", ignore=["for example"]))
        assert profile_show(argparse.Namespace(data_path=str(tmp_path), profile_id="smith")) == 0
        assert "Ignore phrases: for example" in output.getvalue()

    def test_show_missing(self, tmp_path: Path):
        with pytest.raises(ProfileNotFoundError):
            profile_show(argparse.Namespace(data_path=str(tmp_path), profile_id="nobody"))

    def test_delete(self, tmp_path: Path):
        profile_save(save_args(tmp_path, "smith"))
        assert profile_delete(argparse.Namespace(data_path=str(tmp_path), profile_id="smith")) == 0
        assert ProfileManager(tmp_path).get("smith") is None
        assert profile_delete(argparse.Namespace(data_path=str(tmp_path), profile_id="smith")) == 1


# =============================================================================
# run_cli Tests
# =============================================================================


class TestRunCli:
    """Tests for the run_cli entry point."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]):
        assert run_cli([]) == 0
        assert "usage: versecue" in capsys.readouterr().out

    def test_passage(self, data_path: Path, output: io.StringIO):
        assert run_cli(["--data", str(data_path), "passage", "Psalm 23:1"]) == 0
        assert "Psalms 23:1" in output.getvalue()

    def test_passage_not_found(self, data_path: Path, output: io.StringIO):
        assert run_cli(["--data", str(data_path), "passage", "John 99:1"]) == 1

    def test_error_exit_code(self, tmp_path: Path, output: io.StringIO):
        assert run_cli(["--data", str(tmp_path), "profile", "show", "nobody"]) == 1
        assert "Error: No pastor profile 'nobody'" in output.getvalue()

    def test_profile_workflow(self, tmp_path: Path, output: io.StringIO):
        assert run_cli(["--data", str(tmp_path), "profile", "save", "smith", "--wake", "show us", "--activate"]) == 0
        assert run_cli(["--data", str(tmp_path), "profile", "list"]) == 0
        assert run_cli(["--data", str(tmp_path), "profile", "delete", "smith"]) == 0
        assert ProfileManager(tmp_path).list() == []
