"""CLI commands for VerseCue.

Provides subcommands for the scripture database and for running transcripts
through the detection engine.

Commands:
    versecue init                 - Create and seed the scripture database
    versecue translations         - List translations
    versecue books                - List books of a translation
    versecue passage REFERENCE    - Show a passage ("John 3:16-17")
    versecue search QUERY         - Search by reference or phrase
    versecue listen [FILE]        - Feed transcript lines through the engine
    versecue profile list|show|save|delete - Manage pastor profiles
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.table import Table

from .config import AppConfig
from .core import PastorProfile, QueueItem, VerseCueState
from .core.intent import ActionType

console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ACTION_STYLES: dict[ActionType, str] = {
    ActionType.QUEUE: "green",
    ActionType.QUEUE_WITH_WARNING: "yellow",
    ActionType.SUGGEST: "cyan",
    ActionType.IGNORE: "dim",
}


def load_state(args: argparse.Namespace) -> VerseCueState:
    """Build application state from the --data option and environment."""
    data_path = getattr(args, "data_path", None)
    config = AppConfig.load(Path(data_path).expanduser() if data_path else None)
    return VerseCueState(config=config)


def parse_fragment(line: str, default_confidence: float = 1.0) -> tuple[str, float]:
    """Split a transcript line into (text, recognizer confidence).

    Lines may carry a leading confidence separated by a tab:
    ``0.85<TAB>turn with me to john 3:16``.
    """
    line = line.rstrip("\n")
    if "\t" in line:
        head, text = line.split("\t", 1)
        try:
            return text, float(head)
        except ValueError:
            pass
    return line, default_confidence


# =============================================================================
# Database commands
# =============================================================================


def init_database(args: argparse.Namespace) -> int:
    """Create the schema and seed default data.

    Args:
        args: Parsed arguments

    Returns:
        Exit code (0 for success)
    """
    state = load_state(args)
    try:
        store = state.init_store(seed=True)
        translations = store.list_translations()
        console.print(f"[green]✓[/green] Scripture database ready at {state.config.resolved_database_path}")
        for translation in translations:
            books = store.list_books(translation.id)
            console.print(f"  {translation.code}: {translation.name} ({len(books)} books)")
    finally:
        state.close()
    return 0


def list_translations(args: argparse.Namespace) -> int:
    """List installed translations."""
    state = load_state(args)
    try:
        translations = state.init_store().list_translations()
    finally:
        state.close()

    if not translations:
        console.print("[dim]No translations installed.[/dim]")
        return 0

    table = Table(title="Translations")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Language", style="dim")
    table.add_column("Copyright", style="dim")

    for translation in translations:
        table.add_row(
            translation.code,
            translation.name,
            translation.language,
            translation.copyright or "-",
        )

    console.print(table)
    return 0


def list_books(args: argparse.Namespace) -> int:
    """List the books of a translation in canonical order.

    Args:
        args: Parsed arguments (translation)

    Returns:
        Exit code (0 for success, 1 for unknown translation)
    """
    state = load_state(args)
    try:
        store = state.init_store()
        translation = store.get_translation(args.translation)
        if translation is None:
            console.print(f"[yellow]Unknown translation '{args.translation}'.[/yellow]")
            return 1
        books = store.list_books(translation.id)
    finally:
        state.close()

    table = Table(title=f"Books ({translation.code})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Book", style="cyan")
    table.add_column("Abbr.")
    table.add_column("Testament", justify="center")

    for book in books:
        table.add_row(str(book.position), book.name, book.abbreviation, book.testament)

    console.print(table)
    return 0


def show_passage(args: argparse.Namespace) -> int:
    """Print a passage for a typed reference.

    Args:
        args: Parsed arguments (reference, translation)

    Returns:
        Exit code (0 for success, 1 if the reference does not resolve)
    """
    state = load_state(args)
    try:
        store = state.init_store()
        reference = store.parse_reference(args.reference)
        if reference is None:
            console.print(f"[yellow]Not a scripture reference: '{args.reference}'.[/yellow]")
            return 1
        if args.translation:
            reference = replace(reference, translation=args.translation)
        passage = store.get_passage(reference)
    finally:
        state.close()

    if passage is None:
        console.print(f"[yellow]Passage not found: {args.reference}[/yellow]")
        return 1

    console.print(f"[bold]{passage.display_reference}[/bold] [dim]({passage.reference.translation})[/dim]")
    for verse in passage.verses:
        console.print(f"[dim]{verse.verse}[/dim] {verse.text}")
    return 0


def search(args: argparse.Namespace) -> int:
    """Search by reference, falling back to phrase search.

    Args:
        args: Parsed arguments (query, limit)

    Returns:
        Exit code (0 for success)
    """
    state = load_state(args)
    try:
        results = state.init_store().search_scripture(args.query, limit=args.limit)
    finally:
        state.close()

    if not results:
        console.print(f"[dim]No results for '{args.query}'.[/dim]")
        return 0

    table = Table(title=f"Results for '{args.query}'")
    table.add_column("Reference", style="cyan")
    table.add_column("Text")

    for passage in results:
        table.add_row(passage.display_reference, passage.text)

    console.print(table)
    return 0


# =============================================================================
# Engine commands
# =============================================================================


def print_queue_item(item: QueueItem) -> None:
    style = ACTION_STYLES.get(item.action, "white")
    intent = item.intent_type.value if item.intent_type else "-"
    console.print(
        f"[{style}]{item.action.value}[/{style}] "
        f"[bold]{item.display_reference}[/bold] "
        f"[dim]({intent}, {item.confidence:.2f})[/dim]"
    )
    console.print(f"  {item.text}")


def listen(args: argparse.Namespace, stream: TextIO | None = None) -> int:
    """Feed transcript lines through the engine and print queued passages.

    Args:
        args: Parsed arguments (file, profile, confidence)
        stream: Input stream (defaults to the file argument or stdin)

    Returns:
        Exit code (0 for success)
    """
    state = load_state(args)
    try:
        engine = state.init_engine(args.profile)

        if stream is None:
            stream = open(args.file) if args.file and args.file != "-" else sys.stdin

        emitted = 0
        processed = 0
        try:
            for line in stream:
                text, confidence = parse_fragment(line, args.confidence)
                if not text.strip():
                    continue
                processed += 1
                item = engine.process_transcript(text, confidence)
                if item is not None:
                    emitted += 1
                    print_queue_item(item)
        finally:
            if stream is not sys.stdin:
                stream.close()
    finally:
        state.close()

    console.print(f"[dim]{emitted} of {processed} fragments queued.[/dim]")
    return 0


# =============================================================================
# Profile commands
# =============================================================================


def profile_list(args: argparse.Namespace) -> int:
    """List saved pastor profiles."""
    state = load_state(args)
    profiles = state.profiles.list()

    if not profiles:
        console.print("[dim]No profiles saved.[/dim]")
        return 0

    table = Table(title="Pastor Profiles")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Aggressiveness")
    table.add_column("Context (s)", justify="right")
    table.add_column("Active", justify="center")

    for profile in profiles:
        active = "✓" if profile.id == state.config.active_profile else ""
        table.add_row(
            profile.id,
            profile.name,
            profile.aggressiveness.value,
            f"{profile.context_timeout_seconds:g}",
            active,
        )

    console.print(table)
    return 0


def profile_show(args: argparse.Namespace) -> int:
    """Show one pastor profile."""
    state = load_state(args)
    profile = state.profiles.get(args.profile_id, strict=True)

    console.print(f"[bold]{profile.name}[/bold] [dim]({profile.id})[/dim]")
    console.print(f"Aggressiveness: {profile.aggressiveness.value}")
    console.print(f"Context timeout: {profile.context_timeout_seconds:g}s")
    console.print(f"Verse style: {profile.verse_style}")
    console.print(f"Wake phrases: {', '.join(profile.wake_phrases) or '-'}")
    console.print(f"Ignore phrases: {', '.join(profile.ignore_phrases) or '-'}")
    return 0


def profile_save(args: argparse.Namespace) -> int:
    """Create or update a pastor profile.

    Unspecified options keep the existing profile's values.

    Args:
        args: Parsed arguments (profile_id, name, wake, ignore, aggressiveness,
            context_timeout, verse_style, activate)

    Returns:
        Exit code (0 for success)
    """
    state = load_state(args)
    existing = state.profiles.get(args.profile_id)
    data = existing.model_dump() if existing else {"id": args.profile_id, "name": args.profile_id}

    if args.name:
        data["name"] = args.name
    if args.wake:
        data["wake_phrases"] = args.wake
    if args.ignore:
        data["ignore_phrases"] = args.ignore
    if args.aggressiveness:
        data["aggressiveness"] = args.aggressiveness
    if args.context_timeout is not None:
        data["context_timeout_seconds"] = args.context_timeout
    if args.verse_style:
        data["verse_style"] = args.verse_style

    profile = PastorProfile.model_validate(data)
    path = state.profiles.save(profile)
    console.print(f"[green]✓[/green] Saved profile {profile.id} to {path}")

    if args.activate:
        state.config.active_profile = profile.id
        state.config.save()
        console.print(f"  Active profile: {profile.id}")
    return 0


def profile_delete(args: argparse.Namespace) -> int:
    """Delete a pastor profile."""
    state = load_state(args)
    if not state.profiles.delete(args.profile_id):
        console.print(f"[yellow]No profile '{args.profile_id}'.[/yellow]")
        return 1
    console.print(f"[green]✓[/green] Deleted profile {args.profile_id}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="versecue",
        description="VerseCue: live scripture detection for worship projection",
    )
    parser.add_argument(
        "--data",
        "-d",
        dest="data_path",
        default=None,
        help="Data directory for scripture.db and profiles (default: ~/.versecue)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # =========================================================================
    # database commands
    # =========================================================================
    init_parser = subparsers.add_parser("init", help="Create and seed the scripture database")
    init_parser.set_defaults(func=init_database)

    translations_parser = subparsers.add_parser("translations", help="List translations")
    translations_parser.set_defaults(func=list_translations)

    books_parser = subparsers.add_parser("books", help="List books of a translation")
    books_parser.add_argument(
        "--translation",
        "-t",
        default="KJV",
        help="Translation code (default: KJV)",
    )
    books_parser.set_defaults(func=list_books)

    passage_parser = subparsers.add_parser("passage", help="Show a passage")
    passage_parser.add_argument(
        "reference",
        help="Reference such as 'John 3:16-17' or 'Psalm 23'",
    )
    passage_parser.add_argument(
        "--translation",
        "-t",
        help="Translation code (default: configured default)",
    )
    passage_parser.set_defaults(func=show_passage)

    search_parser = subparsers.add_parser("search", help="Search by reference or phrase")
    search_parser.add_argument("query", help="Reference or phrase to search for")
    search_parser.add_argument(
        "--limit",
        "-n",
        type=int,
        default=20,
        help="Maximum results (default: 20)",
    )
    search_parser.set_defaults(func=search)

    # =========================================================================
    # listen command
    # =========================================================================
    listen_parser = subparsers.add_parser("listen", help="Run transcript lines through the engine")
    listen_parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Transcript file, one fragment per line (default: stdin)",
    )
    listen_parser.add_argument(
        "--profile",
        "-p",
        default=None,
        help="Pastor profile id (default: configured active profile)",
    )
    listen_parser.add_argument(
        "--confidence",
        "-c",
        type=float,
        default=1.0,
        help="Recognizer confidence for lines without a prefix (default: 1.0)",
    )
    listen_parser.set_defaults(func=listen)

    # =========================================================================
    # profile commands
    # =========================================================================
    profile_parser = subparsers.add_parser("profile", help="Manage pastor profiles")
    profile_subparsers = profile_parser.add_subparsers(dest="profile_command", help="Profile commands")

    list_parser = profile_subparsers.add_parser("list", help="List profiles")
    list_parser.set_defaults(func=profile_list)

    show_parser = profile_subparsers.add_parser("show", help="Show a profile")
    show_parser.add_argument("profile_id", help="Profile id")
    show_parser.set_defaults(func=profile_show)

    save_parser = profile_subparsers.add_parser("save", help="Create or update a profile")
    save_parser.add_argument("profile_id", help="Profile id")
    save_parser.add_argument("--name", help="Display name")
    save_parser.add_argument(
        "--wake",
        action="append",
        help="Wake phrase (repeatable)",
    )
    save_parser.add_argument(
        "--ignore",
        action="append",
        help="Ignore phrase (repeatable)",
    )
    save_parser.add_argument(
        "--aggressiveness",
        choices=["conservative", "balanced", "responsive"],
        help="Intent aggressiveness",
    )
    save_parser.add_argument(
        "--context-timeout",
        type=float,
        help="Chapter context timeout in seconds",
    )
    save_parser.add_argument(
        "--verse-style",
        choices=["spoken", "numeric"],
        help="How verse numbers are spoken",
    )
    save_parser.add_argument(
        "--activate",
        action="store_true",
        help="Make this the active profile",
    )
    save_parser.set_defaults(func=profile_save)

    delete_parser = profile_subparsers.add_parser("delete", help="Delete a profile")
    delete_parser.add_argument("profile_id", help="Profile id")
    delete_parser.set_defaults(func=profile_delete)

    return parser


def configure_logging(parsed: argparse.Namespace) -> None:
    config = AppConfig.load(Path(parsed.data_path).expanduser() if parsed.data_path else None)
    level = logging.DEBUG if parsed.verbose else getattr(logging, config.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler(sys.stderr)])


def run_cli(args: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Handle profile subcommand without action
    if parsed.command == "profile" and not parsed.profile_command:
        parser.parse_args(["profile", "--help"])
        return 0

    if not hasattr(parsed, "func"):
        parser.print_help()
        return 0

    try:
        configure_logging(parsed)
        return parsed.func(parsed)
    except KeyboardInterrupt:
        console.print("\n[dim]Cancelled.[/dim]")
        return 130
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1


def main() -> None:
    """Entry point for the versecue console script."""
    sys.exit(run_cli())


__all__ = [
    "create_parser",
    "run_cli",
    "main",
    "init_database",
    "list_translations",
    "list_books",
    "show_passage",
    "search",
    "listen",
    "profile_list",
    "profile_show",
    "profile_save",
    "profile_delete",
]


if __name__ == "__main__":
    main()
