"""Passage store for VerseCue.

Authoritative source of scripture text and book identity, backed by a
SQLite file through SQLAlchemy. Resolves spoken or typed book names to
canonical books via the alias table, serves exact chapter/verse ranges and
runs phrase searches over verse text with an FTS5 index.

Absent data is never an error: lookups return None or an empty list.
Failures of the database itself raise StoreUnavailableError.

Example:
    >>> store = PassageStore(Path("~/.versecue/scripture.db").expanduser())
    >>> store.initialize()
    >>> passage = store.get_passage(ScriptureReference("jn", 3, 16))
    >>> passage.display_reference
    'John 3:16'
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, func, select, text
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .errors import StoreUnavailableError
from .models import Base, Book, BookAlias, Translation, Verse
from .reference import ReferenceParser
from .scripture import (
    DEFAULT_TRANSLATION,
    BookRecord,
    ScripturePassage,
    ScriptureReference,
    TranslationRecord,
    VerseRecord,
    format_display_reference,
)

logger = logging.getLogger(__name__)

# External-content FTS5 index over verses.text, kept in sync by triggers
SEARCH_INDEX_DDL: list[str] = [
    """
    CREATE VIRTUAL TABLE IF NOT EXISTS verses_fts USING fts5(
        text,
        content='verses',
        content_rowid='id'
    )
    """,
    """
    CREATE TRIGGER IF NOT EXISTS verses_fts_insert AFTER INSERT ON verses BEGIN
        INSERT INTO verses_fts(rowid, text) VALUES (new.id, new.text);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS verses_fts_delete AFTER DELETE ON verses BEGIN
        INSERT INTO verses_fts(verses_fts, rowid, text) VALUES ('delete', old.id, old.text);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS verses_fts_update AFTER UPDATE ON verses BEGIN
        INSERT INTO verses_fts(verses_fts, rowid, text) VALUES ('delete', old.id, old.text);
        INSERT INTO verses_fts(rowid, text) VALUES (new.id, new.text);
    END
    """,
]

SEARCH_QUERY = text(
    """
    SELECT v.id, v.book_id, v.chapter, v.verse, v.text,
           b.name AS book_name, t.code AS translation_code
    FROM verses_fts
    JOIN verses v ON v.id = verses_fts.rowid
    JOIN books b ON b.id = v.book_id
    JOIN translations t ON t.id = b.translation_id
    WHERE verses_fts MATCH :query
    ORDER BY verses_fts.rank
    LIMIT :limit
    """
)

DEFAULT_SEARCH_LIMIT = 20


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def to_fts_phrase(query: str) -> str:
    """Quote a raw query as a single FTS5 phrase.

    Embedded double quotes are doubled rather than rejected, so any user
    input is a valid MATCH expression.
    """
    return '"' + query.replace('"', '""') + '"'


class PassageStore:
    """Translations, books, aliases and verses in a SQLite database.

    Attributes:
        database_path: Backing file, or None for a private in-memory database
        parser: Reference parser used for search-as-reference
    """

    def __init__(
        self,
        database_path: Path | str | None = None,
        default_translation: str = DEFAULT_TRANSLATION,
        echo: bool = False,
    ) -> None:
        """Open (but do not initialize) the store.

        Args:
            database_path: SQLite file path; None for an in-memory database
            default_translation: Translation code for parsed references
            echo: Log SQL statements (debugging)
        """
        self.database_path = Path(database_path) if database_path is not None else None
        self.parser = ReferenceParser(default_translation)
        self._active_session: Session | None = None

        if self.database_path is None:
            self._engine = create_engine(
                "sqlite://",
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
            self._engine = create_engine(f"sqlite:///{self.database_path}", echo=echo)

        event.listen(self._engine, "connect", _enable_foreign_keys)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)

    @property
    def default_translation(self) -> str:
        """Translation code given to references parsed by this store."""
        return self.parser.default_translation

    @default_translation.setter
    def default_translation(self, code: str) -> None:
        if code != self.parser.default_translation:
            self.parser = ReferenceParser(code)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize(self, seed: bool = True) -> None:
        """Create the schema and search index, optionally seeding defaults.

        Safe to call on an existing database.

        Args:
            seed: Insert the default translation and sample verses if missing

        Raises:
            StoreUnavailableError: If the database cannot be created or opened
        """
        try:
            Base.metadata.create_all(self._engine)
            with self._engine.begin() as conn:
                if self.database_path is not None:
                    conn.exec_driver_sql("PRAGMA journal_mode=WAL")
                for statement in SEARCH_INDEX_DDL:
                    conn.exec_driver_sql(statement)
        except (SQLAlchemyError, sqlite3.Error) as e:
            raise StoreUnavailableError(f"Failed to initialize passage store: {e}") from e

        logger.info(f"Passage store ready at {self.database_path or ':memory:'}")

        if seed:
            from .seed import seed_default_data

            seed_default_data(self)

    def rebuild_search_index(self) -> None:
        """Rebuild the full-text index from the verses table (after bulk loads)."""
        with self._session() as session:
            session.execute(text("INSERT INTO verses_fts(verses_fts) VALUES ('rebuild')"))
        logger.info("Rebuilt full-text search index")

    def close(self) -> None:
        """Release all database connections."""
        self._engine.dispose()

    def __enter__(self) -> PassageStore:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run every store call in the block as one transaction.

        Nothing is committed unless the whole block completes; any exception
        (including KeyboardInterrupt) rolls back all writes made inside it.

        Example:
            >>> with store.transaction():
            ...     book = store.add_book(translation.id, "Tobit", "Tob", "AP", 67)
            ...     store.add_alias(book.id, "tob")
        """
        if self._active_session is not None:
            yield
            return

        with self._session() as session:
            self._active_session = session
            try:
                yield
            finally:
                self._active_session = None

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Transactional scope around a series of operations."""
        if self._active_session is not None:
            yield self._active_session
            return

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Passage store error: {e}")
            raise StoreUnavailableError(f"Passage store unavailable: {e}") from e
        finally:
            session.close()

    # =========================================================================
    # Reads
    # =========================================================================

    def list_translations(self) -> list[TranslationRecord]:
        """All translations in insertion order."""
        with self._session() as session:
            rows = session.scalars(select(Translation).order_by(Translation.id))
            return [t.to_record() for t in rows]

    def get_translation(self, code: str) -> TranslationRecord | None:
        """Look up a translation by code (case-insensitive)."""
        with self._session() as session:
            translation = self._find_translation(session, code)
            return translation.to_record() if translation else None

    def list_books(self, translation_id: int) -> list[BookRecord]:
        """Books of a translation in canonical order."""
        with self._session() as session:
            rows = session.scalars(
                select(Book)
                .where(Book.translation_id == translation_id)
                .order_by(Book.position)
            )
            return [b.to_record() for b in rows]

    def resolve_book_name(self, name: str, translation_id: int) -> BookRecord | None:
        """Resolve a book name or alias to a canonical book.

        Tries a case-insensitive match on the canonical name, then on any
        alias of that translation's books. No partial or edit-distance
        matching: every accepted spelling must be in the alias table.

        Args:
            name: Book name as typed or spoken ("JOHN", "jn", "philippines")
            translation_id: Translation to search within

        Returns:
            BookRecord, or None if neither name nor alias matches
        """
        with self._session() as session:
            book = self._resolve_book(session, name, translation_id)
            return book.to_record() if book else None

    def get_passage(self, reference: ScriptureReference) -> ScripturePassage | None:
        """Fetch the verses a reference names.

        Verse selection:
        - verse_start and verse_end: every verse in [start, end], ascending
        - verse_start only: exactly that verse
        - neither: the whole chapter, ascending

        Args:
            reference: Reference with a translation code and book name

        Returns:
            ScripturePassage with the canonical book name, or None if the
            translation, book or verses do not exist
        """
        with self._session() as session:
            translation = self._find_translation(session, reference.translation)
            if translation is None:
                logger.debug(f"Unknown translation: {reference.translation}")
                return None

            book = self._resolve_book(session, reference.book, translation.id)
            if book is None:
                logger.debug(f"Unresolved book: {reference.book!r}")
                return None

            stmt = select(Verse).where(
                Verse.book_id == book.id,
                Verse.chapter == reference.chapter,
            )
            if reference.verse_start is not None and reference.verse_end is not None:
                stmt = stmt.where(
                    Verse.verse >= reference.verse_start,
                    Verse.verse <= reference.verse_end,
                )
            elif reference.verse_start is not None:
                stmt = stmt.where(Verse.verse == reference.verse_start)

            verses = [v.to_record() for v in session.scalars(stmt.order_by(Verse.verse))]
            book_name = book.name

        if not verses:
            logger.debug(f"No verses for {book_name} {reference.chapter}")
            return None

        return ScripturePassage(
            reference=reference.with_book(book_name),
            display_reference=format_display_reference(
                book_name,
                reference.chapter,
                reference.verse_start,
                reference.verse_end,
            ),
            text=" ".join(v.text for v in verses),
            verses=tuple(verses),
        )

    def search_scripture(
        self,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> list[ScripturePassage]:
        """Search by reference first, then by phrase in verse text.

        A query that parses as a reference and resolves to a real passage
        returns just that passage. Otherwise the query is matched as an exact
        phrase against the full-text index, ranked by relevance.

        Args:
            query: "John 3:16" or "shadow of death"
            limit: Maximum number of text hits

        Returns:
            List of passages; empty for blank queries or no hits
        """
        trimmed = query.strip()
        if not trimmed:
            return []

        reference = self.parser.parse(trimmed)
        if reference is not None:
            passage = self.get_passage(reference)
            if passage is not None:
                return [passage]

        with self._session() as session:
            rows = (
                session.execute(SEARCH_QUERY, {"query": to_fts_phrase(trimmed), "limit": limit})
                .mappings()
                .all()
            )

        results: list[ScripturePassage] = []
        for row in rows:
            verse = VerseRecord(
                id=row["id"],
                book_id=row["book_id"],
                chapter=row["chapter"],
                verse=row["verse"],
                text=row["text"],
            )
            reference = ScriptureReference(
                book=row["book_name"],
                chapter=verse.chapter,
                verse_start=verse.verse,
                translation=row["translation_code"],
            )
            results.append(
                ScripturePassage(
                    reference=reference,
                    display_reference=format_display_reference(
                        row["book_name"], verse.chapter, verse.verse
                    ),
                    text=verse.text,
                    verses=(verse,),
                )
            )
        logger.debug(f"Text search {trimmed!r}: {len(results)} hits")
        return results

    def parse_reference(self, text: str) -> ScriptureReference | None:
        """Parse a whole-string reference ("John 3:16") without resolving it."""
        return self.parser.parse(text)

    # =========================================================================
    # Writes (seeding and imports)
    # =========================================================================

    def add_translation(
        self,
        code: str,
        name: str,
        language: str = "en",
        copyright: str | None = None,
    ) -> TranslationRecord:
        """Insert a translation."""
        with self._session() as session:
            translation = Translation(code=code, name=name, language=language, copyright=copyright)
            session.add(translation)
            session.flush()
            return translation.to_record()

    def add_book(
        self,
        translation_id: int,
        name: str,
        abbreviation: str,
        testament: str,
        position: int,
    ) -> BookRecord:
        """Insert a book into a translation."""
        with self._session() as session:
            book = Book(
                translation_id=translation_id,
                name=name,
                abbreviation=abbreviation,
                testament=testament,
                position=position,
            )
            session.add(book)
            session.flush()
            return book.to_record()

    def add_alias(self, book_id: int, alias: str, is_stt_correction: bool = False) -> int:
        """Register an alias for a book.

        Returns:
            1 if inserted, 0 if the book already had this alias
        """
        stmt = (
            sqlite_insert(BookAlias)
            .values(book_id=book_id, alias=alias.strip().lower(), is_stt_correction=is_stt_correction)
            .on_conflict_do_nothing()
        )
        with self._session() as session:
            return session.execute(stmt).rowcount

    def add_verses(self, book_id: int, verses: Iterable[tuple[int, int, str]]) -> int:
        """Insert (chapter, verse, text) rows, skipping ones that already exist.

        Returns:
            Number of verses inserted
        """
        inserted = 0
        with self._session() as session:
            for chapter, verse, verse_text in verses:
                stmt = (
                    sqlite_insert(Verse)
                    .values(book_id=book_id, chapter=chapter, verse=verse, text=verse_text)
                    .on_conflict_do_nothing()
                )
                inserted += session.execute(stmt).rowcount
        return inserted

    # =========================================================================
    # Helpers
    # =========================================================================

    def _find_translation(self, session: Session, code: str) -> Translation | None:
        return session.scalars(
            select(Translation).where(func.upper(Translation.code) == code.strip().upper())
        ).first()

    def _resolve_book(self, session: Session, name: str, translation_id: int) -> Book | None:
        key = name.strip().lower()
        if not key:
            return None

        book = session.scalars(
            select(Book).where(
                Book.translation_id == translation_id,
                func.lower(Book.name) == key,
            )
        ).first()
        if book is not None:
            return book

        return session.scalars(
            select(Book)
            .join(BookAlias, BookAlias.book_id == Book.id)
            .where(
                Book.translation_id == translation_id,
                func.lower(BookAlias.alias) == key,
            )
            .order_by(Book.position)
        ).first()


__all__ = [
    "DEFAULT_SEARCH_LIMIT",
    "PassageStore",
    "to_fts_phrase",
]
