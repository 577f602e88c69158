"""SQLAlchemy ORM schema for the passage store.

Tables:
- translations: one row per bible translation
- books: canonical books, ordered by position within a translation
- book_aliases: lowercase alternate spellings, including STT corrections
- verses: verse text keyed by (book, chapter, verse)

A full-text index (verses_fts) is created alongside these tables by
PassageStore; it is an FTS5 virtual table and has no ORM mapping.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, validates

from .scripture import BookRecord, TranslationRecord, VerseRecord


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Translation(Base):
    __tablename__ = "translations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(16), unique=True)
    name: Mapped[str] = mapped_column(String(128))
    language: Mapped[str] = mapped_column(String(16), default="en")
    copyright: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    books: Mapped[List["Book"]] = relationship(
        back_populates="translation",
        order_by="Book.position",
    )

    def to_record(self) -> TranslationRecord:
        return TranslationRecord(
            id=self.id,
            code=self.code,
            name=self.name,
            language=self.language,
            copyright=self.copyright,
        )

    def __repr__(self) -> str:
        return f"<Translation {self.code}>"


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    translation_id: Mapped[int] = mapped_column(ForeignKey("translations.id"))
    name: Mapped[str] = mapped_column(String(64))
    abbreviation: Mapped[str] = mapped_column(String(16))
    testament: Mapped[str] = mapped_column(String(2))
    position: Mapped[int] = mapped_column(Integer)

    translation: Mapped[Translation] = relationship(back_populates="books")
    aliases: Mapped[List["BookAlias"]] = relationship(back_populates="book")
    verses: Mapped[List["Verse"]] = relationship(back_populates="book")

    __table_args__ = (
        UniqueConstraint("translation_id", "position", name="uq_books_translation_position"),
        UniqueConstraint("translation_id", "name", name="uq_books_translation_name"),
        CheckConstraint("testament IN ('OT', 'NT')", name="ck_books_testament"),
        Index("idx_books_translation", "translation_id"),
    )

    def to_record(self) -> BookRecord:
        return BookRecord(
            id=self.id,
            translation_id=self.translation_id,
            name=self.name,
            abbreviation=self.abbreviation,
            testament=self.testament,  # type: ignore[arg-type]
            position=self.position,
        )

    def __repr__(self) -> str:
        return f"<Book {self.position}: {self.name}>"


class BookAlias(Base):
    __tablename__ = "book_aliases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(ForeignKey("books.id"))
    alias: Mapped[str] = mapped_column(String(64))
    is_stt_correction: Mapped[bool] = mapped_column(Boolean, default=False)

    book: Mapped[Book] = relationship(back_populates="aliases")

    __table_args__ = (
        UniqueConstraint("book_id", "alias", name="uq_book_aliases_book_alias"),
        Index("idx_book_aliases_alias", "alias"),
    )

    @validates("alias")
    def _lowercase_alias(self, key: str, value: str) -> str:
        return value.strip().lower()

    def __repr__(self) -> str:
        return f"<BookAlias {self.alias!r} -> {self.book_id}>"


class Verse(Base):
    __tablename__ = "verses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(ForeignKey("books.id"))
    chapter: Mapped[int] = mapped_column(Integer)
    verse: Mapped[int] = mapped_column(Integer)
    text: Mapped[str] = mapped_column(Text)

    book: Mapped[Book] = relationship(back_populates="verses")

    __table_args__ = (
        UniqueConstraint("book_id", "chapter", "verse", name="uq_verses_book_chapter_verse"),
        Index("idx_verses_chapter", "book_id", "chapter"),
    )

    def to_record(self) -> VerseRecord:
        return VerseRecord(
            id=self.id,
            book_id=self.book_id,
            chapter=self.chapter,
            verse=self.verse,
            text=self.text,
        )

    def __repr__(self) -> str:
        return f"<Verse {self.book_id} {self.chapter}:{self.verse}>"


__all__ = ["Base", "Book", "BookAlias", "Translation", "Verse"]
