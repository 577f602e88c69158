"""Scripture value types for VerseCue.

Plain, immutable records passed between the passage store, the reference
parser and the transcript engine. ORM rows never leave the store; callers
only ever see these dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Literal

DEFAULT_TRANSLATION = "KJV"

Testament = Literal["OT", "NT"]


@dataclass(frozen=True)
class TranslationRecord:
    """A bible translation (e.g. KJV)."""

    id: int
    code: str
    name: str
    language: str = "en"
    copyright: str | None = None


@dataclass(frozen=True)
class BookRecord:
    """A canonical book within one translation.

    Attributes:
        id: Row identifier
        translation_id: Owning translation
        name: Canonical display name ("1 Corinthians")
        abbreviation: Short form ("1 Cor")
        testament: "OT" or "NT"
        position: 1-based canonical order
    """

    id: int
    translation_id: int
    name: str
    abbreviation: str
    testament: Testament
    position: int


@dataclass(frozen=True)
class VerseRecord:
    """A single verse row."""

    id: int
    book_id: int
    chapter: int
    verse: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "book_id": self.book_id,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
        }


@dataclass(frozen=True)
class ScriptureReference:
    """An unresolved scripture query.

    The book is kept exactly as it was typed or spoken; resolving it to a
    canonical book is the store's job.

    Attributes:
        book: Book name as typed/spoken (lowercase after parsing)
        chapter: Chapter number
        verse_start: First verse, or None for a whole chapter
        verse_end: Last verse of a range, or None
        translation: Translation code
        book_from_context: True when book/chapter came from chapter context
    """

    book: str
    chapter: int
    verse_start: int | None = None
    verse_end: int | None = None
    translation: str = DEFAULT_TRANSLATION
    book_from_context: bool = False

    @property
    def has_verse(self) -> bool:
        """Whether the reference names at least one verse."""
        return self.verse_start is not None

    @property
    def is_range(self) -> bool:
        """Whether the reference names a verse range."""
        return self.verse_start is not None and self.verse_end is not None

    def with_book(self, book: str) -> ScriptureReference:
        """Return a copy with a different book name."""
        return replace(self, book=book)

    def cooldown_key(self) -> str:
        """Key identifying this exact reference for cooldown bookkeeping."""
        parts = [
            self.translation,
            self.book,
            str(self.chapter),
            str(self.verse_start) if self.verse_start is not None else "",
            str(self.verse_end) if self.verse_end is not None else "",
        ]
        return ":".join(parts).lower()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        data: dict[str, Any] = {
            "book": self.book,
            "chapter": self.chapter,
            "translation": self.translation,
        }
        if self.verse_start is not None:
            data["verse_start"] = self.verse_start
        if self.verse_end is not None:
            data["verse_end"] = self.verse_end
        if self.book_from_context:
            data["book_from_context"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScriptureReference:
        """Deserialize from dictionary."""
        return cls(
            book=data["book"],
            chapter=int(data["chapter"]),
            verse_start=data.get("verse_start"),
            verse_end=data.get("verse_end"),
            translation=data.get("translation", DEFAULT_TRANSLATION),
            book_from_context=data.get("book_from_context", False),
        )


def format_display_reference(
    book: str,
    chapter: int,
    verse_start: int | None = None,
    verse_end: int | None = None,
) -> str:
    """Build a human-readable reference such as "John 3:16-17".

    The range suffix is only added when the end verse differs from the start.
    """
    display = f"{book} {chapter}"
    if verse_start is not None:
        display += f":{verse_start}"
        if verse_end is not None and verse_end != verse_start:
            display += f"-{verse_end}"
    return display


@dataclass(frozen=True)
class ScripturePassage:
    """A resolved reference with its text.

    Attributes:
        reference: The reference, with the book normalized to its canonical name
        display_reference: Display string ("Psalms 23", "John 3:16")
        text: Verse texts joined with single spaces
        verses: The underlying verse rows in ascending order
    """

    reference: ScriptureReference
    display_reference: str
    text: str
    verses: tuple[VerseRecord, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "reference": self.reference.to_dict(),
            "display_reference": self.display_reference,
            "text": self.text,
            "verses": [v.to_dict() for v in self.verses],
        }


__all__ = [
    "DEFAULT_TRANSLATION",
    "BookRecord",
    "ScripturePassage",
    "ScriptureReference",
    "Testament",
    "TranslationRecord",
    "VerseRecord",
    "format_display_reference",
]
