"""Scripture reference parsing for VerseCue.

Turns a free-text span into a ScriptureReference. Patterns are tried in a
fixed order and the first match wins, so a complete anchored reference
("john 3:16-17") always beats a loose inline one ("turn to john chapter 3")
which in turn beats a bare verse number that needs chapter context.

No bounds checking happens here: "john 99:1" parses fine and simply fails
to resolve later in the store.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from .scripture import DEFAULT_TRANSLATION, ScriptureReference

# Book token: optional leading numeral ("1 john") then one or more words
BOOK_TOKEN = r"\d?\s*[a-z]+(?:\s+[a-z]+)*"

# Range separators accepted in spoken references ("16-18", "16 to 18")
RANGE_SEPARATOR = r"(?:\s*[-–]\s*|\s+(?:to|through)\s+)"

# Keywords that can trail a captured book span and are never part of a name
SPAN_KEYWORDS: frozenset[str] = frozenset({"chapter", "verse", "verses"})

# Longest book name in words ("song of solomon", "the revelation")
MAX_BOOK_WORDS = 4


class ReferenceParser:
    """Layered regex parser for scripture references.

    Anchored patterns match the whole (trimmed, lowercased) string and are
    used for direct lookups such as search-as-reference. The inline pattern
    finds a reference embedded in running speech. The verse-only pattern
    recognises "verse 5" style fragments and yields only verse numbers;
    the caller supplies book and chapter from its own context.
    """

    # Ordered most to least specific: (name, pattern)
    ANCHORED_PATTERNS: list[tuple[str, str]] = [
        ("range", rf"({BOOK_TOKEN})\s+(\d+):(\d+)-(\d+)"),
        ("verse", rf"({BOOK_TOKEN})\s+(\d+):(\d+)"),
        ("chapter", rf"({BOOK_TOKEN})\s+(\d+)"),
    ]

    INLINE_PATTERN: str = (
        r"\b(\d?\s*(?!(?:chapter|verses?)\b)[a-z]+"
        r"(?:\s+(?!(?:chapter|verses?)\b)[a-z]+){0,3})"
        r"\s+(?:chapter\s+)?(\d+)"
        r"(?:(?:\s*[,:]\s*(?:verses?\s+)?|\s+verses?\s+)(\d+)"
        rf"(?:{RANGE_SEPARATOR}(\d+))?)?"
    )

    VERSE_ONLY_PATTERN: str = rf"\b(?:verses?|v\.?)\s*(\d+)(?:{RANGE_SEPARATOR}(\d+))?"

    def __init__(self, default_translation: str = DEFAULT_TRANSLATION) -> None:
        """Initialize the parser with compiled patterns.

        Args:
            default_translation: Translation code given to parsed references
        """
        self.default_translation = default_translation
        self._anchored: list[tuple[str, re.Pattern[str]]] = [
            (name, re.compile(pattern)) for name, pattern in self.ANCHORED_PATTERNS
        ]
        self._inline = re.compile(self.INLINE_PATTERN)
        self._verse_only = re.compile(self.VERSE_ONLY_PATTERN)

    def parse(self, text: str) -> ScriptureReference | None:
        """Parse a complete reference that spans the whole string.

        Args:
            text: Input such as "John 3:16-17", "1 Corinthians 13" or "Psalm 23"

        Returns:
            ScriptureReference with a lowercase book, or None if no pattern matches
        """
        normalized = text.strip().lower()
        if not normalized:
            return None

        for _name, pattern in self._anchored:
            match = pattern.fullmatch(normalized)
            if match:
                return self._build(*match.groups())
        return None

    def parse_inline(self, text: str) -> ScriptureReference | None:
        """Find a book + chapter[, verse[-verse]] reference inside running text.

        Accepts "chapter"/"verse" keywords and a comma as verse delimiter, e.g.
        "turn to romans chapter 8 verse 28" or "john 3, 16".
        """
        return next(self.find_inline(text), None)

    def find_inline(self, text: str) -> Iterator[ScriptureReference]:
        """Yield every inline reference in the text, left to right.

        Speech often carries stray numbers ("in 2020 we read john 3:16"), so
        callers that can validate books use later matches when earlier ones
        do not name a real book. Matches may overlap: "read 1 corinthians 13"
        yields ("read", 1) and then ("1 corinthians", 13).
        """
        normalized = text.strip().lower()
        pos = 0
        while True:
            match = self._inline.search(normalized, pos)
            if match is None:
                return
            yield self._build(*match.groups())
            pos = match.start() + 1

    def parse_verse_only(self, text: str) -> tuple[int, int | None] | None:
        """Find a bare verse reference ("verse 17", "v. 5-7").

        Returns:
            (verse_start, verse_end) or None
        """
        match = self._verse_only.search(text.strip().lower())
        if match is None:
            return None
        start, end = match.groups()
        return int(start, 10), int(end, 10) if end else None

    def _build(
        self,
        book: str,
        chapter: str,
        verse_start: str | None = None,
        verse_end: str | None = None,
    ) -> ScriptureReference:
        return ScriptureReference(
            book=book.strip(),
            chapter=int(chapter, 10),
            verse_start=int(verse_start, 10) if verse_start else None,
            verse_end=int(verse_end, 10) if verse_end else None,
            translation=self.default_translation,
        )


def book_span_candidates(span: str) -> Iterator[str]:
    """Yield possible book names contained at the end of a captured span.

    Spoken references arrive with their lead-in attached ("turn with me to
    john"). Candidates are the trailing word runs, longest first, after
    dropping trailing keywords such as "chapter".

    Example:
        >>> list(book_span_candidates("to 1 john chapter"))
        ['to 1 john', '1 john', 'john']
    """
    words = span.split()
    while words and words[-1] in SPAN_KEYWORDS:
        words.pop()

    start = max(0, len(words) - MAX_BOOK_WORDS)
    for i in range(start, len(words)):
        yield " ".join(words[i:])


def parse_reference(
    text: str,
    default_translation: str = DEFAULT_TRANSLATION,
) -> ScriptureReference | None:
    """Parse a whole-string reference with a throwaway parser.

    Args:
        text: Input such as "John 3:16"
        default_translation: Translation code for the result

    Returns:
        ScriptureReference or None
    """
    return ReferenceParser(default_translation).parse(text)


__all__ = [
    "BOOK_TOKEN",
    "ReferenceParser",
    "book_span_candidates",
    "parse_reference",
]
