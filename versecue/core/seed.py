"""Default scripture data for a fresh passage store.

Seeds the King James Version with the 66-book Protestant canon, every
accepted alternate spelling of each book, and a small set of sample verses.
Book resolution is purely lexical, so the alias table is what decides recall:
an STT mishearing only resolves if it is listed here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .store import PassageStore

logger = logging.getLogger(__name__)


# =============================================================================
# Canon
# =============================================================================

DEFAULT_TRANSLATION_INFO: dict[str, str] = {
    "code": "KJV",
    "name": "King James Version",
    "language": "en",
    "copyright": "Public Domain",
}

# (name, abbreviation, testament) in canonical order; position is index + 1
CANON: list[tuple[str, str, str]] = [
    # Old Testament
    ("Genesis", "Gen", "OT"),
    ("Exodus", "Exod", "OT"),
    ("Leviticus", "Lev", "OT"),
    ("Numbers", "Num", "OT"),
    ("Deuteronomy", "Deut", "OT"),
    ("Joshua", "Josh", "OT"),
    ("Judges", "Judg", "OT"),
    ("Ruth", "Ruth", "OT"),
    ("1 Samuel", "1 Sam", "OT"),
    ("2 Samuel", "2 Sam", "OT"),
    ("1 Kings", "1 Kgs", "OT"),
    ("2 Kings", "2 Kgs", "OT"),
    ("1 Chronicles", "1 Chr", "OT"),
    ("2 Chronicles", "2 Chr", "OT"),
    ("Ezra", "Ezra", "OT"),
    ("Nehemiah", "Neh", "OT"),
    ("Esther", "Esth", "OT"),
    ("Job", "Job", "OT"),
    ("Psalms", "Ps", "OT"),
    ("Proverbs", "Prov", "OT"),
    ("Ecclesiastes", "Eccl", "OT"),
    ("Song of Solomon", "Song", "OT"),
    ("Isaiah", "Isa", "OT"),
    ("Jeremiah", "Jer", "OT"),
    ("Lamentations", "Lam", "OT"),
    ("Ezekiel", "Ezek", "OT"),
    ("Daniel", "Dan", "OT"),
    ("Hosea", "Hos", "OT"),
    ("Joel", "Joel", "OT"),
    ("Amos", "Amos", "OT"),
    ("Obadiah", "Obad", "OT"),
    ("Jonah", "Jonah", "OT"),
    ("Micah", "Mic", "OT"),
    ("Nahum", "Nah", "OT"),
    ("Habakkuk", "Hab", "OT"),
    ("Zephaniah", "Zeph", "OT"),
    ("Haggai", "Hag", "OT"),
    ("Zechariah", "Zech", "OT"),
    ("Malachi", "Mal", "OT"),
    # New Testament
    ("Matthew", "Matt", "NT"),
    ("Mark", "Mark", "NT"),
    ("Luke", "Luke", "NT"),
    ("John", "John", "NT"),
    ("Acts", "Acts", "NT"),
    ("Romans", "Rom", "NT"),
    ("1 Corinthians", "1 Cor", "NT"),
    ("2 Corinthians", "2 Cor", "NT"),
    ("Galatians", "Gal", "NT"),
    ("Ephesians", "Eph", "NT"),
    ("Philippians", "Phil", "NT"),
    ("Colossians", "Col", "NT"),
    ("1 Thessalonians", "1 Thess", "NT"),
    ("2 Thessalonians", "2 Thess", "NT"),
    ("1 Timothy", "1 Tim", "NT"),
    ("2 Timothy", "2 Tim", "NT"),
    ("Titus", "Titus", "NT"),
    ("Philemon", "Phlm", "NT"),
    ("Hebrews", "Heb", "NT"),
    ("James", "Jas", "NT"),
    ("1 Peter", "1 Pet", "NT"),
    ("2 Peter", "2 Pet", "NT"),
    ("1 John", "1 John", "NT"),
    ("2 John", "2 John", "NT"),
    ("3 John", "3 John", "NT"),
    ("Jude", "Jude", "NT"),
    ("Revelation", "Rev", "NT"),
]


# =============================================================================
# Aliases
# =============================================================================

# Ordinary abbreviations and alternate names
BOOK_ALIASES: dict[str, list[str]] = {
    "Genesis": ["Gen", "Gn"],
    "Exodus": ["Exod", "Ex", "Exo"],
    "Leviticus": ["Lev", "Lv"],
    "Numbers": ["Num", "Nm", "Nu"],
    "Deuteronomy": ["Deut", "Dt"],
    "Joshua": ["Josh", "Jos"],
    "Judges": ["Judg", "Jdg", "Jg"],
    "Ruth": ["Ru", "Rth"],
    "1 Samuel": ["1 Sam", "1 Sa", "First Samuel", "1st Samuel"],
    "2 Samuel": ["2 Sam", "2 Sa", "Second Samuel", "2nd Samuel"],
    "1 Kings": ["1 Kgs", "1 Ki", "First Kings", "1st Kings"],
    "2 Kings": ["2 Kgs", "2 Ki", "Second Kings", "2nd Kings"],
    "1 Chronicles": ["1 Chr", "1 Ch", "First Chronicles", "1st Chronicles"],
    "2 Chronicles": ["2 Chr", "2 Ch", "Second Chronicles", "2nd Chronicles"],
    "Ezra": ["Ezr"],
    "Nehemiah": ["Neh", "Ne"],
    "Esther": ["Est", "Esth"],
    "Job": ["Jb"],
    "Psalms": ["Psalm", "Ps", "Psa", "Pss"],
    "Proverbs": ["Prov", "Pr", "Prv"],
    "Ecclesiastes": ["Eccl", "Ecc", "Ec", "Qoh"],
    "Song of Solomon": ["Song", "SoS", "Song of Songs", "Canticles", "Cant"],
    "Isaiah": ["Isa", "Is"],
    "Jeremiah": ["Jer", "Je"],
    "Lamentations": ["Lam", "La"],
    "Ezekiel": ["Ezek", "Eze", "Ez"],
    "Daniel": ["Dan", "Da", "Dn"],
    "Hosea": ["Hos", "Ho"],
    "Joel": ["Joe", "Jl"],
    "Amos": ["Am"],
    "Obadiah": ["Obad", "Ob"],
    "Jonah": ["Jon", "Jnh"],
    "Micah": ["Mic", "Mi"],
    "Nahum": ["Nah", "Na"],
    "Habakkuk": ["Hab", "Hb"],
    "Zephaniah": ["Zeph", "Zep", "Zp"],
    "Haggai": ["Hag", "Hg"],
    "Zechariah": ["Zech", "Zec", "Zc"],
    "Malachi": ["Mal", "Ml"],
    "Matthew": ["Matt", "Mt"],
    "Mark": ["Mk", "Mr"],
    "Luke": ["Lk", "Lu"],
    "John": ["Jn", "Jhn"],
    "Acts": ["Act", "Ac"],
    "Romans": ["Rom", "Ro", "Rm"],
    "1 Corinthians": ["1 Cor", "1 Co", "First Corinthians", "1st Corinthians"],
    "2 Corinthians": ["2 Cor", "2 Co", "Second Corinthians", "2nd Corinthians"],
    "Galatians": ["Gal", "Ga"],
    "Ephesians": ["Eph", "Ephes"],
    "Philippians": ["Phil", "Php"],
    "Colossians": ["Col", "Co"],
    "1 Thessalonians": ["1 Thess", "1 Th", "First Thessalonians", "1st Thessalonians"],
    "2 Thessalonians": ["2 Thess", "2 Th", "Second Thessalonians", "2nd Thessalonians"],
    "1 Timothy": ["1 Tim", "1 Ti", "First Timothy", "1st Timothy"],
    "2 Timothy": ["2 Tim", "2 Ti", "Second Timothy", "2nd Timothy"],
    "Titus": ["Tit", "Ti"],
    "Philemon": ["Phlm", "Phm"],
    "Hebrews": ["Heb"],
    "James": ["Jas", "Jm"],
    "1 Peter": ["1 Pet", "1 Pe", "First Peter", "1st Peter"],
    "2 Peter": ["2 Pet", "2 Pe", "Second Peter", "2nd Peter"],
    "1 John": ["1 Jn", "First John", "1st John"],
    "2 John": ["2 Jn", "Second John", "2nd John"],
    "3 John": ["3 Jn", "Third John", "3rd John"],
    "Jude": ["Jud", "Jd"],
    "Revelation": ["Rev", "Re", "The Revelation", "Apocalypse"],
}

# Known speech-to-text mishearings, stored with is_stt_correction set
STT_CORRECTIONS: dict[str, list[str]] = {
    "1 Corinthians": ["One Corinthians", "Won Corinthians"],
    "Philippians": ["Philippines", "Phillipians"],
    "Revelation": ["Revelations"],
}


# =============================================================================
# Sample Verses
# =============================================================================

# book -> [(chapter, verse, text), ...]
SAMPLE_VERSES: dict[str, list[tuple[int, int, str]]] = {
    "John": [
        (3, 16, "For God so loved the world, that he gave his only begotten Son, that whosoever believeth in him should not perish, but have everlasting life."),
        (3, 17, "For God sent not his Son into the world to condemn the world; but that the world through him might be saved."),
    ],
    "Psalms": [
        (23, 1, "The LORD is my shepherd; I shall not want."),
        (23, 2, "He maketh me to lie down in green pastures: he leadeth me beside the still waters."),
        (23, 3, "He restoreth my soul: he leadeth me in the paths of righteousness for his name's sake."),
        (23, 4, "Yea, though I walk through the valley of the shadow of death, I will fear no evil: for thou art with me; thy rod and thy staff they comfort me."),
        (23, 5, "Thou preparest a table before me in the presence of mine enemies: thou anointest my head with oil; my cup runneth over."),
        (23, 6, "Surely goodness and mercy shall follow me all the days of my life: and I will dwell in the house of the LORD for ever."),
    ],
    "Romans": [
        (8, 28, "And we know that all things work together for good to them that love God, to them who are the called according to his purpose."),
        (15, 13, "Now the God of hope fill you with all joy and peace in believing, that ye may abound in hope, through the power of the Holy Ghost."),
    ],
    "Philippians": [
        (4, 13, "I can do all things through Christ which strengtheneth me."),
    ],
    "Jeremiah": [
        (29, 11, "For I know the thoughts that I think toward you, saith the LORD, thoughts of peace, and not of evil, to give you an expected end."),
    ],
    "Isaiah": [
        (41, 10, "Fear thou not; for I am with thee: be not dismayed; for I am thy God: I will strengthen thee; yea, I will help thee; yea, I will uphold thee with the right hand of my righteousness."),
    ],
    "Matthew": [
        (11, 28, "Come unto me, all ye that labour and are heavy laden, and I will give you rest."),
        (11, 29, "Take my yoke upon you, and learn of me; for I am meek and lowly in heart: and ye shall find rest unto your souls."),
        (11, 30, "For my yoke is easy, and my burden is light."),
    ],
    "Hebrews": [
        (11, 1, "Now faith is the substance of things hoped for, the evidence of things not seen."),
    ],
    "Proverbs": [
        (3, 5, "Trust in the LORD with all thine heart; and lean not unto thine own understanding."),
        (3, 6, "In all thy ways acknowledge him, and he shall direct thy paths."),
    ],
}


def seed_default_data(store: PassageStore) -> bool:
    """Seed the default translation, canon, aliases and sample verses.

    Idempotent: does nothing if the default translation already exists.
    Everything is written in one transaction, so an interrupted seed leaves
    no translation row behind and the next call starts over.

    Args:
        store: An initialized passage store

    Returns:
        True if data was inserted, False if it was already present
    """
    code = DEFAULT_TRANSLATION_INFO["code"]
    alias_count = 0
    verse_count = 0

    with store.transaction():
        if store.get_translation(code) is not None:
            logger.debug(f"Translation {code} already seeded")
            return False

        translation = store.add_translation(**DEFAULT_TRANSLATION_INFO)

        for position, (name, abbreviation, testament) in enumerate(CANON, start=1):
            book = store.add_book(
                translation_id=translation.id,
                name=name,
                abbreviation=abbreviation,
                testament=testament,
                position=position,
            )

            # The lowercase canonical name is an alias too
            for alias in [name, *BOOK_ALIASES.get(name, [])]:
                alias_count += store.add_alias(book.id, alias)
            for alias in STT_CORRECTIONS.get(name, []):
                alias_count += store.add_alias(book.id, alias, is_stt_correction=True)

            verse_count += store.add_verses(book.id, SAMPLE_VERSES.get(name, []))

    logger.info(
        f"Seeded {code}: {len(CANON)} books, {alias_count} aliases, {verse_count} verses"
    )
    return True


def sample_verse_count() -> int:
    """Total number of bundled sample verses."""
    return sum(len(verses) for verses in SAMPLE_VERSES.values())


__all__ = [
    "BOOK_ALIASES",
    "CANON",
    "DEFAULT_TRANSLATION_INFO",
    "SAMPLE_VERSES",
    "STT_CORRECTIONS",
    "sample_verse_count",
    "seed_default_data",
]
