"""Transcript normalization.

Speech-to-text output is lowercased, spoken numbers are rewritten as digits
and filler words are removed so the reference patterns see "john 3 16"
rather than "um John three sixteen".
"""

from __future__ import annotations

import re

NUMBER_WORDS: dict[str, str] = {
    "one": "1",
    "two": "2",
    "three": "3",
    "four": "4",
    "five": "5",
    "six": "6",
    "seven": "7",
    "eight": "8",
    "nine": "9",
    "ten": "10",
    "eleven": "11",
    "twelve": "12",
    "thirteen": "13",
    "fourteen": "14",
    "fifteen": "15",
    "sixteen": "16",
    "seventeen": "17",
    "eighteen": "18",
    "nineteen": "19",
    "twenty": "20",
    "thirty": "30",
    "forty": "40",
    "fifty": "50",
    "first": "1",
    "second": "2",
    "third": "3",
}

FILLER_WORDS: tuple[str, ...] = ("um", "uh", "er", "ah", "like", "you know")

_NUMBER_RE = re.compile(r"\b(" + "|".join(NUMBER_WORDS) + r")\b")
_FILLER_RE = re.compile(r"\b(?:" + "|".join(re.escape(w) for w in FILLER_WORDS) + r")\b")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_transcript(text: str) -> str:
    """Normalize a transcript fragment for matching.

    Example:
        >>> normalize_transcript("  Um turn to First John chapter Three ")
        'turn to 1 john chapter 3'
    """
    normalized = text.lower().strip()
    normalized = _NUMBER_RE.sub(lambda m: NUMBER_WORDS[m.group(1)], normalized)
    normalized = _FILLER_RE.sub("", normalized)
    return _WHITESPACE_RE.sub(" ", normalized).strip()


__all__ = ["FILLER_WORDS", "NUMBER_WORDS", "normalize_transcript"]
