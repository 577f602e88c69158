"""Signal phrases for display-intent classification.

Phrases are matched as substrings of normalized transcript text, so they are
written lowercase and with number words already in digit form.
"""

from __future__ import annotations

from dataclasses import dataclass


class SignalWeight:
    """Score contributed by each kind of matched phrase."""

    STRONG = 2
    WEAK = 1
    NEGATIVE = 2
    PROFILE_WAKE = 3
    PROFILE_IGNORE = 3


STRONG_SIGNALS: tuple[str, ...] = (
    "turn with me to",
    "let's read",
    "put up",
    "open your bibles to",
    "can we show",
    "let's look at",
    "go to",
    "read from",
    "turn to",
    "let's go to",
    "please turn to",
    "if you have your bibles",
    "the bible says in",
)

WEAK_SIGNALS: tuple[str, ...] = (
    "in romans",
    "paul says",
    "the bible tells us",
    "scripture says",
    "we read that",
    "as it says in",
    "according to",
    "it says in",
)

NEGATIVE_SIGNALS: tuple[str, ...] = (
    "paul told them",
    "in essence",
    "basically",
    "so to speak",
    "as they say",
    "metaphorically",
    "similar to",
)


@dataclass(frozen=True)
class SignalSet:
    """Immutable strong/weak/negative phrase lists.

    Example:
        >>> signals = SignalSet.default().extend(strong=["show us"])
        >>> "show us" in signals.strong
        True
    """

    strong: tuple[str, ...] = STRONG_SIGNALS
    weak: tuple[str, ...] = WEAK_SIGNALS
    negative: tuple[str, ...] = NEGATIVE_SIGNALS

    @classmethod
    def default(cls) -> SignalSet:
        return cls()

    def extend(
        self,
        strong: tuple[str, ...] | list[str] = (),
        weak: tuple[str, ...] | list[str] = (),
        negative: tuple[str, ...] | list[str] = (),
    ) -> SignalSet:
        """Return a copy with extra phrases appended (lowercased)."""
        return SignalSet(
            strong=self.strong + tuple(p.lower() for p in strong),
            weak=self.weak + tuple(p.lower() for p in weak),
            negative=self.negative + tuple(p.lower() for p in negative),
        )


__all__ = [
    "NEGATIVE_SIGNALS",
    "STRONG_SIGNALS",
    "SignalSet",
    "SignalWeight",
    "WEAK_SIGNALS",
]
