"""Transcript Processing Engine for VerseCue.

Turns a stream of speech-to-text fragments into queue items. Each fragment
passes through a fixed sequence of gates and is either dropped silently or
emitted as exactly one QueueItem:

1. Normalize (number words to digits, fillers removed)
2. Debounce: same leading text within debounce_ms is dropped
3. Classify intent: contextual and rhetorical mentions are dropped
4. Extract reference: anchored -> inline -> verse-only with chapter context
5. Cooldown: same reference within cooldown_seconds is dropped
6. Resolve passage in the store
7. Combine confidence (intent x recognizer, verse boost, context penalty)
8. Classify action (QUEUE, QUEUE_WITH_WARNING, SUGGEST, IGNORE)
9. Commit cooldown, chapter context and debounce state
10. Emit the QueueItem

Expiry is lazy: timestamps are compared on the next read and no timers are
armed. The engine is not thread-safe; fragments must arrive in order.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..config import EngineOverrides, EngineSettings
from .intent import Aggressiveness, IntentClassification, IntentClassifier, classify_action
from .normalize import normalize_transcript
from .queue import QueueItem, QueueSource
from .reference import ReferenceParser, book_span_candidates
from .scripture import ScriptureReference

if TYPE_CHECKING:
    from .profiles import PastorProfile
    from .store import PassageStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChapterContext:
    """The most recently resolved book and chapter.

    Attributes:
        book: Canonical book name
        chapter: Chapter number
        translation: Translation code
        timestamp: When the reference was resolved (clock seconds)
    """

    book: str
    chapter: int
    translation: str
    timestamp: float

    def is_live(self, now: float, timeout_seconds: float) -> bool:
        """Whether the context may still resolve a bare verse number."""
        return now - self.timestamp <= timeout_seconds


class TranscriptEngine:
    """Stateful fragment-to-queue-item engine.

    Owns its cooldown map, debounce map and chapter context; nothing is
    shared between instances.

    Example:
        >>> engine = TranscriptEngine(store)
        >>> item = engine.process_transcript("Turn with me to John 3:16", 0.95)
        >>> item.display_reference, item.action
        ('John 3:16', <ActionType.QUEUE: 'QUEUE'>)
    """

    def __init__(
        self,
        store: PassageStore,
        settings: EngineSettings | None = None,
        profile: PastorProfile | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the engine.

        Args:
            store: Passage store used for book narrowing and passage lookup
            settings: Tuning values (defaults when None)
            profile: Optional pastor profile to apply
            clock: Time source in seconds; injectable for tests
        """
        self._store = store
        self._clock = clock
        self._settings = settings or EngineSettings()
        self._profile: PastorProfile | None = None

        self._classifier = IntentClassifier()
        self._parser = ReferenceParser(self._settings.default_translation)

        self._cooldowns: dict[str, float] = {}
        self._debounce: dict[str, float] = {}
        self._context: ChapterContext | None = None

        self._apply_settings()
        if profile is not None:
            self.set_profile(profile)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def profile(self) -> PastorProfile | None:
        return self._profile

    @property
    def chapter_context(self) -> ChapterContext | None:
        """Last resolved chapter, whether or not it has expired."""
        return self._context

    # =========================================================================
    # Configuration
    # =========================================================================

    def configure(self, overrides: EngineOverrides | None = None, **fields: Any) -> EngineSettings:
        """Apply partial settings; takes effect from the next fragment.

        Args:
            overrides: Named optional overrides
            **fields: Same fields as keyword arguments (merged over overrides)

        Returns:
            The new effective settings
        """
        if fields:
            base = overrides.model_dump(exclude_unset=True) if overrides else {}
            overrides = EngineOverrides(**{**base, **fields})
        if overrides is not None:
            self._settings = self._settings.merged(overrides)
            self._apply_settings()
            logger.debug(f"Engine settings updated: {overrides.model_dump(exclude_unset=True)}")
        return self._settings

    def set_profile(self, profile: PastorProfile | None) -> None:
        """Activate a pastor profile, or clear it with None.

        A profile applies its aggressiveness and context timeout to the
        settings. Clearing the profile drops its custom phrases but keeps
        the tuning values it applied.
        """
        self._profile = profile
        if profile is None:
            logger.info("Pastor profile cleared")
            return

        self.configure(
            EngineOverrides(
                aggressiveness=Aggressiveness(profile.aggressiveness).value,
                context_timeout_seconds=profile.context_timeout_seconds,
            )
        )
        logger.info(f"Pastor profile active: {profile.id}")

    def reset(self) -> None:
        """Forget cooldowns, debounce history and chapter context."""
        self._cooldowns.clear()
        self._debounce.clear()
        self._context = None
        logger.debug("Engine state reset")

    def _apply_settings(self) -> None:
        self._classifier.aggressiveness = Aggressiveness(self._settings.aggressiveness)
        translation = self._settings.default_translation
        if self._parser.default_translation != translation:
            self._parser = ReferenceParser(translation)
        # Search-as-reference on the shared store follows the engine's translation
        self._store.default_translation = translation

    # =========================================================================
    # Pipeline
    # =========================================================================

    def classify_intent(self, text: str) -> IntentClassification:
        """Classify a raw fragment with the active profile's phrases."""
        return self._classify(normalize_transcript(text))

    def extract_reference(self, text: str) -> ScriptureReference | None:
        """Extract a reference from a raw fragment using current context."""
        return self._extract(normalize_transcript(text), self._clock())

    def process_transcript(
        self,
        text: str,
        recognizer_confidence: float = 1.0,
    ) -> QueueItem | None:
        """Run one fragment through the pipeline.

        Args:
            text: Transcribed text
            recognizer_confidence: Speech recognizer confidence 0.0-1.0

        Returns:
            QueueItem, or None if any gate dropped the fragment
        """
        normalized = normalize_transcript(text)
        if not normalized:
            return None

        now = self._clock()
        settings = self._settings

        debounce_key = normalized[: settings.debounce_key_length]
        last_seen = self._debounce.get(debounce_key)
        if last_seen is not None and (now - last_seen) * 1000 < settings.debounce_ms:
            logger.debug(f"Dropped (debounce): {normalized!r}")
            return None

        classification = self._classify(normalized)
        if not classification.is_display:
            logger.debug(f"Dropped ({classification.intent.value}): {normalized!r}")
            return None

        reference = self._extract(normalized, now)
        if reference is None:
            logger.debug(f"Dropped (no reference): {normalized!r}")
            return None

        cooldown_key = reference.cooldown_key()
        last_actioned = self._cooldowns.get(cooldown_key)
        if last_actioned is not None and now - last_actioned < settings.cooldown_seconds:
            logger.debug(f"Dropped (cooldown): {cooldown_key}")
            return None

        passage = self._store.get_passage(reference)
        if passage is None:
            logger.debug(f"Dropped (unresolved): {cooldown_key}")
            return None

        confidence = classification.confidence * recognizer_confidence
        if reference.has_verse:
            confidence *= settings.verse_boost
        if reference.book_from_context:
            confidence *= settings.context_penalty
        confidence = max(0.0, min(1.0, confidence))

        action = classify_action(classification.intent, confidence)

        self._cooldowns[cooldown_key] = now
        self._context = ChapterContext(
            book=passage.reference.book,
            chapter=passage.reference.chapter,
            translation=passage.reference.translation,
            timestamp=now,
        )
        self._debounce[debounce_key] = now
        self._purge(now)

        item = QueueItem.from_passage(
            passage,
            source=QueueSource.VOICE,
            action=action,
            confidence=confidence,
            intent_type=classification.intent,
            created_at=now,
        )
        logger.info(
            f"Queued {item.display_reference} ({action.value}, "
            f"{classification.intent.value}, confidence={confidence:.2f})"
        )
        return item

    def _classify(self, normalized: str) -> IntentClassification:
        profile = self._profile
        return self._classifier.classify(
            normalized,
            wake_phrases=profile.wake_phrases if profile else (),
            ignore_phrases=profile.ignore_phrases if profile else (),
        )

    def _extract(self, normalized: str, now: float) -> ScriptureReference | None:
        """Find a reference, most specific pattern first.

        Anchored and inline matches only count when their book span narrows
        to a book the store knows; otherwise the next stage is tried. Among
        inline matches the first one with verses in the store wins, so a
        short alias that is also an English word ("it is 3 o'clock") does
        not hide a real reference later in the fragment.
        """
        reference = self._parser.parse(normalized)
        if reference is not None:
            book = self._narrow_book(reference)
            if book is not None:
                return reference.with_book(book)

        first_valid: ScriptureReference | None = None
        for reference in self._parser.find_inline(normalized):
            book = self._narrow_book(reference)
            if book is None:
                continue
            candidate = reference.with_book(book)
            if self._store.get_passage(candidate) is not None:
                return candidate
            if first_valid is None:
                first_valid = candidate
        if first_valid is not None:
            return first_valid

        context = self._context
        if context is None or not context.is_live(now, self._settings.context_timeout_seconds):
            return None

        verses = self._parser.parse_verse_only(normalized)
        if verses is None:
            return None

        verse_start, verse_end = verses
        return ScriptureReference(
            book=context.book,
            chapter=context.chapter,
            verse_start=verse_start,
            verse_end=verse_end,
            translation=context.translation,
            book_from_context=True,
        )

    def _narrow_book(self, reference: ScriptureReference) -> str | None:
        """Longest trailing run of the captured book span that names a book."""
        translation = self._store.get_translation(reference.translation)
        if translation is None:
            return None
        for candidate in book_span_candidates(reference.book):
            if self._store.resolve_book_name(candidate, translation.id) is not None:
                return candidate
        return None

    def _purge(self, now: float) -> None:
        cooldown = self._settings.cooldown_seconds
        debounce_window = 2 * self._settings.debounce_ms / 1000
        self._cooldowns = {k: t for k, t in self._cooldowns.items() if now - t <= cooldown}
        self._debounce = {k: t for k, t in self._debounce.items() if now - t <= debounce_window}


__all__ = ["ChapterContext", "TranscriptEngine"]
