"""Display-intent classification for transcript fragments.

Scores normalized text against fixed signal phrase lists (plus the active
profile's wake and ignore phrases) and maps the net score to an intent type
with a confidence value.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .signals import SignalSet, SignalWeight
from .taxonomy import Aggressiveness, IntentClassification, IntentThreshold, IntentType

logger = logging.getLogger(__name__)


class IntentClassifier:
    """Phrase-weighted display-intent classifier.

    Every contained phrase contributes its weight: strong +2, weak +1,
    negative -2, profile wake +3, profile ignore -3. The net score is
    scaled by the aggressiveness multiplier before thresholds apply.

    Example:
        >>> classifier = IntentClassifier()
        >>> classifier.classify("turn with me to john 3:16").intent
        <IntentType.EXPLICIT_DISPLAY: 'explicit_display'>
    """

    def __init__(
        self,
        signals: SignalSet | None = None,
        aggressiveness: Aggressiveness | str = Aggressiveness.BALANCED,
    ) -> None:
        self.signals = signals or SignalSet.default()
        self.aggressiveness = Aggressiveness(aggressiveness)

    def classify(
        self,
        text: str,
        wake_phrases: Iterable[str] = (),
        ignore_phrases: Iterable[str] = (),
    ) -> IntentClassification:
        """Classify normalized text.

        Args:
            text: Normalized transcript text
            wake_phrases: Profile phrases scored as strong intent (+3)
            ignore_phrases: Profile phrases scored as negative (-3)

        Returns:
            IntentClassification with matched signal labels
        """
        matched: list[str] = []
        positive = 0.0
        negative = 0.0

        # Profile phrases first so their labels lead the diagnostics
        for phrase in wake_phrases:
            if phrase.lower() in text:
                positive += SignalWeight.PROFILE_WAKE
                matched.append(f"profile:{phrase}")
        for phrase in ignore_phrases:
            if phrase.lower() in text:
                negative += SignalWeight.PROFILE_IGNORE
                matched.append(f"profile-ignore:{phrase}")

        for phrase in self.signals.strong:
            if phrase in text:
                positive += SignalWeight.STRONG
                matched.append(phrase)
        for phrase in self.signals.weak:
            if phrase in text:
                positive += SignalWeight.WEAK
                matched.append(phrase)
        for phrase in self.signals.negative:
            if phrase in text:
                negative += SignalWeight.NEGATIVE
                matched.append(f"negative:{phrase}")

        net = (positive - negative) * self.aggressiveness.multiplier

        if net >= IntentThreshold.EXPLICIT_SCORE:
            intent = IntentType.EXPLICIT_DISPLAY
            confidence = min(
                IntentThreshold.EXPLICIT_CAP,
                IntentThreshold.EXPLICIT_BASE + net * IntentThreshold.SCORE_STEP,
            )
        elif net >= IntentThreshold.IMPLICIT_SCORE:
            intent = IntentType.IMPLICIT_DISPLAY
            confidence = min(
                IntentThreshold.IMPLICIT_CAP,
                IntentThreshold.IMPLICIT_BASE + net * IntentThreshold.SCORE_STEP,
            )
        elif negative > 0:
            intent = IntentType.RHETORICAL_THEMATIC
            confidence = IntentThreshold.RHETORICAL_CONFIDENCE
        else:
            intent = IntentType.CONTEXTUAL_REFERENCE
            confidence = IntentThreshold.CONTEXTUAL_CONFIDENCE

        logger.debug(f"Intent {intent.value} (net={net:.2f}, signals={matched})")

        return IntentClassification(
            intent=intent,
            confidence=confidence,
            positive_score=positive,
            negative_score=negative,
            net_score=net,
            signals=matched,
        )


__all__ = ["IntentClassifier"]
