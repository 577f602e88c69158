"""Intent and action taxonomy for VerseCue.

Defines the display-intent types the classifier produces, the actions the
engine attaches to queue items and the aggressiveness levels that scale
intent scores.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IntentType(str, Enum):
    """What the speaker is doing with scripture."""

    EXPLICIT_DISPLAY = "explicit_display"  # "turn with me to john 3:16"
    IMPLICIT_DISPLAY = "implicit_display"  # "as it says in romans 8"
    CONTEXTUAL_REFERENCE = "contextual_reference"  # passing mention
    RHETORICAL_THEMATIC = "rhetorical_thematic"  # "basically like the prodigal son"

    @property
    def is_display(self) -> bool:
        """Whether this intent may lead to a queued passage."""
        return self in (IntentType.EXPLICIT_DISPLAY, IntentType.IMPLICIT_DISPLAY)


class ActionType(str, Enum):
    """What the operator UI should do with a queue item."""

    QUEUE = "QUEUE"
    QUEUE_WITH_WARNING = "QUEUE_WITH_WARNING"
    SUGGEST = "SUGGEST"
    IGNORE = "IGNORE"


class Aggressiveness(str, Enum):
    """How readily ambiguous signals count as display intent."""

    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    RESPONSIVE = "responsive"

    @property
    def multiplier(self) -> float:
        return AGGRESSIVENESS_MULTIPLIERS[self]


AGGRESSIVENESS_MULTIPLIERS: dict[Aggressiveness, float] = {
    Aggressiveness.CONSERVATIVE: 0.8,
    Aggressiveness.BALANCED: 1.0,
    Aggressiveness.RESPONSIVE: 1.2,
}


class IntentThreshold:
    """Score thresholds and confidence values for intent classification.

    - EXPLICIT (net >= 2): confidence 0.7 + net*0.1, capped at 0.95
    - IMPLICIT (net >= 1): confidence 0.5 + net*0.1, capped at 0.8
    - Any negative signal below that: rhetorical at 0.3
    - Otherwise: contextual at 0.4
    """

    EXPLICIT_SCORE = 2.0
    IMPLICIT_SCORE = 1.0

    EXPLICIT_BASE = 0.7
    EXPLICIT_CAP = 0.95
    IMPLICIT_BASE = 0.5
    IMPLICIT_CAP = 0.8
    SCORE_STEP = 0.1

    RHETORICAL_CONFIDENCE = 0.3
    CONTEXTUAL_CONFIDENCE = 0.4


class ActionThreshold:
    """Combined-confidence thresholds for action classification."""

    EXPLICIT_QUEUE = 0.7
    IMPLICIT_MIN = 0.6
    IMPLICIT_QUEUE = 0.8
    SUGGEST = 0.5


@dataclass
class IntentClassification:
    """Result of intent classification.

    Attributes:
        intent: Classified intent type
        confidence: Intent confidence 0.0-1.0
        positive_score: Sum of matched positive signal weights
        negative_score: Sum of matched negative signal weights
        net_score: (positive - negative) * aggressiveness multiplier
        signals: Labels of every matched signal (for diagnostics)
    """

    intent: IntentType
    confidence: float
    positive_score: float = 0.0
    negative_score: float = 0.0
    net_score: float = 0.0
    signals: list[str] = field(default_factory=list)

    @property
    def is_display(self) -> bool:
        return self.intent.is_display


def classify_action(intent: IntentType, confidence: float) -> ActionType:
    """Map intent type and combined confidence to an operator action.

    Args:
        intent: Classified intent type
        confidence: Combined confidence (intent x recognizer, adjusted)

    Returns:
        QUEUE, QUEUE_WITH_WARNING, SUGGEST or IGNORE
    """
    if intent == IntentType.EXPLICIT_DISPLAY and confidence >= ActionThreshold.EXPLICIT_QUEUE:
        return ActionType.QUEUE
    if intent == IntentType.IMPLICIT_DISPLAY and confidence >= ActionThreshold.IMPLICIT_MIN:
        if confidence >= ActionThreshold.IMPLICIT_QUEUE:
            return ActionType.QUEUE
        return ActionType.QUEUE_WITH_WARNING
    if confidence >= ActionThreshold.SUGGEST:
        return ActionType.SUGGEST
    return ActionType.IGNORE


__all__ = [
    "AGGRESSIVENESS_MULTIPLIERS",
    "ActionThreshold",
    "ActionType",
    "Aggressiveness",
    "IntentClassification",
    "IntentThreshold",
    "IntentType",
    "classify_action",
]
