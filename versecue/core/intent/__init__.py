"""Display-intent detection for VerseCue.

Decides whether a speaker wants scripture shown on screen or is merely
alluding to it. Only display intents (explicit or implicit) continue to
reference extraction; contextual and rhetorical mentions are filtered.

Example usage:
    ```python
    from versecue.core.intent import IntentClassifier, IntentType

    classifier = IntentClassifier(aggressiveness="responsive")
    result = classifier.classify("let's read romans 8:28")
    assert result.intent == IntentType.EXPLICIT_DISPLAY
    ```
"""

from .classifier import IntentClassifier
from .signals import (
    NEGATIVE_SIGNALS,
    STRONG_SIGNALS,
    WEAK_SIGNALS,
    SignalSet,
    SignalWeight,
)
from .taxonomy import (
    AGGRESSIVENESS_MULTIPLIERS,
    ActionThreshold,
    ActionType,
    Aggressiveness,
    IntentClassification,
    IntentThreshold,
    IntentType,
    classify_action,
)

__all__ = [
    # Classifier
    "IntentClassifier",
    # Signals
    "NEGATIVE_SIGNALS",
    "STRONG_SIGNALS",
    "WEAK_SIGNALS",
    "SignalSet",
    "SignalWeight",
    # Taxonomy
    "AGGRESSIVENESS_MULTIPLIERS",
    "ActionThreshold",
    "ActionType",
    "Aggressiveness",
    "IntentClassification",
    "IntentThreshold",
    "IntentType",
    "classify_action",
]
