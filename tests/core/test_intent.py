"""Tests for VerseCue display-intent classification.

Tests cover:
- Signal scoring (strong, weak, negative)
- Classification thresholds and confidence values
- Aggressiveness multipliers
- Profile wake and ignore phrases
- Action classification
"""

from __future__ import annotations

import pytest

from versecue.core.intent import (
    ActionType,
    Aggressiveness,
    IntentClassifier,
    IntentType,
    SignalSet,
    classify_action,
)
from versecue.core.normalize import normalize_transcript

# ============================================================================
# Classifier Tests
# ============================================================================


class TestIntentClassifier:
    """Tests for phrase-weighted classification."""

    @pytest.fixture
    def classifier(self) -> IntentClassifier:
        return IntentClassifier()

    def test_strong_signal_is_explicit(self, classifier: IntentClassifier) -> None:
        result = classifier.classify("turn with me to john 3:16")
        assert result.intent == IntentType.EXPLICIT_DISPLAY
        assert result.confidence == pytest.approx(0.9)
        assert result.signals == ["turn with me to"]

    def test_explicit_confidence_capped(self, classifier: IntentClassifier) -> None:
        """Many strong signals never exceed 0.95."""
        result = classifier.classify("please turn to, let's read, open your bibles to john")
        assert result.intent == IntentType.EXPLICIT_DISPLAY
        assert result.confidence == pytest.approx(0.95)

    def test_weak_signal_is_implicit(self, classifier: IntentClassifier) -> None:
        result = classifier.classify("paul says we are more than conquerors")
        assert result.intent == IntentType.IMPLICIT_DISPLAY
        assert result.confidence == pytest.approx(0.6)

    def test_overlapping_weak_signals_add_up(self, classifier: IntentClassifier) -> None:
        """'as it says in romans' matches three weak phrases."""
        result = classifier.classify("as it says in romans 8")
        assert result.positive_score == 3
        assert result.intent == IntentType.EXPLICIT_DISPLAY

    def test_negative_signals_are_rhetorical(self, classifier: IntentClassifier) -> None:
        result = classifier.classify("he basically said it's being lost, similar to the prodigal son")
        assert result.intent == IntentType.RHETORICAL_THEMATIC
        assert result.confidence == pytest.approx(0.3)
        assert "negative:basically" in result.signals
        assert "negative:similar to" in result.signals

    def test_negative_outweighs_positive(self, classifier: IntentClassifier) -> None:
        result = classifier.classify("in essence, let's read it metaphorically")
        assert result.net_score == pytest.approx(-2)
        assert result.intent == IntentType.RHETORICAL_THEMATIC

    def test_no_signals_is_contextual(self, classifier: IntentClassifier) -> None:
        result = classifier.classify("john 3:16 is a famous verse")
        assert result.intent == IntentType.CONTEXTUAL_REFERENCE
        assert result.confidence == pytest.approx(0.4)
        assert result.signals == []

    def test_display_flag(self, classifier: IntentClassifier) -> None:
        assert classifier.classify("let's read john 3").is_display
        assert not classifier.classify("good morning").is_display


class TestAggressiveness:
    """Tests for aggressiveness multipliers."""

    def test_multipliers(self) -> None:
        assert Aggressiveness.CONSERVATIVE.multiplier == 0.8
        assert Aggressiveness.BALANCED.multiplier == 1.0
        assert Aggressiveness.RESPONSIVE.multiplier == 1.2

    def test_conservative_drops_weak_signal(self) -> None:
        classifier = IntentClassifier(aggressiveness="conservative")
        result = classifier.classify("paul says we are more than conquerors")
        assert result.net_score == pytest.approx(0.8)
        assert result.intent == IntentType.CONTEXTUAL_REFERENCE

    def test_responsive_boosts_weak_signal(self) -> None:
        classifier = IntentClassifier(aggressiveness=Aggressiveness.RESPONSIVE)
        result = classifier.classify("paul says we are more than conquerors")
        assert result.intent == IntentType.IMPLICIT_DISPLAY
        assert result.confidence == pytest.approx(0.62)

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError):
            IntentClassifier(aggressiveness="reckless")


class TestProfilePhrases:
    """Tests for wake and ignore phrases."""

    @pytest.fixture
    def classifier(self) -> IntentClassifier:
        return IntentClassifier()

    def test_wake_phrase(self, classifier: IntentClassifier) -> None:
        result = classifier.classify("show us john 3:16", wake_phrases=["Show Us"])
        assert result.positive_score == 3
        assert result.intent == IntentType.EXPLICIT_DISPLAY
        assert result.signals[0] == "profile:Show Us"

    def test_ignore_phrase(self, classifier: IntentClassifier) -> None:
        result = classifier.classify("let's read, for example, john 3:16", ignore_phrases=["for example"])
        assert result.negative_score == 3
        assert result.intent == IntentType.RHETORICAL_THEMATIC
        assert "profile-ignore:for example" in result.signals

    def test_custom_signal_set(self) -> None:
        classifier = IntentClassifier(signals=SignalSet.default().extend(strong=["Bring Up"]))
        assert classifier.classify("bring up romans 8").intent == IntentType.EXPLICIT_DISPLAY


# ============================================================================
# Action Tests
# ============================================================================


class TestClassifyAction:
    """Tests for action classification from combined confidence."""

    @pytest.mark.parametrize(
        ("intent", "confidence", "expected"),
        [
            (IntentType.EXPLICIT_DISPLAY, 0.99, ActionType.QUEUE),
            (IntentType.EXPLICIT_DISPLAY, 0.7, ActionType.QUEUE),
            (IntentType.EXPLICIT_DISPLAY, 0.65, ActionType.SUGGEST),
            (IntentType.IMPLICIT_DISPLAY, 0.85, ActionType.QUEUE),
            (IntentType.IMPLICIT_DISPLAY, 0.66, ActionType.QUEUE_WITH_WARNING),
            (IntentType.IMPLICIT_DISPLAY, 0.55, ActionType.SUGGEST),
            (IntentType.EXPLICIT_DISPLAY, 0.3, ActionType.IGNORE),
            (IntentType.CONTEXTUAL_REFERENCE, 0.9, ActionType.SUGGEST),
        ],
    )
    def test_thresholds(self, intent: IntentType, confidence: float, expected: ActionType) -> None:
        assert classify_action(intent, confidence) == expected


class TestDefaultSignals:
    """Tests for the shipped phrase lists."""

    def test_phrases_survive_normalization(self) -> None:
        """Classification runs on normalized text, so every phrase must still be matchable."""
        signals = SignalSet.default()
        for phrase in (*signals.strong, *signals.weak, *signals.negative):
            assert normalize_transcript(phrase) == phrase
