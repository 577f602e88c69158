"""Queue items produced by the transcript engine.

A QueueItem is the engine's only output: one resolved passage with the
action the operator UI should take and a lifecycle status the UI advances
(pending -> confirmed/ignored/staged/displayed).
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .intent import ActionType, IntentType
from .scripture import ScripturePassage, ScriptureReference


class QueueStatus(str, Enum):
    """Lifecycle status of a queue item."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IGNORED = "ignored"
    STAGED = "staged"
    DISPLAYED = "displayed"


class QueueSource(str, Enum):
    """Where a queue item came from."""

    VOICE = "voice"
    MANUAL = "manual"


# Allowed status transitions; anything else is a UI bug
STATUS_TRANSITIONS: dict[QueueStatus, frozenset[QueueStatus]] = {
    QueueStatus.PENDING: frozenset(
        {QueueStatus.CONFIRMED, QueueStatus.IGNORED, QueueStatus.STAGED, QueueStatus.DISPLAYED}
    ),
    QueueStatus.CONFIRMED: frozenset({QueueStatus.STAGED, QueueStatus.DISPLAYED}),
    QueueStatus.STAGED: frozenset({QueueStatus.DISPLAYED}),
    QueueStatus.IGNORED: frozenset(),
    QueueStatus.DISPLAYED: frozenset(),
}


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class QueueItem:
    """A passage offered to the operator.

    Attributes:
        reference: Resolved reference (canonical book name)
        display_reference: Display string such as "John 3:16"
        text: Concatenated verse text
        source: VOICE for engine output, MANUAL for operator selections
        action: What the UI should do with the item
        confidence: Combined confidence 0.0-1.0
        intent_type: Originating intent (None for manual items)
        status: Lifecycle status
        created_at: Creation time in epoch seconds
        id: Unique item id
    """

    reference: ScriptureReference
    display_reference: str
    text: str
    source: QueueSource
    action: ActionType
    confidence: float
    intent_type: IntentType | None = None
    status: QueueStatus = QueueStatus.PENDING
    created_at: float = field(default_factory=time.time)
    id: str = field(default_factory=_new_id)

    @classmethod
    def from_passage(
        cls,
        passage: ScripturePassage,
        source: QueueSource | str = QueueSource.MANUAL,
        action: ActionType = ActionType.QUEUE,
        confidence: float = 1.0,
        intent_type: IntentType | None = None,
        created_at: float | None = None,
    ) -> QueueItem:
        """Build a queue item for a resolved passage.

        Defaults describe an operator's manual selection: full confidence,
        QUEUE action and no intent type.
        """
        return cls(
            reference=passage.reference,
            display_reference=passage.display_reference,
            text=passage.text,
            source=QueueSource(source),
            action=action,
            confidence=confidence,
            intent_type=intent_type,
            created_at=time.time() if created_at is None else created_at,
        )

    def can_transition(self, status: QueueStatus | str) -> bool:
        return QueueStatus(status) in STATUS_TRANSITIONS[self.status]

    def with_status(self, status: QueueStatus | str) -> QueueItem:
        """Return a copy of this item with a new lifecycle status.

        Raises:
            ValueError: If the transition is not allowed
        """
        target = QueueStatus(status)
        if not self.can_transition(target):
            raise ValueError(
                f"Invalid queue transition {self.status.value} -> {target.value} for {self.id}"
            )
        return replace(self, status=target)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "reference": self.reference.to_dict(),
            "display_reference": self.display_reference,
            "text": self.text,
            "source": self.source.value,
            "action": self.action.value,
            "status": self.status.value,
            "created_at": datetime.fromtimestamp(self.created_at, tz=timezone.utc).isoformat(),
            "confidence": self.confidence,
            "intent_type": self.intent_type.value if self.intent_type else None,
        }


__all__ = [
    "QueueItem",
    "QueueSource",
    "QueueStatus",
    "STATUS_TRANSITIONS",
]
