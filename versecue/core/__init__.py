"""Core components for VerseCue."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import AppConfig
from .engine import (
    ChapterContext,
    TranscriptEngine,
)
from .errors import (
    ProfileNotFoundError,
    StoreUnavailableError,
    VerseCueError,
)
from .intent import (
    ActionType,
    Aggressiveness,
    IntentClassification,
    IntentClassifier,
    IntentType,
)
from .normalize import normalize_transcript
from .profiles import (
    PastorProfile,
    ProfileManager,
)
from .queue import (
    QueueItem,
    QueueSource,
    QueueStatus,
)
from .reference import (
    ReferenceParser,
    parse_reference,
)
from .scripture import (
    DEFAULT_TRANSLATION,
    BookRecord,
    ScripturePassage,
    ScriptureReference,
    TranslationRecord,
    VerseRecord,
    format_display_reference,
)
from .seed import seed_default_data
from .store import PassageStore

logger = logging.getLogger(__name__)


@dataclass
class VerseCueState:
    """Shared application state.

    Manages:
    - The passage store (opened lazily)
    - The transcript engine with the active pastor profile
    - Profile persistence
    """

    config: AppConfig = field(default_factory=AppConfig)
    store: PassageStore | None = field(default=None, repr=False)
    engine: TranscriptEngine | None = field(default=None, repr=False)
    profiles: ProfileManager | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.profiles is None:
            self.profiles = ProfileManager(self.config.data_path)

    @property
    def data_path(self) -> Path:
        return self.config.data_path

    def init_store(self, seed: bool = True) -> PassageStore:
        """Lazy-open and initialize the passage store.

        Args:
            seed: Seed default data on first use

        Returns:
            PassageStore instance (creates new one if needed)
        """
        if self.store is None:
            self.store = PassageStore(
                self.config.resolved_database_path,
                default_translation=self.config.engine.default_translation,
            )
            self.store.initialize(seed=seed)
        return self.store

    def init_engine(self, profile_id: str | None = None) -> TranscriptEngine:
        """Create the transcript engine, applying a profile if one is named.

        Args:
            profile_id: Profile to activate (falls back to config.active_profile)

        Raises:
            ProfileNotFoundError: If the named profile does not exist
        """
        store = self.init_store()
        profile_id = profile_id or self.config.active_profile
        profile = self.profiles.get(profile_id, strict=True) if profile_id else None

        self.engine = TranscriptEngine(store, settings=self.config.engine, profile=profile)
        logger.info(f"Transcript engine ready (profile={profile_id or 'none'})")
        return self.engine

    def close(self) -> None:
        if self.store is not None:
            self.store.close()
            self.store = None
        self.engine = None


__all__ = [
    # State
    "VerseCueState",
    # Engine
    "ChapterContext",
    "TranscriptEngine",
    "normalize_transcript",
    # Errors
    "ProfileNotFoundError",
    "StoreUnavailableError",
    "VerseCueError",
    # Intent
    "ActionType",
    "Aggressiveness",
    "IntentClassification",
    "IntentClassifier",
    "IntentType",
    # Profiles
    "PastorProfile",
    "ProfileManager",
    # Queue
    "QueueItem",
    "QueueSource",
    "QueueStatus",
    # Reference parsing
    "ReferenceParser",
    "parse_reference",
    # Scripture values
    "DEFAULT_TRANSLATION",
    "BookRecord",
    "ScripturePassage",
    "ScriptureReference",
    "TranslationRecord",
    "VerseRecord",
    "format_display_reference",
    # Store
    "PassageStore",
    "seed_default_data",
]
