"""Pastor profiles for VerseCue.

A profile tunes the engine for one speaker: custom wake phrases that signal
display intent, ignore phrases that suppress it, an aggressiveness level and
how long a chapter context stays live. Profiles are stored one YAML file per
profile under ``<data_path>/profiles/<id>.yaml``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ProfileNotFoundError
from .intent import Aggressiveness

logger = logging.getLogger(__name__)

VerseStyle = Literal["spoken", "numeric"]

PROFILE_ID_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_-]*$"


class PastorProfile(BaseModel):
    """Per-speaker engine tuning.

    Attributes:
        id: File-safe identifier
        name: Display name
        wake_phrases: Phrases scored as strong display intent (+3)
        ignore_phrases: Phrases scored as negative (-3)
        aggressiveness: Multiplier level for intent scores
        context_timeout_seconds: How long a chapter context stays usable
        verse_style: How the speaker says verse numbers ("spoken" or "numeric")
    """

    id: str = Field(pattern=PROFILE_ID_PATTERN)
    name: str
    wake_phrases: list[str] = Field(default_factory=list)
    ignore_phrases: list[str] = Field(default_factory=list)
    aggressiveness: Aggressiveness = Aggressiveness.BALANCED
    context_timeout_seconds: float = Field(default=20, ge=0)
    verse_style: VerseStyle = "spoken"

    @field_validator("wake_phrases", "ignore_phrases")
    @classmethod
    def _clean_phrases(cls, phrases: list[str]) -> list[str]:
        return [p.strip().lower() for p in phrases if p.strip()]


class ProfileManager:
    """YAML-backed store of pastor profiles.

    Example:
        >>> manager = ProfileManager(Path("~/.versecue").expanduser())
        >>> manager.save(PastorProfile(id="smith", name="Pastor Smith"))
        >>> manager.get("smith").name
        'Pastor Smith'
    """

    def __init__(self, data_path: Path) -> None:
        self.data_path = Path(data_path)
        self.profiles_dir = self.data_path / "profiles"
        self._yaml = YAML()
        self._yaml.default_flow_style = False

    def _profile_file(self, profile_id: str) -> Path:
        return self.profiles_dir / f"{profile_id}.yaml"

    def _read(self, path: Path) -> PastorProfile:
        with path.open() as f:
            data = self._yaml.load(f)
        return PastorProfile.model_validate(data or {})

    def load_all(self) -> list[PastorProfile]:
        """Load every profile, skipping files that fail to parse."""
        if not self.profiles_dir.exists():
            return []

        profiles: list[PastorProfile] = []
        for path in sorted(self.profiles_dir.glob("*.yaml")):
            try:
                profiles.append(self._read(path))
            except (OSError, YAMLError, ValidationError) as e:
                logger.warning(f"Skipping unreadable profile {path.name}: {e}")
        return profiles

    def list(self) -> list[PastorProfile]:
        """All profiles, ordered by id."""
        return sorted(self.load_all(), key=lambda p: p.id)

    def get(self, profile_id: str, strict: bool = False) -> PastorProfile | None:
        """Load a profile by id.

        Args:
            profile_id: Profile identifier
            strict: Raise instead of returning None when missing

        Raises:
            ProfileNotFoundError: If strict and the profile does not exist
                or cannot be read
        """
        path = self._profile_file(profile_id)
        if path.exists():
            try:
                return self._read(path)
            except (OSError, YAMLError, ValidationError) as e:
                logger.warning(f"Failed to read profile {profile_id}: {e}")

        if strict:
            raise ProfileNotFoundError(profile_id)
        return None

    def save(self, profile: PastorProfile) -> Path:
        """Write a profile, replacing any existing file with the same id."""
        self.profiles_dir.mkdir(parents=True, exist_ok=True)
        path = self._profile_file(profile.id)

        with path.open("w") as f:
            self._yaml.dump(profile.model_dump(mode="json"), f)

        logger.info(f"Saved profile {profile.id} to {path}")
        return path

    def delete(self, profile_id: str) -> bool:
        """Delete a profile file.

        Returns:
            True if a file was removed
        """
        path = self._profile_file(profile_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted profile {profile_id}")
        return True


__all__ = ["PastorProfile", "ProfileManager", "VerseStyle"]
