"""VerseCue Configuration.

Includes:
- EngineSettings: Transcript engine tuning (cooldown, debounce, context timeout)
- EngineOverrides: Partial settings applied with TranscriptEngine.configure()
- AppConfig: Application settings with environment variable support

Environment Variables:
    VERSECUE_DATA_PATH: Directory holding scripture.db and profiles/
    VERSECUE_DATABASE_PATH: Explicit scripture database file
    VERSECUE_ACTIVE_PROFILE: Pastor profile id applied to the engine
    VERSECUE_LOG_LEVEL: Logging level for the CLI
"""

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

AggressivenessLevel = Literal["conservative", "balanced", "responsive"]

CONFIG_DIR_NAME = ".versecue"
DATABASE_FILE_NAME = "scripture.db"


class EngineSettings(BaseModel):
    """Tuning values for the transcript engine.

    Attributes:
        cooldown_seconds: Minimum time between two queue items for one reference
        context_timeout_seconds: How long a chapter context resolves bare verses
        debounce_ms: Window in which a repeated fragment is dropped
        aggressiveness: Intent score multiplier level
        default_translation: Translation code for parsed references
        debounce_key_length: Leading characters of normalized text used as debounce key
        verse_boost: Confidence multiplier for references with a verse
        context_penalty: Confidence multiplier for context-inferred books
    """

    cooldown_seconds: float = Field(default=30, ge=0)
    context_timeout_seconds: float = Field(default=20, ge=0)
    debounce_ms: float = Field(default=2000, ge=0)
    aggressiveness: AggressivenessLevel = "balanced"
    default_translation: str = "KJV"
    debounce_key_length: int = Field(default=50, gt=0)
    verse_boost: float = Field(default=1.1, gt=0)
    context_penalty: float = Field(default=0.9, gt=0)

    def merged(self, overrides: "EngineOverrides") -> "EngineSettings":
        """Return new settings with the explicitly set override fields applied."""
        update = overrides.model_dump(exclude_unset=True, exclude_none=True)
        return self.model_copy(update=update)


class EngineOverrides(BaseModel):
    """Named optional overrides for EngineSettings.

    Only fields that are explicitly set replace the current values, so
    ``EngineOverrides(cooldown_seconds=10)`` leaves everything else alone.
    """

    model_config = ConfigDict(extra="forbid")

    cooldown_seconds: Optional[float] = Field(default=None, ge=0)
    context_timeout_seconds: Optional[float] = Field(default=None, ge=0)
    debounce_ms: Optional[float] = Field(default=None, ge=0)
    aggressiveness: Optional[AggressivenessLevel] = None
    default_translation: Optional[str] = None
    debounce_key_length: Optional[int] = Field(default=None, gt=0)
    verse_boost: Optional[float] = Field(default=None, gt=0)
    context_penalty: Optional[float] = Field(default=None, gt=0)


class AppConfig(BaseSettings):
    """Application configuration with environment variable support.

    Configuration is loaded from environment variables with VERSECUE_ prefix.
    For example, VERSECUE_ACTIVE_PROFILE sets active_profile.

    Precedence (highest to lowest):
        1. Environment variables (VERSECUE_*)
        2. Config file (<data_path>/.versecue/config.yaml)
        3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="VERSECUE_",
        extra="ignore",
    )

    data_path: Path = Field(default_factory=lambda: Path("~/.versecue").expanduser())
    database_path: Optional[Path] = None
    active_profile: Optional[str] = None
    log_level: str = "WARNING"

    engine: EngineSettings = Field(default_factory=EngineSettings)

    @property
    def config_file(self) -> Path:
        return self.data_path / CONFIG_DIR_NAME / "config.yaml"

    @property
    def resolved_database_path(self) -> Path:
        """Database file, defaulting to <data_path>/scripture.db."""
        return self.database_path or self.data_path / DATABASE_FILE_NAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppConfig":
        """Load configuration from .versecue/config.yaml if it exists.

        Args:
            path: Data directory (None uses VERSECUE_DATA_PATH or the default)

        Returns:
            AppConfig with YAML values applied under any environment overrides
        """
        from ruamel.yaml import YAML

        config = cls(data_path=path) if path is not None else cls()

        if config.config_file.exists():
            yaml = YAML()
            with config.config_file.open() as f:
                data = yaml.load(f)

            if data:
                if "engine" in data:
                    config.engine = EngineSettings.model_validate(dict(data["engine"]))
                # Fields already set came from the environment and win over the file
                for key in ("active_profile", "log_level"):
                    if key in data and key not in config.model_fields_set:
                        setattr(config, key, data[key])

        return config

    def save(self) -> None:
        """Save configuration to .versecue/config.yaml in the data path."""
        from ruamel.yaml import YAML

        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        yaml = YAML()
        yaml.default_flow_style = False

        data: dict[str, Any] = {
            "active_profile": self.active_profile,
            "log_level": self.log_level,
            "engine": self.engine.model_dump(),
        }

        with self.config_file.open("w") as f:
            yaml.dump(data, f)


__all__ = ["AppConfig", "EngineOverrides", "EngineSettings"]
