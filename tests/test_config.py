"""Tests for versecue.config module.

Covers:
- EngineSettings defaults and validation
- EngineOverrides merging
- AppConfig settings and environment variable support
- Configuration load/save to YAML
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from versecue.config import AppConfig, EngineOverrides, EngineSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the caller's VERSECUE_* variables out of these tests."""
    for name in ("DATA_PATH", "DATABASE_PATH", "ACTIVE_PROFILE", "LOG_LEVEL"):
        monkeypatch.delenv(f"VERSECUE_{name}", raising=False)


# ============================================================================
# EngineSettings Tests
# ============================================================================


class TestEngineSettings:
    """Tests for engine tuning values."""

    def test_default_values(self):
        settings = EngineSettings()
        assert settings.cooldown_seconds == 30
        assert settings.context_timeout_seconds == 20
        assert settings.debounce_ms == 2000
        assert settings.aggressiveness == "balanced"
        assert settings.default_translation == "KJV"
        assert settings.debounce_key_length == 50
        assert settings.verse_boost == pytest.approx(1.1)
        assert settings.context_penalty == pytest.approx(0.9)

    def test_invalid_aggressiveness(self):
        with pytest.raises(ValidationError):
            EngineSettings(aggressiveness="reckless")

    def test_negative_cooldown(self):
        with pytest.raises(ValidationError):
            EngineSettings(cooldown_seconds=-1)

    def test_merged_applies_set_fields_only(self):
        settings = EngineSettings(cooldown_seconds=10)
        merged = settings.merged(EngineOverrides(debounce_ms=500))

        assert merged.debounce_ms == 500
        assert merged.cooldown_seconds == 10
        assert settings.debounce_ms == 2000

    def test_merged_ignores_none(self):
        merged = EngineSettings().merged(EngineOverrides(aggressiveness=None))
        assert merged.aggressiveness == "balanced"


class TestEngineOverrides:
    """Tests for partial overrides."""

    def test_empty(self):
        assert EngineOverrides().model_dump(exclude_unset=True) == {}

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            EngineOverrides(cooldown=5)

    def test_validated(self):
        with pytest.raises(ValidationError):
            EngineOverrides(debounce_key_length=0)


# ============================================================================
# AppConfig Tests
# ============================================================================


class TestAppConfig:
    """Tests for application configuration."""

    def test_defaults(self, tmp_path: Path):
        config = AppConfig(data_path=tmp_path)
        assert config.active_profile is None
        assert config.log_level == "WARNING"
        assert config.engine == EngineSettings()

    def test_paths(self, tmp_path: Path):
        config = AppConfig(data_path=tmp_path)
        assert config.config_file == tmp_path / ".versecue" / "config.yaml"
        assert config.resolved_database_path == tmp_path / "scripture.db"

    def test_explicit_database_path(self, tmp_path: Path):
        config = AppConfig(data_path=tmp_path, database_path=tmp_path / "other.db")
        assert config.resolved_database_path == tmp_path / "other.db"

    def test_env_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("VERSECUE_DATA_PATH", str(tmp_path))
        monkeypatch.setenv("VERSECUE_ACTIVE_PROFILE", "smith")
        config = AppConfig()
        assert config.data_path == tmp_path
        assert config.active_profile == "smith"


class TestAppConfigPersistence:
    """Tests for YAML load/save."""

    def test_load_without_file(self, tmp_path: Path):
        config = AppConfig.load(tmp_path)
        assert config.data_path == tmp_path
        assert config.engine == EngineSettings()
        assert not config.config_file.exists()

    def test_save_and_load(self, tmp_path: Path):
        config = AppConfig(data_path=tmp_path)
        config.active_profile = "smith"
        config.log_level = "INFO"
        config.engine = EngineSettings(cooldown_seconds=12, aggressiveness="responsive")
        config.save()

        assert config.config_file.exists()

        loaded = AppConfig.load(tmp_path)
        assert loaded.active_profile == "smith"
        assert loaded.log_level == "INFO"
        assert loaded.engine.cooldown_seconds == 12
        assert loaded.engine.aggressiveness == "responsive"
        assert loaded.engine.debounce_ms == 2000

    def test_partial_engine_section(self, tmp_path: Path):
        config_file = tmp_path / ".versecue" / "config.yaml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text("engine:\n  debounce_ms: 750\n")

        loaded = AppConfig.load(tmp_path)
        assert loaded.engine.debounce_ms == 750
        assert loaded.engine.cooldown_seconds == 30

    def test_invalid_engine_section(self, tmp_path: Path):
        config_file = tmp_path / ".versecue" / "config.yaml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text("engine:\n  aggressiveness: reckless\n")

        with pytest.raises(ValidationError):
            AppConfig.load(tmp_path)

    def test_env_beats_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        config = AppConfig(data_path=tmp_path)
        config.active_profile = "from-file"
        config.save()

        monkeypatch.setenv("VERSECUE_ACTIVE_PROFILE", "from-env")
        assert AppConfig.load(tmp_path).active_profile == "from-env"

    def test_empty_file(self, tmp_path: Path):
        config_file = tmp_path / ".versecue" / "config.yaml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text("")

        assert AppConfig.load(tmp_path).active_profile is None
