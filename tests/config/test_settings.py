"""Tests for ModelguardSettings — TOML source, env vars, and overrides."""

from pathlib import Path

import pytest

from modelguard.config.discovery import CONFIG_ENV_VAR
from modelguard.config.settings import ConfigFileError, ModelguardSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        CONFIG_ENV_VAR,
        "MODELGUARD_METADATA__INFO_KEY",
        "MODELGUARD_LOGGING__VERBOSE",
        "MODELGUARD_LOGGING__FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ModelguardSettings.load(config_path=tmp_path / "absent.toml")
        assert settings.config_path is None
        assert settings.metadata.info_key == "constraints"
        assert settings.logging.verbose is False
        assert settings.logging.format == "console"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ModelguardSettings.load(config_path=tmp_path / "absent.toml")
        with pytest.raises(Exception):
            settings.config_path = tmp_path  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_discovered_file(self, tmp_path: Path) -> None:
        toml = tmp_path / "modelguard.toml"
        toml.write_text('[metadata]\ninfo_key = "rules"\n[logging]\nverbose = true\n')
        settings = ModelguardSettings.load(start=tmp_path)
        assert settings.config_path == toml
        assert settings.metadata.info_key == "rules"
        assert settings.logging.verbose is True
        assert settings.logging.format == "console"  # default preserved

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "guard.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[logging]\nformat = "json"\n')
        settings = ModelguardSettings.load(config_path=custom)
        assert settings.logging.format == "json"
        assert settings.config_path == custom

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "modelguard.toml").write_text("")
        settings = ModelguardSettings.load(start=tmp_path)
        assert settings.metadata.info_key == "constraints"

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "modelguard.toml"
        bad.write_text("[metadata\ninfo_key = ")
        with pytest.raises(ConfigFileError, match="Invalid TOML"):
            ModelguardSettings.load(config_path=bad)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        toml = tmp_path / "modelguard.toml"
        toml.write_text('[metadata]\ninfo_key = "from_toml"\n')
        monkeypatch.setenv("MODELGUARD_METADATA__INFO_KEY", "from_env")
        settings = ModelguardSettings.load(config_path=toml)
        assert settings.metadata.info_key == "from_env"

    def test_overrides_beat_everything(self, tmp_path: Path) -> None:
        toml = tmp_path / "modelguard.toml"
        toml.write_text('[metadata]\ninfo_key = "from_toml"\n')
        settings = ModelguardSettings.load(config_path=toml, metadata={"info_key": "explicit"})
        assert settings.metadata.info_key == "explicit"
