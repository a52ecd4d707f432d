"""
Tests for Config -- layered YAML configuration

These tests validate:
- Config hierarchy (env > project > user > defaults)
- Validation of import and display settings
- set/get through dotted keys
"""

import pytest
import yaml

from schemer.config import Config, ImportConfig, DisplayConfig, ConfigManager, get_config, parse_bool


class TestImportConfig:
    """Import settings validation."""

    def test_defaults(self):
        """Booleans off and no target by default."""
        config = ImportConfig()
        assert config.include_booleans is False
        assert config.target is None

    def test_validate_blank_target(self):
        """Whitespace-only target is rejected."""
        assert "cannot be empty" in ImportConfig(target="  ").validate()

    def test_validate_valid(self):
        assert ImportConfig(target="matlab.prf").validate() is None


class TestDisplayConfig:

    def test_validate_unknown_symbols(self):
        error = DisplayConfig(symbols="emoji").validate()
        assert error is not None
        assert "Unknown symbols setting" in error

    def test_validate_valid(self):
        assert DisplayConfig(symbols="ascii").validate() is None


class TestParseBool:

    @pytest.mark.parametrize("value", [True, "true", "1", "YES", " on "])
    def test_true_values(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", [False, "false", "0", "", "maybe"])
    def test_false_values(self, value):
        assert parse_bool(value) is False


class TestConfigSerialization:

    def test_round_trip_dict(self):
        """from_dict(to_dict()) keeps every setting."""
        config = Config(imports=ImportConfig(include_booleans=True, target="a.prf"),
                        display=DisplayConfig(symbols="ascii"))
        restored = Config.from_dict(config.to_dict())
        assert restored == config

    def test_from_empty_dict(self):
        assert Config.from_dict({}) == Config()


class TestConfigManager:
    """Configuration loading and persistence."""

    def test_load_defaults(self, tmp_path):
        """Loads defaults when no config files exist."""
        config = ConfigManager(tmp_path).load()
        assert config.imports.include_booleans is False
        assert config.display.symbols == "auto"

    def test_save_and_load_project(self, tmp_path):
        """Project config round-trips through YAML."""
        manager = ConfigManager(tmp_path)
        config = Config(imports=ImportConfig(include_booleans=True, target="prefs.prf"))
        manager.save_project(config)

        path = tmp_path / ".schemer" / "config.yaml"
        assert path.exists()
        assert yaml.safe_load(path.read_text())["import"]["target"] == "prefs.prf"

        loaded = ConfigManager(tmp_path).load()
        assert loaded.imports.include_booleans is True
        assert loaded.imports.target == "prefs.prf"

    def test_project_overrides_user(self, tmp_path):
        """Project config wins over user config, section by section."""
        user_path = ConfigManager.USER_CONFIG_FILE
        user_path.parent.mkdir(parents=True, exist_ok=True)
        user_path.write_text(yaml.dump({
            "import": {"include_booleans": True, "target": "user.prf"},
            "display": {"symbols": "ascii"},
        }))

        project = tmp_path / "project"
        project_path = project / ".schemer" / "config.yaml"
        project_path.parent.mkdir(parents=True)
        project_path.write_text(yaml.dump({"import": {"target": "project.prf"}}))

        config = ConfigManager(project).load()
        assert config.imports.target == "project.prf"
        assert config.imports.include_booleans is True
        assert config.display.symbols == "ascii"

    def test_environment_overrides_files(self, tmp_path, monkeypatch):
        """Environment variables beat every config file."""
        ConfigManager(tmp_path).save_project(Config(imports=ImportConfig(target="file.prf")))

        monkeypatch.setenv("SCHEMER_TARGET", "env.prf")
        monkeypatch.setenv("SCHEMER_INCLUDE_BOOLEANS", "yes")

        config = ConfigManager(tmp_path).load()
        assert config.imports.target == "env.prf"
        assert config.imports.include_booleans is True

    def test_malformed_yaml_ignored(self, tmp_path):
        """A broken config file falls back to defaults."""
        path = tmp_path / ".schemer" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("import: [unclosed\n")
        assert ConfigManager(tmp_path).load() == Config()

    def test_set_valid_config(self, tmp_path):
        """Setting a known key persists to the project file."""
        manager = ConfigManager(tmp_path)
        assert manager.set("import.include_booleans", "true") is None
        assert ConfigManager(tmp_path).load().imports.include_booleans is True

    def test_set_user_scope(self, tmp_path):
        manager = ConfigManager(tmp_path)
        assert manager.set("display.symbols", "unicode", scope="user") is None
        assert ConfigManager.USER_CONFIG_FILE.exists()
        assert not (tmp_path / ".schemer" / "config.yaml").exists()

    def test_set_invalid_symbols(self, tmp_path):
        error = ConfigManager(tmp_path).set("display.symbols", "emoji")
        assert "Unknown symbols setting" in error

    def test_set_invalid_key_format(self, tmp_path):
        """Keys must be section.setting."""
        error = ConfigManager(tmp_path).set("include_booleans", "true")
        assert "Invalid key format" in error

    def test_set_unknown_section(self, tmp_path):
        assert "Unknown section" in ConfigManager(tmp_path).set("llm.provider", "x")

    def test_get_config_value(self, tmp_path):
        manager = ConfigManager(tmp_path)
        manager.set("import.target", "matlab.prf")
        assert manager.get("import.target") == "matlab.prf"
        assert manager.get("import.include_booleans") == "false"
        assert manager.get("display.nothing") is None

    def test_display_lists_files(self, tmp_path):
        text = ConfigManager(tmp_path).display()
        assert "Include booleans: no" in text
        assert str(tmp_path / ".schemer" / "config.yaml") in text

    def test_get_config_helper(self, tmp_path):
        assert get_config(tmp_path) == Config()
