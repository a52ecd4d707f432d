"""
Configuration -- Layered YAML settings

Sources, highest priority first:
  1. Environment (SCHEMER_INCLUDE_BOOLEANS, SCHEMER_TARGET)
  2. Project file  (<project>/.schemer/config.yaml)
  3. User file     (~/.schemer/config.yaml)
  4. Defaults

File layout:

    import:
      include_booleans: false
      target: ~/.matlab/R2024a/matlab.prf
    display:
      symbols: auto
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from .presentation.symbols import get_symbols


TRUE_VALUES = ('true', '1', 'yes', 'on')
SYMBOL_CHOICES = ('unicode', 'ascii', 'auto')


def parse_bool(value: Any) -> bool:
    """Interpret YAML/env style booleans."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


@dataclass
class ImportConfig:
    """How imports run."""
    include_booleans: bool = False  # Also override checkbox-style preferences
    target: Optional[str] = None    # Preference file used when --target is omitted

    def validate(self) -> Optional[str]:
        if self.target is not None and not str(self.target).strip():
            return "Import target cannot be empty"
        return None


@dataclass
class DisplayConfig:
    """How reports are drawn."""
    symbols: str = "auto"

    def validate(self) -> Optional[str]:
        if self.symbols not in SYMBOL_CHOICES:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(SYMBOL_CHOICES)}"
        return None


@dataclass
class Config:
    imports: ImportConfig = field(default_factory=ImportConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "import": {
                "include_booleans": self.imports.include_booleans,
                "target": self.imports.target,
            },
            "display": {"symbols": self.display.symbols},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        imports = data.get("import") or {}
        display = data.get("display") or {}
        return cls(
            imports=ImportConfig(
                include_booleans=parse_bool(imports.get("include_booleans", False)),
                target=imports.get("target"),
            ),
            display=DisplayConfig(symbols=display.get("symbols", "auto")),
        )

    def validate(self) -> Optional[str]:
        return self.imports.validate() or self.display.validate()


# Dotted key -> (read, write). Writers take the raw CLI string.
Setting = Tuple[Callable[[Config], Any], Callable[[Config, str], None]]

SETTINGS: Dict[str, Setting] = {
    "import.include_booleans": (
        lambda c: str(c.imports.include_booleans).lower(),
        lambda c, v: setattr(c.imports, "include_booleans", parse_bool(v)),
    ),
    "import.target": (
        lambda c: c.imports.target,
        lambda c, v: setattr(c.imports, "target", v),
    ),
    "display.symbols": (
        lambda c: c.display.symbols,
        lambda c, v: setattr(c.display, "symbols", v),
    ),
}

# Environment variable -> (section, setting) in the YAML layout
ENV_OVERRIDES: Dict[str, Tuple[str, str]] = {
    "SCHEMER_INCLUDE_BOOLEANS": ("import", "include_booleans"),
    "SCHEMER_TARGET": ("import", "target"),
}


def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dicts; override wins."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigManager:
    """Loads the layered config for one project and writes single settings back."""

    USER_CONFIG_FILE = Path.home() / ".schemer" / "config.yaml"
    PROJECT_CONFIG_PATH = Path(".schemer") / "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_PATH

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError):
            # A broken file counts as absent
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Config:
        """Merged config (cached after the first call)."""
        if self._config is None:
            data = merge(self._read_yaml(self.user_config_path),
                         self._read_yaml(self.project_config_path))
            for var, (section, setting) in ENV_OVERRIDES.items():
                if os.environ.get(var):
                    data.setdefault(section, {})[setting] = os.environ[var]
            self._config = Config.from_dict(data)
        return self._config

    def _save(self, config: Config, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(config.to_dict(), default_flow_style=False),
                        encoding="utf-8")
        self._config = config

    def save_project(self, config: Config) -> None:
        self._save(config, self.project_config_path)

    def save_user(self, config: Config) -> None:
        self._save(config, self.user_config_path)

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set one dotted key (e.g. "import.include_booleans") and persist it.

        Args:
            key: section.setting
            value: Raw string value
            scope: "project" or "user"

        Returns:
            Error message, or None when saved
        """
        if key.count(".") != 1:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'display.symbols')"

        section = key.split(".")[0]
        if key not in SETTINGS:
            known = sorted(k for k in SETTINGS if k.startswith(section + "."))
            if not known:
                sections = sorted({k.split(".")[0] for k in SETTINGS})
                return f"Unknown section: {section}. Valid: {', '.join(sections)}"
            return f"Unknown setting: {key}. Valid: {', '.join(known)}"

        config = self.load()
        _, write = SETTINGS[key]
        write(config, value)

        error = config.validate()
        if error:
            self._config = None  # Drop the rejected in-memory edit
            return error

        if scope == "user":
            self.save_user(config)
        else:
            self.save_project(config)
        return None

    def get(self, key: str) -> Optional[str]:
        """Current value of a dotted key, or None for unknown keys."""
        if key not in SETTINGS:
            return None
        read, _ = SETTINGS[key]
        return read(self.load())

    def display(self) -> str:
        """Human-readable summary of the merged config."""
        config = self.load()
        symbols = get_symbols(config.display.symbols)
        booleans = f"{symbols.check_pass} yes" if config.imports.include_booleans else "no"

        return "\n".join([
            "Import:",
            f"  Include booleans: {booleans}",
            f"  Target: {config.imports.target or '(none, pass --target)'}",
            "",
            "Display:",
            f"  Symbols: {config.display.symbols}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ])


def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
