"""
Configuration loading for fileshim.

Settings live in a YAML file under a ``fileshim:`` section. A missing file
means defaults; a file that exists but cannot be parsed is an error.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict

import yaml


SECTION = "fileshim"
DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_AUDIT_LOG_PATH = "data/audit_log.jsonl"


class ConfigError(Exception):
    """Raised when the configuration file exists but cannot be used."""


@dataclass
class Settings:
    """Effective fileshim settings."""
    audit_enabled: bool = True
    audit_log_path: str = DEFAULT_AUDIT_LOG_PATH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Build settings from the parsed ``fileshim`` section."""
        audit = data.get("audit") or {}
        if not isinstance(audit, dict):
            raise ConfigError("'audit' must be a mapping")
        return cls(
            audit_enabled=bool(audit.get("enabled", True)),
            audit_log_path=str(audit.get("log_path", DEFAULT_AUDIT_LOG_PATH)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "audit": {
                "enabled": self.audit_enabled,
                "log_path": self.audit_log_path,
            }
        }


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def load_settings(config_path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Settings, with defaults for anything the file leaves out

    Raises:
        ConfigError: If the file exists but is unreadable or malformed
    """
    path = Path(config_path)
    if not path.exists():
        return Settings()

    data = _read_yaml(path)
    if SECTION in data:
        section = data[SECTION] or {}
    else:
        section = data
    if not isinstance(section, dict):
        raise ConfigError(f"'{SECTION}' section in {path} must be a mapping")
    return Settings.from_dict(section)


def save_settings(settings: Settings, config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write settings back to the ``fileshim`` section, keeping other sections."""
    path = Path(config_path)
    config: Dict[str, Any] = {}

    if path.exists():
        config = _read_yaml(path)

    config[SECTION] = settings.to_dict()

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False)


def settings_as_dict(settings: Settings) -> Dict[str, Any]:
    """Flat view of the settings, used for display."""
    return asdict(settings)
