"""Configuration loading for cuefix (.cuefix.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".cuefix.yml"

DEFAULT_TARGET_EXTENSION = "cue"
DEFAULT_SOURCE_SUFFIX = ".wav"
DEFAULT_COMPANIONS: tuple[str, ...] = ("flac", "ape")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CueFixConfig:
    """Represents the settings defined in .cuefix.yml.

    ``companions`` is ordered: the first extension found next to a target
    file decides the replacement.
    """

    root: Path
    target_extension: str = DEFAULT_TARGET_EXTENSION
    source_suffix: str = DEFAULT_SOURCE_SUFFIX
    companions: List[str] = field(default_factory=lambda: list(DEFAULT_COMPANIONS))


def load_config(config_path: Path) -> CueFixConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CueFixConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = CueFixConfig(root=root)

    if "target_extension" in data:
        target = _as_extension(data.get("target_extension"))
        if not target:
            raise ConfigError("target_extension must be a non-empty string")
        config.target_extension = target

    if "source_suffix" in data:
        suffix = _as_str(data.get("source_suffix"))
        if not suffix:
            raise ConfigError("source_suffix must be a non-empty string")
        config.source_suffix = suffix

    if "companions" in data:
        companions = [
            ext for ext in (_as_extension(item) for item in _as_str_list(data.get("companions"))) if ext
        ]
        if not companions:
            raise ConfigError("companions must list at least one extension")
        config.companions = companions

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_extension(value: Any) -> Optional[str]:
    text = _as_str(value)
    if text is None:
        return None
    return text.strip().lstrip(".") or None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    raise ConfigError("companions must be a list of extensions")


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "CueFixConfig",
    "DEFAULT_COMPANIONS",
    "DEFAULT_SOURCE_SUFFIX",
    "DEFAULT_TARGET_EXTENSION",
    "load_config",
]
