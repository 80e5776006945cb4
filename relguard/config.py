"""Configuration loading for relguard (.relguard.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".relguard.yml"
DEFAULT_EXTENSION = ".html"
DEFAULT_ENCODING = "utf-8"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RelGuardConfig:
    """Settings defined in .relguard.yml."""

    root: Path
    extension: str = DEFAULT_EXTENSION
    exclude: List[str] = field(default_factory=list)
    encoding: str = DEFAULT_ENCODING
    fail_on_error: bool = False


def load_config(config_path: Path) -> RelGuardConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RelGuardConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    extension = _normalise_extension(_as_str(data.get("extension")))
    encoding = _as_str(data.get("encoding")) or DEFAULT_ENCODING
    fail_on_error = _as_bool(data.get("fail_on_error"))

    return RelGuardConfig(
        root=root,
        extension=extension,
        exclude=_as_str_list(data.get("exclude")),
        encoding=encoding,
        fail_on_error=bool(fail_on_error),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(value: Optional[str]) -> str:
    if not value or not value.strip():
        return DEFAULT_EXTENSION
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_ENCODING",
    "DEFAULT_EXTENSION",
    "RelGuardConfig",
    "load_config",
]
