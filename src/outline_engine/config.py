"""Engine configuration loaded from a JSON file.

Example file::

    {
      "default_heading_level": 2,
      "archive": {
        "enabled": true,
        "archive_after_days": 30,
        "exclude_folders": ["C/Templates", "Daily Notes"],
        "archive_root": "E/Archive"
      }
    }

Unknown keys are ignored. Command-line flags override file values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from outline_engine.archive import DEFAULT_ARCHIVE_ROOT, ArchiveSettings
from outline_engine.io_utils import load_json
from outline_engine.mutation import DEFAULT_HEADING_LEVEL


class ConfigError(ValueError):
    """Raised when a configuration value is missing its expected shape."""


@dataclass(frozen=True, slots=True)
class EngineConfig:
    default_heading_level: int = DEFAULT_HEADING_LEVEL
    archive: ArchiveSettings = field(default_factory=ArchiveSettings)


def _positive_int(value: Any, key: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}")
    return value


def _folder_list(value: Any, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings or a comma-separated string")
    return tuple(v.strip() for v in value if v.strip())


def _archive_from_dict(raw: Any) -> ArchiveSettings:
    if not isinstance(raw, dict):
        raise ConfigError(f"archive must be an object, got {type(raw).__name__}")
    enabled = raw.get("enabled", False)
    if not isinstance(enabled, bool):
        raise ConfigError(f"archive.enabled must be a boolean, got {enabled!r}")
    root = raw.get("archive_root", DEFAULT_ARCHIVE_ROOT)
    if not isinstance(root, str) or not root.strip("/ "):
        raise ConfigError(f"archive.archive_root must be a non-empty path, got {root!r}")
    return ArchiveSettings(
        enabled=enabled,
        archive_after_days=_positive_int(
            raw.get("archive_after_days", 30), "archive.archive_after_days",
        ),
        exclude_folders=_folder_list(raw.get("exclude_folders", []), "archive.exclude_folders"),
        archive_root=root.strip().rstrip("/"),
    )


def config_from_dict(raw: Any) -> EngineConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"config must be a JSON object, got {type(raw).__name__}")
    return EngineConfig(
        default_heading_level=_positive_int(
            raw.get("default_heading_level", DEFAULT_HEADING_LEVEL), "default_heading_level",
        ),
        archive=_archive_from_dict(raw.get("archive", {})),
    )


def config_to_dict(config: EngineConfig) -> dict[str, Any]:
    return {
        "default_heading_level": config.default_heading_level,
        "archive": {
            "enabled": config.archive.enabled,
            "archive_after_days": config.archive.archive_after_days,
            "exclude_folders": list(config.archive.exclude_folders),
            "archive_root": config.archive.archive_root,
        },
    }


def load_config(path: Path | None) -> EngineConfig:
    """Load configuration from *path*; defaults when *path* is None."""
    if path is None:
        return EngineConfig()
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        raw = load_json(path)
    except ValueError as exc:
        raise ConfigError(f"config file {path} is not valid JSON: {exc}") from exc
    return config_from_dict(raw)
