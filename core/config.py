"""
Configuration for FSOps.

Holds the constants that shape naming and copying (path separator, extension
and copy markers, search limits) and loads them from a YAML file.
"""

import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import InvalidUsageError


SECTION = "fsops"


@dataclass(frozen=True)
class FsConfig:
    """Explicit constants used by file operations."""
    separator: str = os.sep
    extension_marker: str = "."
    copy_marker: str = "copy"
    max_copy_attempts: int = 1_000_000
    default_unit: str = "KILOBYTE"
    audit_log: str = "data/audit_log.jsonl"
    audit_enabled: bool = True

    def __post_init__(self):
        if not self.separator:
            raise InvalidUsageError("Config value \"separator\" cannot be empty")
        if len(self.extension_marker) != 1:
            raise InvalidUsageError("Config value \"extension_marker\" must be a single character")
        if not self.copy_marker.strip():
            raise InvalidUsageError("Config value \"copy_marker\" cannot be empty")
        if self.max_copy_attempts < 1:
            raise InvalidUsageError("Config value \"max_copy_attempts\" cannot be less than 1")

        from modules.fs_operator.entry import CapacityUnit
        CapacityUnit.parse(self.default_unit)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FsConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: str = "config.yaml") -> FsConfig:
    """
    Load configuration from a YAML file.

    The file may hold an ``fsops:`` section or a bare mapping. A missing or
    unreadable file yields the defaults.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        FsConfig instance

    Raises:
        InvalidUsageError: If the file holds invalid values
    """
    path = Path(config_path)
    if not path.exists():
        return FsConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return FsConfig()

    if not isinstance(config, dict):
        return FsConfig()

    section = config.get(SECTION, config)
    return FsConfig.from_dict(section or {})


def save_config(config: FsConfig, config_path: str = "config.yaml") -> None:
    """Write the config back, keeping other top-level sections of the file."""
    path = Path(config_path)
    data: Optional[Dict[str, Any]] = None

    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            data = None

    if not isinstance(data, dict):
        data = {}
    data[SECTION] = config.to_dict()

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False)
