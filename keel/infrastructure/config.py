"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all Keel settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- KEEL_SECTION_KEY overrides a section field; KEEL_LOG_LEVEL and
  KEEL_JSON_LOGS override the top-level fields
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageConfig:
    """Release history storage."""
    driver: str = "sqlite"  # "sqlite" or "memory"
    db_path: str = "keel.db"


@dataclass(frozen=True)
class KubeConfig:
    """Cluster access."""
    kubectl: str = "kubectl"
    context: str = ""
    control_node: str = ""  # user@host:port; empty runs kubectl locally


@dataclass(frozen=True)
class RollbackConfig:
    """Defaults for rollback requests."""
    timeout_seconds: int = 300
    disable_hooks: bool = False


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class KeelConfig:
    """Root configuration for Keel."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    kube: KubeConfig = field(default_factory=KubeConfig)
    rollback: RollbackConfig = field(default_factory=RollbackConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"
    json_logs: bool = False


_TOP_LEVEL = ("log_level", "json_logs")


def _env_override(data: dict, prefix: str = "KEEL") -> dict:
    """Override config values with environment variables.

    For example: KEEL_STORAGE_DB_PATH=/var/lib/keel.db, KEEL_LOG_LEVEL=DEBUG
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in _TOP_LEVEL:
            data[name] = value
            continue
        section, _, field_name = name.partition("_")
        if field_name:
            data.setdefault(section, {})[field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _coerce(type_name: str, value):
    if not isinstance(value, str):
        return value
    if type_name == "int":
        return int(value)
    if type_name == "bool":
        return value.lower() in ("true", "1", "yes")
    return value


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    types = {f.name: f.type for f in fields(cls)}
    return cls(**{k: _coerce(types[k], v) for k, v in data.items() if k in types})


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "KEEL",
) -> KeelConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (KEEL_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to keel.json in CWD.
        env_prefix: Environment variable prefix. Defaults to KEEL.
    """
    config_path = Path(path) if path else Path("keel.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return KeelConfig(
        storage=_build_sub_config(StorageConfig, data.get("storage", {})),
        kube=_build_sub_config(KubeConfig, data.get("kube", {})),
        rollback=_build_sub_config(RollbackConfig, data.get("rollback", {})),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
        log_level=data.get("log_level", "WARNING"),
        json_logs=_coerce("bool", data.get("json_logs", False)),
    )
