"""Load and merge configuration from config.toml and env vars."""

from __future__ import annotations

import os
import shlex
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from dotmanager.config.schema import (
    DotManagerConfig,
    GitConfig,
    OutputConfig,
    PagerConfig,
    PathsConfig,
    default_data_dir,
)


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def default_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "dotmanager" / "config.toml"


def find_config_file(override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = default_config_path()
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: DotManagerConfig) -> None:
    """Apply DOTMANAGER_* environment variable overrides."""
    if val := os.environ.get("DOTMANAGER_HOME"):
        cfg.paths.home = val
    if val := os.environ.get("DOTMANAGER_DATA_DIR"):
        cfg.paths.data_dir = val
    if val := os.environ.get("DOTMANAGER_GIT"):
        cfg.git.binary = val
    if val := os.environ.get("DOTMANAGER_PAGER"):
        cfg.pager.command = shlex.split(val)
    if val := os.environ.get("DOTMANAGER_FORMAT"):
        if val in ("terminal", "json"):
            cfg.output.format = val  # type: ignore[assignment]


def _resolve_paths(cfg: DotManagerConfig) -> None:
    """Pin home and data dir to absolute paths so later lookups are stable."""
    home = Path(cfg.paths.home).expanduser() if cfg.paths.home else Path.home()
    cfg.paths.home = str(home.absolute())
    data = Path(cfg.paths.data_dir).expanduser() if cfg.paths.data_dir else default_data_dir()
    cfg.paths.data_dir = str(data.absolute())


def _validate(cfg: DotManagerConfig) -> None:
    if isinstance(cfg.pager.command, str):
        cfg.pager.command = shlex.split(cfg.pager.command)
    if not cfg.pager.command:
        raise ConfigError("pager.command must not be empty")
    if cfg.output.format not in ("terminal", "json"):
        raise ConfigError(f"Invalid output.format: {cfg.output.format}")


def load_config(config_override: Optional[str] = None) -> DotManagerConfig:
    """Load, validate, and return a DotManagerConfig with resolved paths."""
    config_path = find_config_file(config_override)

    if config_path is None:
        cfg = DotManagerConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = DotManagerConfig(
                paths=_build_section(raw, PathsConfig, "paths"),
                git=_build_section(raw, GitConfig, "git"),
                pager=_build_section(raw, PagerConfig, "pager"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    _validate(cfg)
    _resolve_paths(cfg)
    return cfg
