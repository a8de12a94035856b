"""Load and merge configuration from .difftree.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from difftree.config.schema import (
    OUTPUT_FORMATS,
    DiffTreeConfig,
    IgnoreConfig,
    OutputConfig,
    TreeConfig,
)
from difftree.tree.builder import COLLATIONS
from difftree.tree.expansion import EXPAND_POLICIES

CONFIG_FILENAME = ".difftree.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: DiffTreeConfig) -> None:
    """Apply DIFFTREE_* environment variable overrides."""
    if val := os.environ.get("DIFFTREE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("DIFFTREE_COLLATION"):
        if val in COLLATIONS:
            cfg.tree.collation = val  # type: ignore[assignment]
    if val := os.environ.get("DIFFTREE_EXPAND"):
        if val in EXPAND_POLICIES:
            cfg.tree.expand = val  # type: ignore[assignment]
    if val := os.environ.get("DIFFTREE_IGNORE_PATHS"):
        sep = ":" if os.name != "nt" else ";"
        cfg.ignore.paths.extend(p.strip() for p in val.split(sep) if p.strip())


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: DiffTreeConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output.format: {cfg.output.format!r}")
    if cfg.tree.collation not in COLLATIONS:
        raise ConfigError(f"Invalid tree.collation: {cfg.tree.collation!r}")
    if cfg.tree.expand not in EXPAND_POLICIES:
        raise ConfigError(f"Invalid tree.expand: {cfg.tree.expand!r}")
    if not isinstance(cfg.ignore.paths, list):
        raise ConfigError("ignore.paths must be a list of glob patterns")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> DiffTreeConfig:
    """Load, validate, and return a DiffTreeConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = DiffTreeConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = DiffTreeConfig(
            version=raw.get("version", "1.0"),
            output=_build_section(raw, OutputConfig, "output"),
            tree=_build_section(raw, TreeConfig, "tree"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
