"""Load and merge configuration from .transdiff.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

from transdiff.config.schema import (
    OUTPUT_FORMATS,
    CheckConfig,
    DiscoveryConfig,
    GitConfig,
    LanguagesConfig,
    OutputConfig,
    TransdiffConfig,
)

CONFIG_FILE = ".transdiff.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILE
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _split_list(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _merge_env_overrides(cfg: TransdiffConfig) -> None:
    """Apply TRANSDIFF_* environment variable overrides."""
    if val := os.environ.get("TRANSDIFF_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("TRANSDIFF_LANGS"):
        cfg.languages.langs = _split_list(val)
    if val := os.environ.get("TRANSDIFF_BASE_LANG"):
        cfg.languages.base = val.strip()
    if os.environ.get("TRANSDIFF_NO_GIT") == "1":
        cfg.git.enabled = False
    if val := os.environ.get("TRANSDIFF_FROM_REVISION"):
        cfg.git.from_revision = val
    if val := os.environ.get("TRANSDIFF_TO_REVISION"):
        cfg.git.to_revision = val
    if os.environ.get("TRANSDIFF_FAIL_ON_DIFFS") == "1":
        cfg.check.fail_on_diffs = True


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: TransdiffConfig, source: Path) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"{source}: output.format must be one of {', '.join(OUTPUT_FORMATS)}"
        )
    if not isinstance(cfg.languages.langs, list):
        raise ConfigError(f"{source}: languages.langs must be a list")
    if not isinstance(cfg.discovery.extensions, list):
        raise ConfigError(f"{source}: discovery.extensions must be a list")
    # empty strings in TOML mean "not set"
    cfg.git.from_revision = cfg.git.from_revision or None
    cfg.git.to_revision = cfg.git.to_revision or None


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> TransdiffConfig:
    """Load, validate, and return a TransdiffConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = TransdiffConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = TransdiffConfig(
            version=raw.get("version", "1.0"),
            languages=_build_section(raw, LanguagesConfig, "languages"),
            discovery=_build_section(raw, DiscoveryConfig, "discovery"),
            git=_build_section(raw, GitConfig, "git"),
            output=_build_section(raw, OutputConfig, "output"),
            check=_build_section(raw, CheckConfig, "check"),
        )
        _validate(cfg, config_path)

    _merge_env_overrides(cfg)
    return cfg
