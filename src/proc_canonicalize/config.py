"""Configuration loader: YAML file with environment variable fallbacks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .scanner import MAX_SYMLINK_FOLLOWS


@dataclass
class ResolverConfig:
    max_symlink_follows: int = MAX_SYMLINK_FOLLOWS
    simplify_windows_paths: bool = True


def _get_config_path(data_dir: Path | None = None) -> Path:
    if data_dir:
        return data_dir / "config.yaml"
    return Path.home() / ".proc-canonicalize" / "config.yaml"


def _parse_bool(value: Any) -> bool:
    return str(value).strip().lower() not in ("false", "0", "no", "off")


def load_config(config_path: Path | None = None) -> ResolverConfig:
    raw: dict[str, Any] = {}
    path = config_path or _get_config_path()

    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    resolver_raw = raw.get("resolver") or {}
    if not isinstance(resolver_raw, dict):
        raise ValueError(f"'resolver' section in {path} must be a mapping")

    max_raw = resolver_raw.get(
        "max_symlink_follows",
        os.environ.get("PROC_CANONICALIZE_MAX_SYMLINKS", MAX_SYMLINK_FOLLOWS),
    )
    try:
        max_symlink_follows = int(max_raw)
    except (TypeError, ValueError):
        raise ValueError(
            f"max_symlink_follows must be an integer, got {max_raw!r}. Set 'resolver.max_symlink_follows' "
            f"in config.yaml ({path}) or PROC_CANONICALIZE_MAX_SYMLINKS environment variable."
        ) from None
    if max_symlink_follows < 1:
        raise ValueError(f"max_symlink_follows must be at least 1, got {max_symlink_follows}")

    simplify_raw = resolver_raw.get(
        "simplify_windows_paths",
        os.environ.get("PROC_CANONICALIZE_SIMPLIFY_WINDOWS", "true"),
    )

    return ResolverConfig(
        max_symlink_follows=max_symlink_follows,
        simplify_windows_paths=_parse_bool(simplify_raw),
    )
