"""Centralized configuration caching.

Loaded config dicts are keyed on the project root plus a fingerprint of the
``AUTOWIRE_*`` environment and the project config files, so edits and env
changes are picked up without explicit invalidation.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    return (repo_root or Path.cwd()).expanduser().resolve()


def _cache_key(repo_root: Optional[Path]) -> str:
    from autowire.core.utils.io import iter_yaml_files

    from .manager import ENV_PREFIX, PROJECT_CONFIG_DIRNAME

    base = _normalize_repo_root(repo_root)
    env_items = sorted(
        (k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(base / PROJECT_CONFIG_DIRNAME / "config"):
        try:
            st = p.stat()
            files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            files.append((p.name, 0, 0))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{base}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance while the fingerprint is unchanged.
    """
    from .manager import ConfigManager

    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root)
    if key not in _config_cache:
        _config_cache[key] = ConfigManager(normalized_root)._load_config_uncached()
    # NOTE: returns the cached dict instance (treat as immutable)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Drop every cached configuration."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None) -> bool:
    return _cache_key(repo_root) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
