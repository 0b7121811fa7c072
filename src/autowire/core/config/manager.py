"""
Autowire configuration management (layered YAML plus environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import jsonschema
import yaml

from autowire.core.exceptions import ConfigError
from autowire.core.utils.io import iter_yaml_files, read_json, read_yaml
from autowire.core.utils.merge import deep_merge
from autowire.core.utils.profiling import span
from autowire.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "AUTOWIRE_"
PROJECT_CONFIG_DIRNAME = ".autowire"


class ConfigManager:
    """Load, merge, and validate configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: AUTOWIRE_<section>__<key>
    2. Project config: <repo_root>/.autowire/config/*.yaml (alphabetical order)
    3. Bundled defaults: autowire.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = (repo_root or Path.cwd()).expanduser().resolve()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIRNAME / "config"
        self.schemas_dir = get_data_path("schemas")

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise ConfigError(f"Could not load config file {path}: {exc}", path=str(path)) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping", path=str(path))
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    def validate_schema(self, config: Dict[str, Any], schema_name: str = "config.schema.json") -> None:
        schema = read_json(self.schemas_dir / schema_name)
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigError(
                f"Invalid configuration at {where}: {exc.message}",
                context={"schema": schema_name},
            ) from exc

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_", 1)
        if any(seg == "" for seg in segs):
            logger.warning("Ignoring malformed %s* key: %s%s", ENV_PREFIX, ENV_PREFIX, raw)
            return []
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            path = self._parse_env_key(key[len(ENV_PREFIX):])
            if path:
                yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Any = root
        for part in path[:-1]:
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = lower_map.get(part, part)
            nxt = cur.get(key)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[key] = nxt
            cur = nxt
        leaf = path[-1]
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        key = lower_map.get(leaf, leaf)
        # A plain string bound to a list key is a comma-separated list.
        if isinstance(cur.get(key), list) and isinstance(value, str):
            value = [p.strip() for p in value.split(",") if p.strip()]
        cur[key] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def _load_config_uncached(self, validate: bool = False) -> Dict[str, Any]:
        with span("config.load"):
            cfg: Dict[str, Any] = {}
            cfg = self._load_directory(self.core_config_dir, cfg)
            cfg = self._load_directory(self.project_config_dir, cfg)
            self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self, validate: bool = False) -> Dict[str, Any]:
        """Load configuration using the centralized cache.

        Returned dict should be treated as immutable.
        """
        from .cache import get_cached_config

        cfg = get_cached_config(repo_root=self.repo_root)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key (e.g. ``autoconfigure.exclude``)."""
        cur: Union[Dict[str, Any], Any] = self.load_config()
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_DIRNAME"]
