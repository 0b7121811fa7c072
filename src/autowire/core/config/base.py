"""Base class for domain-specific configuration accessors."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Typed, cached access to one top-level config section.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("mySetting", "default")
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self._repo_root = repo_root
        self._config = get_cached_config(repo_root=repo_root)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]):
        """Build an accessor over an already loaded config dict."""
        inst = cls.__new__(cls)
        inst._repo_root = None
        inst._config = dict(config)
        return inst

    @property
    def repo_root(self) -> Path:
        return self._repo_root or Path.cwd()

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""

    @cached_property
    def section(self) -> Dict[str, Any]:
        return self._config.get(self._config_section(), {}) or {}


__all__ = ["BaseDomainConfig"]
