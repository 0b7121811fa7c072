"""Autowire configuration system.

Usage:
    from autowire.core.config import ConfigManager, AutoConfigureConfig

    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    settings = AutoConfigureConfig(repo_root=Path("/path/to/project"))
    settings.enabled, settings.exclude
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached
from .domains import AutoConfigureConfig
from .manager import ConfigManager

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "AutoConfigureConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
]
