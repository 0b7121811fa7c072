"""Domain configuration for auto-configuration selection."""
from __future__ import annotations

from functools import cached_property
from typing import Any, List

from autowire.core.exceptions import ConfigError

from .base import BaseDomainConfig

_TRUE = {"true", "on", "yes", "1"}
_FALSE = {"false", "off", "no", "0"}


def _as_flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}", context={"key": key})


class AutoConfigureConfig(BaseDomainConfig):
    """Accessor for the ``autoconfigure`` section.

    Usage:
        settings = AutoConfigureConfig(repo_root=Path("/path/to/project"))
        if settings.enabled:
            excluded = settings.exclude
    """

    def _config_section(self) -> str:
        return "autoconfigure"

    @cached_property
    def enabled(self) -> bool:
        """Master switch; when false every trigger selects nothing."""
        return _as_flag("autoconfigure.enabled", self.section.get("enabled", True))

    @cached_property
    def exclude(self) -> List[str]:
        """Externally configured exclusions. Absent key yields an empty list."""
        raw = self.section.get("exclude") or []
        if isinstance(raw, str):
            raw = raw.split(",")
        elif not isinstance(raw, (list, tuple)):
            raw = [raw]
        return [str(name).strip() for name in raw if str(name).strip()]


__all__ = ["AutoConfigureConfig"]
