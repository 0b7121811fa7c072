"""Precomputed ordering metadata.

A metadata table is produced ahead of time (for example by a build step) so
that ordering facts can be read without introspecting each candidate. Entries
look like::

    com.example.WebAutoConfiguration:
      priority: -10
      before: [com.example.ErrorAutoConfiguration]
      after: "com.example.CoreAutoConfiguration, com.example.JsonAutoConfiguration"

``before``/``after`` accept a list or a comma-separated string.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from autowire.core.exceptions import ManifestError
from autowire.core.utils.io import read_yaml


def parse_names(raw: Any) -> Tuple[str, ...]:
    """Normalize a list or comma-separated string into unique names, in order."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        parts = raw.split(",")
    else:
        parts = [str(p) for p in raw]
    return tuple(dict.fromkeys(p.strip() for p in parts if p and p.strip()))


class MetadataSource(ABC):
    """Key/value lookup of precomputed ordering facts."""

    @abstractmethod
    def was_precomputed(self, name: str) -> bool:
        ...

    @abstractmethod
    def get_priority(self, name: str) -> Optional[int]:
        ...

    @abstractmethod
    def get_before(self, name: str) -> Optional[Tuple[str, ...]]:
        ...

    @abstractmethod
    def get_after(self, name: str) -> Optional[Tuple[str, ...]]:
        ...


class PrecomputedMetadata(MetadataSource):
    """In-memory metadata table keyed by candidate name."""

    def __init__(self, entries: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._entries: Dict[str, Dict[str, Any]] = {}
        for name, raw in (entries or {}).items():
            self._entries[str(name)] = dict(raw or {})

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def was_precomputed(self, name: str) -> bool:
        return name in self._entries

    def get_priority(self, name: str) -> Optional[int]:
        entry = self._entries.get(name)
        if entry is None or entry.get("priority") is None:
            return None
        return int(entry["priority"])

    def get_before(self, name: str) -> Optional[Tuple[str, ...]]:
        entry = self._entries.get(name)
        if entry is None:
            return None
        return parse_names(entry.get("before"))

    def get_after(self, name: str) -> Optional[Tuple[str, ...]]:
        entry = self._entries.get(name)
        if entry is None:
            return None
        return parse_names(entry.get("after"))


EMPTY_METADATA = PrecomputedMetadata()


def load_metadata(path: Path) -> PrecomputedMetadata:
    """Load a metadata table from a YAML file.

    A missing file yields an empty table; a file whose top level is not a
    mapping is rejected.
    """
    data = read_yaml(Path(path), default={}, raise_on_error=False)
    if not isinstance(data, dict):
        raise ManifestError(
            "Metadata file must contain a mapping of candidate names",
            path=str(path),
        )
    return PrecomputedMetadata(data)


__all__ = ["MetadataSource", "PrecomputedMetadata", "EMPTY_METADATA", "parse_names", "load_metadata"]
