"""Session manifests.

A manifest is a YAML document describing everything one resolution session
consumes: the discovered candidate names, the precomputed metadata table,
introspectable declarations, other identities present in the environment and
the triggers requesting auto-configuration. See ``session.schema.json``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml
from jsonschema import Draft202012Validator

from autowire.core.candidates import CandidateStore
from autowire.core.config import AutoConfigureConfig
from autowire.core.discovery import StaticCandidateSource
from autowire.core.events import ImportListener
from autowire.core.exceptions import ManifestError
from autowire.core.filters import AdmissionFilter
from autowire.core.group import GroupAccumulator, ResolutionEntry
from autowire.core.metadata import DeclarationIntrospector, PrecomputedMetadata, load_metadata
from autowire.core.selector import ImportSelector, TriggerMetadata
from autowire.core.utils.io import read_json, read_yaml
from autowire.data import get_data_path


@dataclass
class SessionResult:
    imports: List[ResolutionEntry]
    exclusions: List[str]

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self.imports]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order": [
                {"name": entry.name, "provenance": entry.provenance.name}
                for entry in self.imports
            ],
            "exclusions": list(self.exclusions),
        }


@dataclass
class Session:
    candidates: List[str]
    metadata: PrecomputedMetadata
    introspector: DeclarationIntrospector
    triggers: List[TriggerMetadata] = field(default_factory=list)

    def is_present(self, name: str) -> bool:
        return name in self.metadata or self.introspector.is_resolvable(name)

    def accumulator(
        self,
        config: Optional[AutoConfigureConfig] = None,
        filters: Iterable[AdmissionFilter] = (),
        listeners: Iterable[ImportListener] = (),
    ) -> GroupAccumulator:
        selector = ImportSelector(
            StaticCandidateSource(self.candidates),
            metadata=self.metadata,
            filters=filters,
            listeners=listeners,
            config=config,
            is_present=self.is_present,
        )
        return GroupAccumulator(selector, CandidateStore.create(self.metadata, self.introspector))

    def resolve(
        self,
        config: Optional[AutoConfigureConfig] = None,
        filters: Iterable[AdmissionFilter] = (),
        listeners: Iterable[ImportListener] = (),
    ) -> SessionResult:
        group = self.accumulator(config, filters, listeners)
        for trigger in self.triggers:
            group.contribute(trigger)
        return SessionResult(group.finalize(), sorted(group.exclusions()))


def validate_manifest(data: Any) -> List[str]:
    """Return every schema violation in ``data`` as ``"<path>: <message>"``."""
    schema = read_json(get_data_path("schemas", "session.schema.json"))
    validator = Draft202012Validator(schema)
    issues: List[str] = []
    for err in sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.path))):
        path = "/".join(str(p) for p in err.path) or "<root>"
        issues.append(f"{path}: {err.message}")
    return issues


def _trigger(raw: Dict[str, Any]) -> TriggerMetadata:
    return TriggerMetadata(
        name=str(raw["name"]),
        exclude=tuple(raw.get("exclude") or ()),
        exclude_name=tuple(raw.get("excludeName") or ()),
        attributes=dict(raw.get("attributes") or {}),
    )


def _metadata(raw: Any, base_dir: Optional[Path]) -> PrecomputedMetadata:
    if isinstance(raw, str):
        # A string names a separate metadata file, relative to the manifest.
        return load_metadata((base_dir or Path.cwd()) / raw)
    return PrecomputedMetadata(raw or {})


def session_from_mapping(
    data: Any, *, source: Optional[str] = None, base_dir: Optional[Path] = None
) -> Session:
    issues = validate_manifest(data)
    if issues:
        raise ManifestError(
            f"Invalid session manifest{f' {source}' if source else ''}",
            path=source,
            issues=issues,
        )
    return Session(
        candidates=list(data["candidates"]),
        metadata=_metadata(data.get("metadata"), base_dir),
        introspector=DeclarationIntrospector(
            data.get("declarations") or {}, known=data.get("resolvable") or ()
        ),
        triggers=[_trigger(t) for t in data["triggers"]],
    )


def load_session(path: Path) -> Session:
    path = Path(path)
    if not path.exists():
        raise ManifestError(f"Session manifest not found: {path}", path=str(path))
    try:
        data = read_yaml(path, default={}, raise_on_error=True)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ManifestError(f"Could not parse {path}: {exc}", path=str(path)) from exc
    return session_from_mapping(data, source=str(path), base_dir=path.parent)


__all__ = [
    "Session",
    "SessionResult",
    "validate_manifest",
    "session_from_mapping",
    "load_session",
]
