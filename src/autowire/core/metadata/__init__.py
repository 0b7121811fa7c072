"""Read-only ordering metadata: precomputed tables and introspection fallback."""
from __future__ import annotations

from .introspection import Declarations, DeclarationIntrospector, Introspector
from .source import (
    EMPTY_METADATA,
    MetadataSource,
    PrecomputedMetadata,
    load_metadata,
)

__all__ = [
    "Declarations",
    "DeclarationIntrospector",
    "Introspector",
    "EMPTY_METADATA",
    "MetadataSource",
    "PrecomputedMetadata",
    "load_metadata",
]
