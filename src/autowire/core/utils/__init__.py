"""Shared helpers: YAML/JSON reading, deep merge, profiling spans."""
from __future__ import annotations

from .io import iter_yaml_files, read_json, read_yaml
from .merge import deep_merge, merge_arrays
from .profiling import Profiler, enable_profiler, span

__all__ = [
    "iter_yaml_files",
    "read_json",
    "read_yaml",
    "deep_merge",
    "merge_arrays",
    "Profiler",
    "enable_profiler",
    "span",
]
