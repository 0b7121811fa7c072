"""Phase timing for resolution runs.

Engine code wraps its phases (filtering, sorting, group finalization) in
``span()``. Nothing is recorded unless a :class:`Profiler` is active for the
current context, which the CLI arranges for ``--profile``.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, Iterator, List, Tuple


_ACTIVE_PROFILER: ContextVar["Profiler | None"] = ContextVar("_ACTIVE_PROFILER", default=None)


@dataclass(frozen=True)
class SpanRecord:
    name: str
    duration_ms: float
    depth: int
    meta: Dict[str, Any]


class Profiler:
    """Records completed spans with their nesting depth."""

    def __init__(self) -> None:
        self._spans: List[SpanRecord] = []
        self._depth = 0

    @property
    def spans(self) -> List[SpanRecord]:
        return list(self._spans)

    @contextmanager
    def span(self, name: str, **meta: Any) -> Iterator[None]:
        start = perf_counter()
        depth = self._depth
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            elapsed = (perf_counter() - start) * 1000.0
            self._spans.append(SpanRecord(name, elapsed, depth, dict(meta)))

    def summary(self) -> List[Tuple[str, float, int]]:
        """``(name, total_ms, calls)`` per span name, slowest first."""
        totals: Dict[str, List[float]] = {}
        for record in self._spans:
            bucket = totals.setdefault(record.name, [0.0, 0])
            bucket[0] += record.duration_ms
            bucket[1] += 1
        rows = [(name, total, int(calls)) for name, (total, calls) in totals.items()]
        rows.sort(key=lambda row: -row[1])
        return rows

    def render(self) -> List[str]:
        return [
            f"[profile] {name}: {total:.2f} ms ({calls}x)"
            for name, total, calls in self.summary()
        ]


@contextmanager
def enable_profiler(profiler: Profiler) -> Iterator[None]:
    token = _ACTIVE_PROFILER.set(profiler)
    try:
        yield
    finally:
        _ACTIVE_PROFILER.reset(token)


@contextmanager
def span(name: str, **meta: Any) -> Iterator[None]:
    profiler = _ACTIVE_PROFILER.get()
    if profiler is None:
        yield
        return
    with profiler.span(name, **meta):
        yield


__all__ = ["Profiler", "SpanRecord", "enable_profiler", "span"]
