"""Tests for phase timing spans."""
from __future__ import annotations

from autowire.core.utils.profiling import Profiler, enable_profiler, span


class TestSpans:
    def test_span_is_noop_without_profiler(self) -> None:
        with span("phase"):
            pass

    def test_nested_spans_record_depth(self) -> None:
        profiler = Profiler()
        with enable_profiler(profiler):
            with span("outer"):
                with span("inner", candidates=3):
                    pass
        records = {r.name: r for r in profiler.spans}
        assert records["outer"].depth == 0
        assert records["inner"].depth == 1
        assert records["inner"].meta == {"candidates": 3}

    def test_summary_counts_calls(self) -> None:
        profiler = Profiler()
        with enable_profiler(profiler):
            for _ in range(3):
                with span("sorter.sort"):
                    pass
        (name, total, calls), = profiler.summary()
        assert name == "sorter.sort"
        assert calls == 3
        assert total >= 0.0
        assert profiler.render()[0].startswith("[profile] sorter.sort: ")
