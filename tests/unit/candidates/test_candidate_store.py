"""Tests for CandidateStore lazy resolution and universe collection."""
from __future__ import annotations

from typing import List

from autowire.core.candidates import (
    DEFAULT_PRIORITY,
    CandidateStore,
    FirstMatchProvider,
    IntrospectionFactsProvider,
    OrderingFacts,
    PrecomputedFactsProvider,
)
from autowire.core.exceptions import CandidateNotResolvableError
from autowire.core.metadata import Declarations, Introspector, PrecomputedMetadata


class CountingIntrospector(Introspector):
    """Records every lookup; resolves only names in ``table``."""

    def __init__(self, table=None, *, explode: bool = False) -> None:
        self.table = dict(table or {})
        self.explode = explode
        self.calls: List[str] = []

    def declarations(self, name: str) -> Declarations:
        self.calls.append(name)
        if self.explode:
            raise RuntimeError("metadata reader failed")
        if name not in self.table:
            raise CandidateNotResolvableError(name)
        return self.table[name]

    def is_resolvable(self, name: str) -> bool:
        return name in self.table


class TestFactsResolution:
    def test_precomputed_table_wins_over_introspection(self) -> None:
        introspector = CountingIntrospector({"A": Declarations(priority=99)})
        store = CandidateStore.create(PrecomputedMetadata({"A": {"priority": 3}}), introspector)

        facts = store.get("A")

        assert facts.priority == 3
        assert facts.precomputed is True
        assert introspector.calls == []

    def test_falls_back_to_introspection(self) -> None:
        introspector = CountingIntrospector({"B": Declarations(before=("C",), after=("A",))})
        store = CandidateStore.create(PrecomputedMetadata({}), introspector)

        facts = store.get("B")

        assert facts == OrderingFacts(name="B", before=("C",), after=("A",))
        assert facts.priority == DEFAULT_PRIORITY

    def test_precomputed_entry_without_priority_uses_default(self) -> None:
        store = CandidateStore.create(PrecomputedMetadata({"A": {"before": ["B"]}}))
        assert store.get("A").priority == DEFAULT_PRIORITY
        assert store.get("A").before == ("B",)

    def test_unresolvable_name_is_unavailable_not_an_error(self) -> None:
        store = CandidateStore.create(PrecomputedMetadata({}), CountingIntrospector())
        facts = store.get("nope")
        assert facts.available is False
        assert facts.before == () and facts.after == ()

    def test_any_introspection_failure_means_unavailable(self) -> None:
        store = CandidateStore.create(PrecomputedMetadata({}), CountingIntrospector(explode=True))
        assert store.is_available("A") is False

    def test_negative_results_are_cached(self) -> None:
        introspector = CountingIntrospector()
        store = CandidateStore.create(PrecomputedMetadata({}), introspector)

        store.get("missing")
        store.get("missing")

        assert introspector.calls == ["missing"]
        assert "missing" in store

    def test_explicit_provider_chain(self) -> None:
        provider = FirstMatchProvider(
            [
                PrecomputedFactsProvider(PrecomputedMetadata({"A": {}})),
                IntrospectionFactsProvider(CountingIntrospector({"B": Declarations(priority=1)})),
            ]
        )
        store = CandidateStore(provider)
        assert store.get("A").precomputed is True
        assert store.get("B").priority == 1
        assert store.get("C").available is False


class TestCollect:
    def test_required_names_always_present(self) -> None:
        store = CandidateStore.create(PrecomputedMetadata({"A": {}}))
        universe = store.collect(["A", "Ghost"])
        assert list(universe) == ["A", "Ghost"]
        assert universe["Ghost"].available is False

    def test_follows_references_of_available_candidates(self) -> None:
        metadata = PrecomputedMetadata(
            {
                "A": {"before": ["B"], "after": ["C"]},
                "B": {"after": ["D"]},
                "C": {},
                "D": {},
            }
        )
        store = CandidateStore.create(metadata)
        assert list(store.collect(["A"])) == ["A", "B", "D", "C"]

    def test_unavailable_references_are_left_out(self) -> None:
        store = CandidateStore.create(PrecomputedMetadata({"A": {"after": ["Gone"]}}))
        assert list(store.collect(["A"])) == ["A"]

    def test_unavailable_reference_later_required_is_kept(self) -> None:
        store = CandidateStore.create(PrecomputedMetadata({"A": {"after": ["Gone"]}}))
        assert list(store.collect(["A", "Gone"])) == ["A", "Gone"]
