"""Tests for GroupAccumulator: merging per-trigger results into one order."""
from __future__ import annotations

from unittest import mock

import pytest

from autowire.core.candidates import CandidateStore
from autowire.core.discovery import CandidateSource
from autowire.core.exceptions import ConstraintCycleError
from autowire.core.group import GroupAccumulator, ResolutionEntry
from autowire.core.metadata import PrecomputedMetadata
from autowire.core.selector import ImportSelector, TriggerMetadata


class PerTriggerSource(CandidateSource):
    """Returns a different candidate list on each call."""

    def __init__(self, *batches) -> None:
        self.batches = [list(b) for b in batches]

    def candidates(self):
        return self.batches.pop(0)


def _group(*batches, metadata=None) -> GroupAccumulator:
    table = PrecomputedMetadata(metadata or {})
    selector = ImportSelector(PerTriggerSource(*batches), metadata=table)
    return GroupAccumulator(selector)


class TestFinalize:
    def test_no_contributions_returns_empty_without_sorting(self) -> None:
        group = _group()
        with mock.patch("autowire.core.group.PrioritySorter") as sorter:
            assert group.finalize() == []
        sorter.assert_not_called()

    def test_single_trigger_round_trip(self) -> None:
        group = _group(["C", "A", "B", "A"])
        app = TriggerMetadata("app")
        group.contribute(app)
        assert group.finalize() == [
            ResolutionEntry("A", app),
            ResolutionEntry("B", app),
            ResolutionEntry("C", app),
        ]

    def test_first_trigger_owns_shared_candidate(self) -> None:
        group = _group(["P", "Q"], ["Q", "R"])
        first, second = TriggerMetadata("first"), TriggerMetadata("second")
        group.contribute(first)
        group.contribute(second)

        result = group.finalize()

        assert [e.name for e in result] == ["P", "Q", "R"]
        assert dict(result)["Q"] is first
        assert dict(result)["R"] is second

    def test_exclusions_apply_across_triggers(self) -> None:
        """An exclusion declared by one trigger removes the candidate everywhere."""
        group = _group(["A", "B"], ["A", "B", "C"])
        group.contribute(TriggerMetadata("first"))
        group.contribute(TriggerMetadata("second", exclude=("B",)))

        assert [e.name for e in group.finalize()] == ["A", "C"]
        assert group.exclusions() == {"B"}

    def test_global_order_uses_constraints(self) -> None:
        metadata = {"Web": {"after": ["Core"]}, "Core": {"priority": 10}}
        group = _group(["Web"], ["Core"], metadata=metadata)
        group.contribute(TriggerMetadata("web"))
        group.contribute(TriggerMetadata("core"))
        assert [e.name for e in group.finalize()] == ["Core", "Web"]

    def test_finalize_twice_gives_same_answer(self) -> None:
        group = _group(["B", "A"])
        group.contribute(TriggerMetadata("app"))
        assert group.finalize() == group.finalize()

    def test_cycle_surfaces_from_finalize(self) -> None:
        metadata = {"A": {"after": ["B"]}, "B": {"after": ["A"]}}
        group = _group(["A", "B"], metadata=metadata)
        group.contribute(TriggerMetadata("app"))
        with pytest.raises(ConstraintCycleError):
            group.finalize()


class TestContribute:
    def test_returns_the_trigger_entry(self) -> None:
        group = _group(["A", "B"])
        entry = group.contribute(TriggerMetadata("app", exclude_name=("B",)))
        assert entry.configurations == ("A",)
        assert group.entries == [entry]
        assert group.provenance("A").name == "app"
        assert group.provenance("B") is None

    def test_uses_supplied_store(self) -> None:
        store = CandidateStore.create(PrecomputedMetadata({"A": {"priority": 5}}))
        selector = ImportSelector(PerTriggerSource(["A", "B"]))
        group = GroupAccumulator(selector, store)
        group.contribute(TriggerMetadata("app"))
        assert [e.name for e in group.finalize()] == ["B", "A"]
