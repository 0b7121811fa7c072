"""Tests for ImportSelector, the per-trigger pipeline, and listener broadcast."""
from __future__ import annotations

from typing import AbstractSet, List, Sequence

import pytest

from autowire.core.config import AutoConfigureConfig
from autowire.core.discovery import StaticCandidateSource
from autowire.core.events import EventNotifier, ImportListener
from autowire.core.exceptions import InvalidExclusionError, MissingCandidateSourceError
from autowire.core.filters import PredicateFilter
from autowire.core.metadata import PrecomputedMetadata
from autowire.core.selector import EMPTY_ENTRY, AutoConfigurationEntry, ImportSelector, TriggerMetadata


class RecordingListener(ImportListener):
    def __init__(self, log: List[tuple], label: str = "listener") -> None:
        self.log = log
        self.label = label

    def on_event(self, configurations: Sequence[str], exclusions: AbstractSet[str]) -> None:
        self.log.append((self.label, tuple(configurations), frozenset(exclusions)))


class FailingListener(ImportListener):
    def on_event(self, configurations, exclusions) -> None:
        raise RuntimeError("listener misconfigured")


def _selector(candidates, **kwargs) -> ImportSelector:
    return ImportSelector(StaticCandidateSource(candidates), **kwargs)


class TestSelect:
    def test_admits_all_candidates_without_rules(self) -> None:
        entry = _selector(["B", "A"]).select(TriggerMetadata("app"))
        assert entry == AutoConfigurationEntry(("B", "A"), frozenset())

    def test_duplicates_removed_keeping_first_occurrence(self) -> None:
        entry = _selector(["B", "A", "B", "C", "A"]).select(TriggerMetadata("app"))
        assert entry.configurations == ("B", "A", "C")

    def test_trigger_and_property_exclusions_removed(self) -> None:
        config = AutoConfigureConfig.from_mapping({"autoconfigure": {"exclude": ["C"]}})
        selector = _selector(["A", "B", "C", "D"], config=config)
        entry = selector.select(TriggerMetadata("app", exclude=("A",), exclude_name=("B",)))
        assert entry.configurations == ("D",)
        assert entry.exclusions == {"A", "B", "C"}

    def test_invalid_exclusion_aborts(self) -> None:
        selector = _selector(["A"], is_present={"A", "Service"}.__contains__)
        with pytest.raises(InvalidExclusionError):
            selector.select(TriggerMetadata("app", exclude=("Service",)))

    def test_metadata_table_defines_presence_by_default(self) -> None:
        metadata = PrecomputedMetadata({"A": {}, "Known": {}})
        selector = _selector(["A"], metadata=metadata)
        with pytest.raises(InvalidExclusionError) as exc:
            selector.select(TriggerMetadata("app", exclude=("Known", "Unknown")))
        assert exc.value.exclusions == ["Known"]

    def test_filters_run_after_exclusions(self) -> None:
        seen: List[str] = []

        def keep(name: str) -> bool:
            seen.append(name)
            return name != "B"

        selector = _selector(["A", "B", "C"], filters=[PredicateFilter(keep)])
        entry = selector.select(TriggerMetadata("app", exclude=("C",)))
        assert entry.configurations == ("A",)
        assert seen == ["A", "B"]

    def test_no_candidates_is_a_configuration_fault(self) -> None:
        with pytest.raises(MissingCandidateSourceError) as exc:
            _selector([]).select(TriggerMetadata("app"))
        assert exc.value.context["trigger"] == "app"

    def test_disabled_selects_nothing_and_fires_nothing(self) -> None:
        log: List[tuple] = []
        config = AutoConfigureConfig.from_mapping({"autoconfigure": {"enabled": False}})
        selector = _selector([], config=config, listeners=[RecordingListener(log)])
        assert selector.select(TriggerMetadata("app")) is EMPTY_ENTRY
        assert log == []


class TestImportEvents:
    def test_listeners_notified_in_registration_order(self) -> None:
        log: List[tuple] = []
        notifier = EventNotifier([RecordingListener(log, "first")])
        notifier.register(RecordingListener(log, "second"))
        selector = _selector(["A", "B"], listeners=notifier)

        selector.select(TriggerMetadata("app", exclude=("B",)))

        assert log == [
            ("first", ("A",), frozenset({"B"})),
            ("second", ("A",), frozenset({"B"})),
        ]

    def test_fired_once_per_trigger(self) -> None:
        log: List[tuple] = []
        selector = _selector(["A"], listeners=[RecordingListener(log)])
        selector.select(TriggerMetadata("one"))
        selector.select(TriggerMetadata("two"))
        assert len(log) == 2

    def test_listener_failure_propagates(self) -> None:
        log: List[tuple] = []
        selector = _selector(["A"], listeners=[FailingListener(), RecordingListener(log)])
        with pytest.raises(RuntimeError, match="listener misconfigured"):
            selector.select(TriggerMetadata("app"))
        assert log == []


class TestEntry:
    def test_entry_is_immutable(self) -> None:
        entry = AutoConfigurationEntry(["A"], {"B"})
        assert entry.configurations == ("A",)
        with pytest.raises(AttributeError):
            entry.configurations = ()  # type: ignore[misc]

    def test_empty_entry(self) -> None:
        assert EMPTY_ENTRY.configurations == ()
        assert EMPTY_ENTRY.exclusions == frozenset()
