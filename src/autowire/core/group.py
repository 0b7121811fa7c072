"""Group accumulator.

Several triggers may request auto-configuration in one session. Each
contribution is resolved on its own; :meth:`GroupAccumulator.finalize` then
merges them into one de-duplicated, globally sorted import list.
"""
from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Optional, Set

from autowire.core.candidates import CandidateStore
from autowire.core.selector import AutoConfigurationEntry, ImportSelector, TriggerMetadata
from autowire.core.sorter import PrioritySorter
from autowire.core.utils.profiling import span

logger = logging.getLogger(__name__)


class ResolutionEntry(NamedTuple):
    name: str
    provenance: TriggerMetadata


class GroupAccumulator:
    """Collects per-trigger results for one resolution session."""

    def __init__(self, selector: ImportSelector, store: Optional[CandidateStore] = None) -> None:
        self.selector = selector
        self.store = store if store is not None else CandidateStore.create(selector.metadata)
        self._provenance: Dict[str, TriggerMetadata] = {}
        self._entries: List[AutoConfigurationEntry] = []

    @property
    def entries(self) -> List[AutoConfigurationEntry]:
        return list(self._entries)

    def provenance(self, name: str) -> Optional[TriggerMetadata]:
        return self._provenance.get(name)

    def exclusions(self) -> Set[str]:
        excluded: Set[str] = set()
        for entry in self._entries:
            excluded.update(entry.exclusions)
        return excluded

    def contribute(self, trigger: TriggerMetadata) -> AutoConfigurationEntry:
        entry = self.selector.select(trigger)
        self._entries.append(entry)
        for name in entry.configurations:
            # The first trigger to request a candidate owns its provenance.
            self._provenance.setdefault(name, trigger)
        return entry

    def finalize(self) -> List[ResolutionEntry]:
        if not self._entries:
            return []
        with span("group.finalize", triggers=len(self._entries)):
            excluded = self.exclusions()
            admitted: Dict[str, None] = {}
            for entry in self._entries:
                admitted.update(dict.fromkeys(entry.configurations))
            remaining = [name for name in admitted if name not in excluded]
            ordered = PrioritySorter(self.store).sort(remaining)
        logger.debug(
            "Finalized %d imports from %d triggers", len(ordered), len(self._entries)
        )
        return [ResolutionEntry(name, self._provenance[name]) for name in ordered]


__all__ = ["ResolutionEntry", "GroupAccumulator"]
