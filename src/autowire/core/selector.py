"""Per-trigger auto-configuration selection.

One trigger (an entry point that enables auto-configuration) is resolved in
a fixed sequence: enabled check, discovery, de-duplication, exclusion
resolution and validation, filtering, and finally the import event.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Iterable, Mapping, Optional, Tuple

from autowire.core.config import AutoConfigureConfig
from autowire.core.discovery import CandidateSource
from autowire.core.events import EventNotifier, ImportListener
from autowire.core.exceptions import MissingCandidateSourceError
from autowire.core.exclusions import ExclusionResolver
from autowire.core.filters import AdmissionFilter, FilterChain
from autowire.core.metadata import EMPTY_METADATA, MetadataSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TriggerMetadata:
    """Provenance of one import request plus the exclusions it declares."""

    name: str
    exclude: Tuple[str, ...] = ()
    exclude_name: Tuple[str, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict, hash=False, compare=False)


@dataclass(frozen=True)
class AutoConfigurationEntry:
    """Admitted candidates, in discovery order, and the exclusions applied."""

    configurations: Tuple[str, ...] = ()
    exclusions: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "configurations", tuple(self.configurations))
        object.__setattr__(self, "exclusions", frozenset(self.exclusions))


EMPTY_ENTRY = AutoConfigurationEntry()


class ImportSelector:
    def __init__(
        self,
        candidate_source: CandidateSource,
        *,
        metadata: Optional[MetadataSource] = None,
        filters: Iterable[AdmissionFilter] | FilterChain = (),
        listeners: Iterable[ImportListener] | EventNotifier = (),
        config: Optional[AutoConfigureConfig] = None,
        is_present: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self.candidate_source = candidate_source
        self.metadata = metadata if metadata is not None else EMPTY_METADATA
        self.filter_chain = filters if isinstance(filters, FilterChain) else FilterChain(filters)
        self.notifier = listeners if isinstance(listeners, EventNotifier) else EventNotifier(listeners)
        self.config = config if config is not None else AutoConfigureConfig.from_mapping({})
        self.exclusion_resolver = ExclusionResolver(
            is_present=is_present if is_present is not None else self.metadata.was_precomputed,
            property_exclusions=self.config.exclude,
        )

    def is_enabled(self, trigger: TriggerMetadata) -> bool:
        return self.config.enabled

    def get_candidates(self, trigger: TriggerMetadata) -> list[str]:
        configurations = list(self.candidate_source.candidates())
        if not configurations:
            raise MissingCandidateSourceError(
                "No auto-configuration candidates found. If you are using custom "
                "packaging, make sure the candidate manifest is present and correct.",
                context={"trigger": trigger.name},
            )
        return configurations

    def select(self, trigger: TriggerMetadata) -> AutoConfigurationEntry:
        if not self.is_enabled(trigger):
            logger.info("Auto-configuration disabled; %s imports nothing", trigger.name)
            return EMPTY_ENTRY
        configurations = list(dict.fromkeys(self.get_candidates(trigger)))
        exclusions = self.exclusion_resolver.resolve(trigger.exclude, trigger.exclude_name)
        self.exclusion_resolver.check(configurations, exclusions)
        excluded = set(exclusions)
        configurations = [name for name in configurations if name not in excluded]
        configurations = self.filter_chain.apply(configurations, self.metadata)
        logger.debug(
            "Trigger %s: %d admitted, %d excluded",
            trigger.name,
            len(configurations),
            len(excluded),
        )
        self.notifier.fire(configurations, excluded)
        return AutoConfigurationEntry(configurations, excluded)


__all__ = ["TriggerMetadata", "AutoConfigurationEntry", "EMPTY_ENTRY", "ImportSelector"]
