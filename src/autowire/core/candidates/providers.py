"""Ordering-facts providers.

Two sources of facts exist: the precomputed metadata table and direct
introspection of a candidate's declarations. :class:`FirstMatchProvider`
composes them so the table is consulted first.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from autowire.core.metadata import Introspector, MetadataSource

from .facts import DEFAULT_PRIORITY, OrderingFacts

logger = logging.getLogger(__name__)


class FactsProvider(ABC):
    @abstractmethod
    def facts_for(self, name: str) -> Optional[OrderingFacts]:
        """Return facts for ``name`` or ``None`` when this provider has no record."""


class PrecomputedFactsProvider(FactsProvider):
    def __init__(self, metadata: MetadataSource) -> None:
        self.metadata = metadata

    def facts_for(self, name: str) -> Optional[OrderingFacts]:
        if not self.metadata.was_precomputed(name):
            return None
        priority = self.metadata.get_priority(name)
        return OrderingFacts(
            name=name,
            priority=DEFAULT_PRIORITY if priority is None else priority,
            before=tuple(self.metadata.get_before(name) or ()),
            after=tuple(self.metadata.get_after(name) or ()),
            precomputed=True,
        )


class IntrospectionFactsProvider(FactsProvider):
    def __init__(self, introspector: Introspector) -> None:
        self.introspector = introspector

    def facts_for(self, name: str) -> Optional[OrderingFacts]:
        # Any failure means the candidate cannot be read in this environment.
        try:
            declared = self.introspector.declarations(name)
        except Exception as exc:
            logger.debug("Ordering declarations unavailable for %s: %s", name, exc)
            return None
        return OrderingFacts(
            name=name,
            priority=DEFAULT_PRIORITY if declared.priority is None else declared.priority,
            before=tuple(declared.before),
            after=tuple(declared.after),
        )


class FirstMatchProvider(FactsProvider):
    def __init__(self, providers: Sequence[FactsProvider]) -> None:
        self.providers = list(providers)

    def facts_for(self, name: str) -> Optional[OrderingFacts]:
        for provider in self.providers:
            facts = provider.facts_for(name)
            if facts is not None:
                return facts
        return None


__all__ = [
    "FactsProvider",
    "PrecomputedFactsProvider",
    "IntrospectionFactsProvider",
    "FirstMatchProvider",
]
