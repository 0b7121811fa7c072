"""Per-session candidate store.

Facts are resolved lazily and cached for the lifetime of the store, negative
results included. A store belongs to exactly one resolution session and is
not safe for concurrent mutation; give each session its own instance.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from autowire.core.metadata import EMPTY_METADATA, Introspector, MetadataSource

from .facts import OrderingFacts
from .providers import (
    FactsProvider,
    FirstMatchProvider,
    IntrospectionFactsProvider,
    PrecomputedFactsProvider,
)

logger = logging.getLogger(__name__)


class CandidateStore:
    """Lazily resolved :class:`OrderingFacts`, keyed by candidate name."""

    def __init__(self, provider: FactsProvider) -> None:
        self._provider = provider
        self._cache: Dict[str, OrderingFacts] = {}

    @classmethod
    def create(
        cls,
        metadata: Optional[MetadataSource] = None,
        introspector: Optional[Introspector] = None,
    ) -> "CandidateStore":
        """Build a store that reads the metadata table first, then introspects."""
        providers: List[FactsProvider] = [PrecomputedFactsProvider(metadata or EMPTY_METADATA)]
        if introspector is not None:
            providers.append(IntrospectionFactsProvider(introspector))
        return cls(FirstMatchProvider(providers))

    def __contains__(self, name: object) -> bool:
        return name in self._cache

    def get(self, name: str) -> OrderingFacts:
        cached = self._cache.get(name)
        if cached is not None:
            return cached
        facts = self._provider.facts_for(name)
        if facts is None:
            logger.debug("No ordering facts for %s; marking unavailable", name)
            facts = OrderingFacts.unavailable(name)
        else:
            logger.debug(
                "Resolved ordering facts for %s (%s)",
                name,
                "precomputed" if facts.precomputed else "introspected",
            )
        self._cache[name] = facts
        return facts

    def is_available(self, name: str) -> bool:
        return self.get(name).available

    def collect(self, required: Iterable[str]) -> Dict[str, OrderingFacts]:
        """Return the constraint universe reachable from ``required``.

        Required names are always present; unavailable ones keep empty
        constraints. Names reached only through another candidate's
        before/after references are present only when available, and only
        available candidates have their references followed.
        """
        universe: Dict[str, OrderingFacts] = {}
        stack: List[Tuple[Iterator[str], bool]] = [(iter(list(required)), True)]
        while stack:
            names, is_required = stack[-1]
            name = next(names, None)
            if name is None:
                stack.pop()
                continue
            if name in universe:
                continue
            facts = self.get(name)
            if facts.available:
                universe[name] = facts
                stack.append((iter(facts.before + facts.after), False))
            elif is_required:
                universe[name] = OrderingFacts.unavailable(name)
        return universe


__all__ = ["CandidateStore"]
