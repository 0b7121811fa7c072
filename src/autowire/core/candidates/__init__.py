"""Candidate ordering facts and their per-session store."""
from __future__ import annotations

from .facts import DEFAULT_PRIORITY, HIGHEST_PRIORITY, LOWEST_PRIORITY, OrderingFacts
from .providers import (
    FactsProvider,
    FirstMatchProvider,
    IntrospectionFactsProvider,
    PrecomputedFactsProvider,
)
from .store import CandidateStore

__all__ = [
    "DEFAULT_PRIORITY",
    "HIGHEST_PRIORITY",
    "LOWEST_PRIORITY",
    "OrderingFacts",
    "FactsProvider",
    "FirstMatchProvider",
    "IntrospectionFactsProvider",
    "PrecomputedFactsProvider",
    "CandidateStore",
]
