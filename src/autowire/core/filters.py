"""Admission filter chain.

Every filter sees the full candidate array, so positions stay aligned across
filters. Positions rejected by an earlier filter are passed as ``None`` to
later ones. A candidate survives only if every filter keeps it.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from time import perf_counter
from typing import Callable, Iterable, List, Optional, Sequence

from autowire.core.exceptions import FilterContractError
from autowire.core.metadata import MetadataSource
from autowire.core.utils.profiling import span

logger = logging.getLogger(__name__)


class AdmissionFilter(ABC):
    """Decides, per position, whether a candidate may be imported.

    Implementations must be deterministic and must not modify ``candidates``.
    """

    @abstractmethod
    def match(
        self, candidates: Sequence[Optional[str]], metadata: MetadataSource
    ) -> Sequence[bool]:
        """Return one boolean per position; ``True`` keeps the candidate."""


class PredicateFilter(AdmissionFilter):
    """Adapts a ``name -> bool`` callable to the filter interface."""

    def __init__(self, predicate: Callable[[str], bool]) -> None:
        self.predicate = predicate

    def match(
        self, candidates: Sequence[Optional[str]], metadata: MetadataSource
    ) -> List[bool]:
        return [name is not None and bool(self.predicate(name)) for name in candidates]


class FilterChain:
    def __init__(self, filters: Iterable[AdmissionFilter] = ()) -> None:
        self.filters = list(filters)

    def __len__(self) -> int:
        return len(self.filters)

    def apply(self, configurations: List[str], metadata: MetadataSource) -> List[str]:
        """Drop every candidate rejected by at least one filter.

        Returns ``configurations`` itself when nothing was rejected.
        """
        start = perf_counter()
        candidates: List[Optional[str]] = list(configurations)
        skip = [False] * len(candidates)
        skipped = False
        with span("filters.apply", filters=len(self.filters), candidates=len(candidates)):
            for admission_filter in self.filters:
                match = list(admission_filter.match(tuple(candidates), metadata))
                if len(match) != len(candidates):
                    raise FilterContractError(
                        f"{type(admission_filter).__name__} returned {len(match)} results "
                        f"for {len(candidates)} candidates",
                        context={"filter": type(admission_filter).__name__},
                    )
                for i, keep in enumerate(match):
                    if not keep:
                        skip[i] = True
                        candidates[i] = None
                        skipped = True
        if not skipped:
            return configurations
        result = [name for i, name in enumerate(configurations) if not skip[i]]
        logger.debug(
            "Filtered %d auto-configuration candidates in %.1f ms",
            len(configurations) - len(result),
            (perf_counter() - start) * 1000.0,
        )
        return result


__all__ = ["AdmissionFilter", "PredicateFilter", "FilterChain"]
