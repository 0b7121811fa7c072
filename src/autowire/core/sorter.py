"""Priority sorter.

Turns a set of required candidate names into the single order in which they
are activated. Three passes refine one another:

1. names are sorted lexicographically, which makes the result reproducible;
2. a stable sort by ``priority`` (lower first) keeps lexicographic order among
   equal priorities;
3. a depth-first walk places every candidate after the candidates it must
   follow, so before/after constraints override priority where they disagree.

The walk runs over the whole constraint universe, including candidates that
are only referenced by other candidates' constraints. Those candidates shape
the relative order of required ones but are dropped from the result.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from autowire.core.candidates import CandidateStore, OrderingFacts
from autowire.core.exceptions import ConstraintCycleError
from autowire.core.utils.profiling import span

logger = logging.getLogger(__name__)


class _ConstraintGraph:
    """Must-precede relation over a candidate universe."""

    def __init__(self, universe: Dict[str, OrderingFacts]) -> None:
        self.universe = universe
        self._preceded_by: Dict[str, List[str]] = {}
        # Reverse index of ``before`` edges in universe order.
        self._before_index: Dict[str, List[str]] = {}
        for name, facts in universe.items():
            for target in facts.before:
                self._before_index.setdefault(target, []).append(name)

    def __contains__(self, name: object) -> bool:
        return name in self.universe

    def must_precede(self, name: str) -> List[str]:
        """Names that must be placed before ``name``.

        The candidate's own ``after`` entries come first, in declaration
        order, followed by every universe member listing ``name`` in its
        ``before`` set.
        """
        cached = self._preceded_by.get(name)
        if cached is not None:
            return cached
        facts = self.universe.get(name)
        ordered = dict.fromkeys(facts.after if facts is not None else ())
        for source in self._before_index.get(name, ()):
            ordered.setdefault(source)
        result = list(ordered)
        self._preceded_by[name] = result
        return result


class PrioritySorter:
    """Orders candidates by name, then priority, then before/after constraints."""

    def __init__(self, store: CandidateStore) -> None:
        self.store = store

    def sort(self, names: Iterable[str]) -> List[str]:
        required = list(dict.fromkeys(names))
        if not required:
            return []
        with span("sorter.sort", candidates=len(required)):
            universe = self.store.collect(required)
            ordered = sorted(required)
            ordered.sort(key=lambda n: universe[n].priority)
            placed = self._sort_by_constraints(_ConstraintGraph(universe), ordered)
        wanted = set(required)
        result = [name for name in placed if name in wanted]
        logger.debug(
            "Sorted %d candidates (%d in constraint universe)", len(result), len(universe)
        )
        return result

    def _sort_by_constraints(self, graph: _ConstraintGraph, ordered: List[str]) -> List[str]:
        """Depth-first placement with white/gray/black marking.

        ``in_progress`` holds gray nodes on the current path, ``placed`` the
        black ones in output order. Revisiting a gray node is a cycle.
        """
        placed: Dict[str, None] = {}
        in_progress: Set[str] = set()
        seeded = set(ordered)
        work = ordered + [n for n in graph.universe if n not in seeded]
        for start in work:
            if start in placed:
                continue
            self._visit(graph, start, placed, in_progress)
        return list(placed)

    def _visit(
        self,
        graph: _ConstraintGraph,
        start: str,
        placed: Dict[str, None],
        in_progress: Set[str],
    ) -> None:
        stack: List[Tuple[str, Iterator[str]]] = [(start, iter(graph.must_precede(start)))]
        in_progress.add(start)
        while stack:
            current, prerequisites = stack[-1]
            nxt: Optional[str] = None
            for candidate in prerequisites:
                if candidate in in_progress:
                    raise ConstraintCycleError(current, candidate)
                if candidate not in placed and candidate in graph:
                    nxt = candidate
                    break
            if nxt is not None:
                in_progress.add(nxt)
                stack.append((nxt, iter(graph.must_precede(nxt))))
                continue
            stack.pop()
            in_progress.discard(current)
            placed[current] = None


__all__ = ["PrioritySorter"]
